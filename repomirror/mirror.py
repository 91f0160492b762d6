"""Filtered, annotated mirroring of a source tree."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .config import DEFAULT_ENCODING
from .errors import FileOperationError, ReadError, WriteError
from .ignore import IgnoreRuleSet, is_hidden_directory
from .logging import get_logger
from .metadata import MetadataCollector
from .models import Catalog, FileMetadata, format_timestamp

HIERARCHY_SEPARATOR = " > "
ROOT_DIRECTORY_LABEL = "root"


def render_header(metadata: FileMetadata) -> str:
    return (
        "\n/*\n"
        f"* Project Name: {metadata.repo_name}\n"
        f"* File Name: {metadata.file_name}\n"
        f"* File Size: {metadata.file_size} bytes\n"
        f"* Last Modified: {format_timestamp(metadata.last_modified)}\n"
        f"* Language: {metadata.language}\n"
        f"* Hierarchy: {HIERARCHY_SEPARATOR.join(metadata.hierarchy)}\n"
        f"* Start of file: {metadata.file_path}\n"
        "*/"
    )


def render_footer(metadata: FileMetadata) -> str:
    return f"/* End of file: {metadata.file_path} */"


def annotate(content: str, metadata: FileMetadata) -> str:
    """Wrap *content* in the metadata header and end-of-file marker."""
    return f"{render_header(metadata)}\n{content}\n{render_footer(metadata)}"


@dataclass
class TraversalContext:
    """State owned by a single mirroring invocation."""

    repo_name: str
    records: List[FileMetadata] = field(default_factory=list)
    processed: int = 0
    skipped: int = 0
    ignored: int = 0
    skipped_paths: List[str] = field(default_factory=list)
    ignored_paths: List[str] = field(default_factory=list)
    directory_counts: Counter[str] = field(default_factory=Counter)

    def record(self, metadata: FileMetadata) -> None:
        self.records.append(metadata)
        self.processed += 1
        directory = "/".join(metadata.hierarchy) or ROOT_DIRECTORY_LABEL
        self.directory_counts[directory] += 1

    def skip(self, relative_path: str) -> None:
        self.skipped += 1
        self.skipped_paths.append(relative_path)

    def ignore(self, relative_path: str) -> None:
        self.ignored += 1
        self.ignored_paths.append(relative_path)

    def catalog(self) -> Catalog:
        return Catalog(repo_name=self.repo_name, metadata=list(self.records))


# (source directory, destination directory, path relative to the source root)
_Frame = Tuple[Path, Path, str]


class DirectoryMirror:
    """Walks a source tree depth-first and writes annotated copies.

    The walk is iterative so deep trees do not hit the recursion limit. A
    file's metadata joins the catalog only after its annotated copy has been
    written, so every catalog entry resolves to a mirrored file.
    """

    def __init__(
        self,
        source_root: Path,
        destination_root: Path,
        rules: IgnoreRuleSet,
        *,
        repo_name: str | None = None,
        encoding: str = DEFAULT_ENCODING,
        collector: MetadataCollector | None = None,
    ) -> None:
        self.source_root = Path(source_root)
        self.destination_root = Path(destination_root)
        self.rules = rules
        self.repo_name = repo_name or self.source_root.name
        self.encoding = encoding
        self.collector = collector or MetadataCollector(self.source_root)
        self.logger = get_logger("mirror")

    def run(self, *, dry_run: bool = False) -> TraversalContext:
        """Mirror the whole tree and return the populated traversal context."""
        context = TraversalContext(repo_name=self.repo_name)
        stack: List[_Frame] = [(self.source_root, self.destination_root, "")]

        while stack:
            source_dir, dest_dir, relative_dir = stack.pop()
            if not dry_run and not self._ensure_directory(dest_dir, relative_dir, context):
                continue

            entries = self._list_directory(source_dir, relative_dir, context)
            subdirectories: List[_Frame] = []
            for entry in entries:
                relative_path = f"{relative_dir}/{entry.name}" if relative_dir else entry.name
                source_path = Path(entry.path)
                dest_path = dest_dir / entry.name

                if self._is_directory(entry):
                    if entry.is_symlink():
                        self.logger.debug("Ignored symlinked directory: %s", relative_path)
                        context.ignore(relative_path)
                        continue
                    if is_hidden_directory(entry.name):
                        self.logger.debug("Ignored hidden directory: %s", relative_path)
                        context.ignore(relative_path)
                        continue
                    if self.rules.ignores(relative_path, is_dir=True):
                        self.logger.debug("Ignored: %s", relative_path)
                        context.ignore(relative_path)
                        continue
                    subdirectories.append((source_path, dest_path, relative_path))
                    continue

                if self.rules.ignores(relative_path):
                    self.logger.debug("Ignored: %s", relative_path)
                    context.ignore(relative_path)
                    continue

                self._mirror_file(source_path, dest_path, relative_path, context, dry_run=dry_run)

            # Reverse so the first listed subdirectory is walked first.
            stack.extend(reversed(subdirectories))

        return context

    # ------------------------------------------------------------------
    # Internal helpers

    def _mirror_file(
        self,
        source_path: Path,
        dest_path: Path,
        relative_path: str,
        context: TraversalContext,
        *,
        dry_run: bool,
    ) -> None:
        try:
            metadata = self.collector.collect(source_path, self.repo_name)
            content = self._read(source_path)
            if not dry_run:
                self._write(dest_path, annotate(content, metadata))
        except FileOperationError as exc:
            self.logger.warning("Skipped %s: %s", relative_path, exc)
            context.skip(relative_path)
            return
        context.record(metadata)

    def _read(self, path: Path) -> str:
        try:
            with path.open("r", encoding=self.encoding, newline="") as handle:
                return handle.read()
        except UnicodeError as exc:
            raise ReadError(path, f"Could not decode as {self.encoding}") from exc
        except OSError as exc:
            raise ReadError(path, f"Could not read file ({exc.strerror or exc})") from exc

    def _write(self, path: Path, content: str) -> None:
        try:
            with path.open("w", encoding=self.encoding, newline="") as handle:
                handle.write(content)
        except UnicodeError as exc:
            self._discard(path)
            raise WriteError(path, f"Could not encode mirror file as {self.encoding}") from exc
        except OSError as exc:
            self._discard(path)
            raise WriteError(path, f"Could not write mirror file ({exc.strerror or exc})") from exc

    def _discard(self, path: Path) -> None:
        # A partial copy must not outlive a failed write.
        if not path.is_file():
            return
        try:
            path.unlink()
        except OSError as exc:
            self.logger.warning("Could not remove partial mirror file %s: %s", path, exc)

    def _ensure_directory(self, path: Path, relative_dir: str, context: TraversalContext) -> bool:
        if path.is_dir():
            return True
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self.logger.warning("Could not create mirror directory %s: %s", path, exc)
            context.skip(relative_dir or ".")
            return False
        self.logger.debug("Created directory: %s", path)
        return True

    def _list_directory(
        self, path: Path, relative_dir: str, context: TraversalContext
    ) -> List[os.DirEntry[str]]:
        try:
            with os.scandir(path) as iterator:
                return sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            self.logger.warning("Could not list directory %s: %s", relative_dir or path, exc)
            context.skip(relative_dir or ".")
            return []

    @staticmethod
    def _is_directory(entry: os.DirEntry[str]) -> bool:
        try:
            return entry.is_dir()
        except OSError:
            return False


__all__ = [
    "DirectoryMirror",
    "HIERARCHY_SEPARATOR",
    "TraversalContext",
    "annotate",
    "render_footer",
    "render_header",
]
