"""End-to-end mirroring run: validate, filter, mirror, catalog."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .catalog import CatalogWriter
from .config import MirrorConfig, load_config
from .errors import InvalidSourceRoot, RepoMirrorError
from .ignore import IgnoreRuleSet, builtin_patterns, escape_path, load_ignore_rules
from .logging import active_log_file, get_logger
from .mirror import DirectoryMirror, TraversalContext
from .models import Catalog


@dataclass
class MirrorResult:
    """Outcome of a mirroring run."""

    source_root: Path
    mirror_root: Path
    catalog_path: Path
    context: TraversalContext
    dry_run: bool = False

    @property
    def catalog(self) -> Catalog:
        return self.context.catalog()


class MirrorPipeline:
    """Coordinates a single mirroring run over one source tree."""

    def __init__(self, writer: CatalogWriter | None = None) -> None:
        self.writer = writer or CatalogWriter()
        self.logger = get_logger("pipeline")

    def run(
        self,
        source: str | Path,
        *,
        destination: str | Path | None = None,
        catalog_path: str | Path | None = None,
        dry_run: bool = False,
    ) -> MirrorResult:
        """Mirror *source* and write its catalog.

        Per-file failures are logged and counted; InvalidSourceRoot,
        ConfigError and CatalogWriteError abort the run.
        """
        source_root = self._validate_source(source)
        config = load_config(source_root)
        mirror_root = _resolve(destination) if destination is not None else config.mirror_path
        catalog_file = _resolve(catalog_path) if catalog_path is not None else config.catalog_path
        self.logger.info("Mirroring %s into %s", source_root, mirror_root)

        rules = self._build_rules(config, source_root, mirror_root, catalog_file)
        if not dry_run:
            self._prepare_destination(mirror_root, source_root, clean=config.clean_destination)

        mirror = DirectoryMirror(
            source_root,
            mirror_root,
            rules,
            repo_name=source_root.name,
            encoding=config.encoding,
        )
        context = mirror.run(dry_run=dry_run)

        if not dry_run:
            self.writer.write(context.catalog(), catalog_file)
        self._log_summary(context, dry_run=dry_run)

        return MirrorResult(
            source_root=source_root,
            mirror_root=mirror_root,
            catalog_path=catalog_file,
            context=context,
            dry_run=dry_run,
        )

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _validate_source(source: str | Path) -> Path:
        try:
            root = Path(source).expanduser().resolve()
        except (OSError, RuntimeError) as exc:
            raise InvalidSourceRoot(f"Could not resolve source path '{source}': {exc}") from exc
        if not root.exists():
            raise InvalidSourceRoot(f"Source directory '{source}' does not exist")
        if not root.is_dir():
            raise InvalidSourceRoot(f"Source path '{source}' is not a directory")
        return root

    def _build_rules(
        self,
        config: MirrorConfig,
        source_root: Path,
        mirror_root: Path,
        catalog_file: Path,
    ) -> IgnoreRuleSet:
        builtins = builtin_patterns(mirror_dir=config.mirror_dir, catalog_file=config.catalog_file)
        # Outputs placed inside the source under custom names are excluded by anchored rules.
        anchored: List[str] = []
        mirror_rel = _relative_inside(mirror_root, source_root)
        if mirror_rel:
            anchored.append(f"/{escape_path(mirror_rel)}/")
        catalog_rel = _relative_inside(catalog_file, source_root)
        if catalog_rel:
            anchored.append(f"/{escape_path(catalog_rel)}")
        log_file = active_log_file()
        log_rel = _relative_inside(_resolve(log_file), source_root) if log_file else None
        if log_rel:
            anchored.append(f"/{escape_path(log_rel)}")
        return load_ignore_rules(
            config.ignore_path,
            builtins=[*builtins, *anchored],
            extra_patterns=config.exclude_paths,
        )

    def _prepare_destination(self, mirror_root: Path, source_root: Path, *, clean: bool) -> None:
        if mirror_root == source_root or source_root.is_relative_to(mirror_root):
            raise RepoMirrorError(
                f"Refusing to use {mirror_root} as mirror destination: it contains the source tree"
            )
        if mirror_root.exists() and not mirror_root.is_dir():
            raise RepoMirrorError(f"Mirror destination {mirror_root} exists and is not a directory")
        if mirror_root.exists():
            if clean:
                self.logger.info("Mirror directory already exists; deleting %s", mirror_root)
                try:
                    shutil.rmtree(mirror_root)
                except OSError as exc:
                    raise RepoMirrorError(f"Could not remove stale mirror {mirror_root}: {exc}") from exc
            else:
                self.logger.warning(
                    "Reusing existing mirror %s; files removed from the source stay stale",
                    mirror_root,
                )
        try:
            mirror_root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RepoMirrorError(f"Could not create mirror directory {mirror_root}: {exc}") from exc

    def _log_summary(self, context: TraversalContext, *, dry_run: bool) -> None:
        label = "would be mirrored" if dry_run else "mirrored"
        self.logger.info(
            "Files %s: %d, skipped: %d, ignored: %d",
            label,
            context.processed,
            context.skipped,
            context.ignored,
        )
        for directory, count in sorted(context.directory_counts.items()):
            self.logger.debug("%s: %d", directory, count)
        for path in context.skipped_paths:
            self.logger.debug("Skipped: %s", path)


def _resolve(value: str | Path) -> Path:
    return Path(value).expanduser().resolve()


def _relative_inside(path: Path, root: Path) -> str | None:
    if path == root or not path.is_relative_to(root):
        return None
    return path.relative_to(root).as_posix()


__all__ = ["MirrorPipeline", "MirrorResult"]
