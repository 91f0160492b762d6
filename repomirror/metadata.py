"""Per-file metadata collection."""

from __future__ import annotations

import os
import stat
from datetime import UTC, datetime
from pathlib import Path

from .errors import StatError
from .languages import classify
from .models import FileMetadata


def relative_posix(path: Path, root: Path) -> str:
    """Return *path* relative to *root* with forward-slash separators."""
    return Path(os.path.relpath(path, root)).as_posix()


class MetadataCollector:
    """Builds FileMetadata records for files below a traversal root."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def collect(self, path: Path, repo_name: str) -> FileMetadata:
        """Stat *path* and return its metadata record.

        Raises StatError when the entry cannot be inspected, is not a regular
        file or lies outside the traversal root.
        """
        path = Path(path)
        try:
            stat_result = path.stat()
        except OSError as exc:
            raise StatError(path, f"Could not stat file ({exc.strerror or exc})") from exc
        if not stat.S_ISREG(stat_result.st_mode):
            raise StatError(path, "Not a regular file")

        file_path = relative_posix(path, self.root)
        if file_path == ".." or file_path.startswith("../"):
            raise StatError(path, f"File is outside traversal root {self.root}")

        return FileMetadata(
            file_name=path.name,
            file_path=file_path,
            last_modified=datetime.fromtimestamp(stat_result.st_mtime, tz=UTC),
            file_size=stat_result.st_size,
            language=classify(path),
            repo_name=repo_name,
            hierarchy=file_path.split("/")[:-1],
        )


__all__ = ["MetadataCollector", "relative_posix"]
