"""Exception hierarchy for mirroring runs."""

from __future__ import annotations

from pathlib import Path


class RepoMirrorError(Exception):
    """Base class for repomirror failures."""


class InvalidSourceRoot(RepoMirrorError):
    """Raised when the source directory is missing or not a directory."""


class FileOperationError(RepoMirrorError):
    """Per-file failure; the walk logs it, counts the file as skipped and moves on."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class StatError(FileOperationError):
    """Raised when a filesystem entry cannot be inspected."""


class ReadError(FileOperationError):
    """Raised when a source file cannot be read or decoded."""


class WriteError(FileOperationError):
    """Raised when an annotated copy cannot be written."""


class CatalogWriteError(RepoMirrorError):
    """Raised when the catalog artifact cannot be written. Fatal to the run."""


__all__ = [
    "CatalogWriteError",
    "FileOperationError",
    "InvalidSourceRoot",
    "ReadError",
    "RepoMirrorError",
    "StatError",
    "WriteError",
]
