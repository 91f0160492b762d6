"""Catalog serialization and verification."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from .errors import CatalogWriteError
from .logging import get_logger
from .models import Catalog, FileMetadata

logger = get_logger("catalog")


class CatalogWriter:
    """Writes the catalog as a single JSON document."""

    def __init__(self, *, indent: int = 2) -> None:
        self.indent = indent

    def write(self, catalog: Catalog, destination: Path) -> Path:
        """Overwrite *destination* with the serialized catalog.

        There is no temp-file/rename step; a failure leaves whatever the
        filesystem produced and raises CatalogWriteError.
        """
        destination = Path(destination)
        payload = json.dumps(catalog.to_dict(), indent=self.indent, ensure_ascii=False)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(payload, encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            raise CatalogWriteError(f"Failed to write catalog to {destination}: {exc}") from exc
        logger.info("Catalog saved to %s (%d entries)", destination, len(catalog.metadata))
        return destination


def read_catalog(path: Path) -> Catalog:
    """Load a catalog previously produced by CatalogWriter."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Catalog not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ValueError(f"Could not read catalog {path}: {exc}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("metadata"), list):
        raise ValueError(f"Catalog {path} is missing the metadata list")
    repo_name = data.get("repoName")
    if not isinstance(repo_name, str):
        raise ValueError(f"Catalog {path} is missing repoName")

    entries: List[FileMetadata] = []
    for index, raw in enumerate(data["metadata"]):
        if not isinstance(raw, dict):
            raise ValueError(f"Catalog entry {index} is not an object")
        try:
            entries.append(FileMetadata.from_dict(raw))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Catalog entry {index} is malformed: {exc}") from exc
    return Catalog(repo_name=repo_name, metadata=entries)


def verify_catalog(catalog: Catalog, mirror_root: Path) -> List[str]:
    """Return catalog paths that do not resolve to a file under *mirror_root*."""
    root = Path(mirror_root)
    return [entry.file_path for entry in catalog.metadata if not (root / entry.file_path).is_file()]


__all__ = ["CatalogWriter", "read_catalog", "verify_catalog"]
