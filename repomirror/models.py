"""Core data models shared across repomirror components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, List


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class FileMetadata:
    """Metadata for an individual mirrored file."""

    file_name: str
    file_path: str
    last_modified: datetime
    file_size: int
    language: str
    repo_name: str
    hierarchy: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "filePath": self.file_path,
            "lastModified": format_timestamp(self.last_modified),
            "fileSize": self.file_size,
            "language": self.language,
            "repoName": self.repo_name,
            "hierarchy": list(self.hierarchy),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FileMetadata":
        last_modified = datetime.fromisoformat(str(payload["lastModified"]).replace("Z", "+00:00"))
        return cls(
            file_name=str(payload["fileName"]),
            file_path=str(payload["filePath"]),
            last_modified=last_modified,
            file_size=int(payload["fileSize"]),
            language=str(payload["language"]),
            repo_name=str(payload["repoName"]),
            hierarchy=[str(part) for part in payload.get("hierarchy", [])],
        )


@dataclass
class Catalog:
    """Describes every file written into one mirror tree."""

    repo_name: str
    metadata: List[FileMetadata] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "repoName": self.repo_name,
            "metadata": [entry.to_dict() for entry in self.metadata],
        }

    def paths(self) -> List[str]:
        return [entry.file_path for entry in self.metadata]
