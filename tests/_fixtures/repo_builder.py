"""Helper utilities for constructing temporary repositories in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from repomirror.pipeline import MirrorPipeline, MirrorResult


class RepoBuilder:
    """Utility for writing files into a throwaway repository and mirroring it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self._pipeline = MirrorPipeline()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the repository."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def mirror(self, **kwargs: object) -> MirrorResult:
        """Run a full mirroring pass over the repository."""
        return self._pipeline.run(self.root, **kwargs)  # type: ignore[arg-type]

    def path(self) -> Path:
        """Return the repository root path."""
        return self.root


__all__ = ["RepoBuilder"]
