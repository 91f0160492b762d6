"""Static file-extension to language lookup."""

from __future__ import annotations

from pathlib import PurePath
from typing import Mapping

UNKNOWN_LANGUAGE = "Unknown"

_LANGUAGE_BY_SUFFIX: Mapping[str, str] = {
    ".js": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TSX",
    ".jsx": "JSX",
    ".py": "Python",
    ".pyi": "Python",
    ".java": "Java",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".go": "Go",
    ".rs": "Rust",
    ".rb": "Ruby",
    ".php": "PHP",
    ".cs": "C#",
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".hpp": "C++",
    ".cc": "C++",
    ".hh": "C++",
    ".swift": "Swift",
    ".m": "Objective-C",
    ".mm": "Objective-C++",
    ".scala": "Scala",
    ".r": "R",
    ".jl": "Julia",
    ".sh": "Shell",
    ".ps1": "PowerShell",
    ".bat": "Batch",
    ".cmd": "Batch",
    ".html": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".json": "JSON",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".toml": "TOML",
    ".sql": "SQL",
    ".txt": "Text",
    ".md": "Markdown",
}

# Convention filenames that carry no usable suffix.
_LANGUAGE_BY_NAME: Mapping[str, str] = {
    "Pipfile": "Python",
    "Pipfile.lock": "Python",
    ".gitattributes": "Git",
    ".gitignore": "Git",
    ".prettierrc": "JSON",
    "Dockerfile": "Dockerfile",
    "Makefile": "Makefile",
    "Gemfile": "Ruby",
    "Rakefile": "Ruby",
}


def classify(path: str | PurePath) -> str:
    """Return the language label for *path*, or ``"Unknown"``."""
    pure = PurePath(path)
    suffix = pure.suffix.lower()
    if suffix in _LANGUAGE_BY_SUFFIX:
        return _LANGUAGE_BY_SUFFIX[suffix]
    return _LANGUAGE_BY_NAME.get(pure.name, UNKNOWN_LANGUAGE)


__all__ = ["UNKNOWN_LANGUAGE", "classify"]
