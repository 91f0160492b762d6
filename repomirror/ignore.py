"""Ignore rules deciding which paths stay out of the mirror and catalog."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

import pathspec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from .config import ConfigError, DEFAULT_CATALOG_FILE, DEFAULT_MIRROR_DIR
from .logging import get_logger

HIDDEN_PREFIX = "."
DEPENDENCY_DIR = "node_modules"
ENTRY_POINT_FILENAME = "repomirror.py"

logger = get_logger("ignore")


def builtin_patterns(
    *,
    mirror_dir: str = DEFAULT_MIRROR_DIR,
    catalog_file: str = DEFAULT_CATALOG_FILE,
) -> List[str]:
    """Exclusions applied to every run regardless of the ignore file."""
    return [
        escape_path(Path(mirror_dir).name),
        DEPENDENCY_DIR,
        escape_path(Path(catalog_file).name),
        ENTRY_POINT_FILENAME,
    ]


def escape_path(path: str) -> str:
    """Return *path* as a pattern that matches only that literal path."""
    return GitWildMatchPattern.escape(path)


def is_hidden_directory(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Compiled gitignore-style predicate over root-relative POSIX paths.

    Patterns are evaluated in declaration order and the last matching pattern
    wins, so a later ``!pattern`` re-includes what an earlier one excluded.
    The hidden-directory rule is separate and cannot be negated.
    """

    spec: pathspec.GitIgnoreSpec
    patterns: tuple[str, ...] = ()

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "IgnoreRuleSet":
        lines = tuple(patterns)
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(lines), patterns=lines)

    def ignores(self, relative_path: str, is_dir: bool = False) -> bool:
        """Return True when *relative_path* is excluded by the compiled patterns."""
        target = relative_path.replace("\\", "/").strip("/")
        if not target:
            return False
        if is_dir:
            target = f"{target}/"
        return self.spec.match_file(target)


def load_ignore_rules(
    ignore_file: Path | None,
    *,
    builtins: Sequence[str] | None = None,
    extra_patterns: Sequence[str] = (),
) -> IgnoreRuleSet:
    """Build the rule set from the optional ignore file, built-ins and extras.

    Built-ins come last so a negation in the ignore file cannot re-include the
    tool's own output.
    """
    patterns: List[str] = []
    if ignore_file is not None and ignore_file.is_file():
        try:
            text = ignore_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Could not read ignore file '{ignore_file}': {exc}") from exc
        patterns.extend(text.splitlines())
        logger.debug("Loaded ignore patterns from %s", ignore_file)
    elif ignore_file is not None:
        logger.debug("No ignore file at %s; using built-in exclusions only", ignore_file)

    patterns.extend(extra_patterns)
    patterns.extend(builtins if builtins is not None else builtin_patterns())
    return IgnoreRuleSet.from_patterns(patterns)


__all__ = [
    "DEPENDENCY_DIR",
    "ENTRY_POINT_FILENAME",
    "HIDDEN_PREFIX",
    "IgnoreRuleSet",
    "builtin_patterns",
    "escape_path",
    "is_hidden_directory",
    "load_ignore_rules",
]
