"""Tests for repomirror.ignore."""

from __future__ import annotations

from pathlib import Path

import pytest

from repomirror.config import ConfigError
from repomirror.ignore import (
    IgnoreRuleSet,
    builtin_patterns,
    escape_path,
    is_hidden_directory,
    load_ignore_rules,
)


def _rules(tmp_path: Path, content: str) -> IgnoreRuleSet:
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text(content, encoding="utf-8")
    return load_ignore_rules(ignore_file)


def test_glob_pattern_matches_suffix_only(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "*.log\n")

    assert rules.ignores("notes.log")
    assert rules.ignores("deep/nested/trace.log")
    assert not rules.ignores("debug.log.txt")
    assert not rules.ignores("src/app.py")


def test_negation_reincludes_when_declared_last(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "*.log\n!keep.log\n")

    assert rules.ignores("other.log")
    assert not rules.ignores("keep.log")


def test_last_matching_pattern_wins(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "!keep.log\n*.log\n")

    assert rules.ignores("keep.log")


def test_trailing_slash_only_matches_directories(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "build/\n")

    assert rules.ignores("build", is_dir=True)
    assert rules.ignores("packages/web/build", is_dir=True)
    assert not rules.ignores("build")


def test_leading_slash_anchors_to_root(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "/config.yml\n")

    assert rules.ignores("config.yml")
    assert not rules.ignores("service/config.yml")


def test_double_star_spans_directories(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "docs/**/*.tmp\n")

    assert rules.ignores("docs/draft.tmp")
    assert rules.ignores("docs/a/b/draft.tmp")
    assert not rules.ignores("src/draft.tmp")


def test_comments_and_blank_lines_are_skipped(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "# generated files\n\n*.gen\n")

    assert rules.ignores("schema.gen")
    assert not rules.ignores("# generated files")


def test_builtin_exclusions_apply_without_ignore_file(tmp_path: Path) -> None:
    rules = load_ignore_rules(tmp_path / ".gitignore")

    assert rules.ignores("mirror_repo", is_dir=True)
    assert rules.ignores("node_modules", is_dir=True)
    assert rules.ignores("web/node_modules", is_dir=True)
    assert rules.ignores("repo_metadata.json")
    assert rules.ignores("repomirror.py")
    assert not rules.ignores("src/index.js")


def test_builtins_cannot_be_negated(tmp_path: Path) -> None:
    rules = _rules(tmp_path, "!node_modules/\n!repo_metadata.json\n")

    assert rules.ignores("node_modules", is_dir=True)
    assert rules.ignores("repo_metadata.json")


def test_builtin_patterns_follow_configured_names() -> None:
    patterns = builtin_patterns(mirror_dir="out/mirror", catalog_file="meta/catalog.json")

    assert "mirror" in patterns
    assert "catalog.json" in patterns
    assert "node_modules" in patterns


def test_extra_patterns_are_combined(tmp_path: Path) -> None:
    rules = load_ignore_rules(tmp_path / "missing", extra_patterns=["*.min.js", "fixtures/"])

    assert rules.ignores("dist/app.min.js")
    assert rules.ignores("tests/fixtures", is_dir=True)
    assert not rules.ignores("dist/app.js")


def test_windows_separators_are_normalised() -> None:
    rules = IgnoreRuleSet.from_patterns(["logs/"])

    assert rules.ignores("logs\\", is_dir=True)
    assert rules.ignores("app\\logs", is_dir=True)


def test_unreadable_ignore_file_raises_config_error(tmp_path: Path) -> None:
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_bytes(b"\xff\xfe*.log\n")

    with pytest.raises(ConfigError):
        load_ignore_rules(ignore_file)


@pytest.mark.parametrize(
    ("name", "expected"),
    [(".git", True), (".secret", True), ("src", False), ("dotfiles", False)],
)
def test_hidden_directory_convention(name: str, expected: bool) -> None:
    assert is_hidden_directory(name) is expected


def test_escape_path_matches_literal_names() -> None:
    rules = IgnoreRuleSet.from_patterns([f"/{escape_path('out[1]')}/", f"/{escape_path('#meta.json')}"])

    assert rules.ignores("out[1]", is_dir=True)
    assert not rules.ignores("out1", is_dir=True)
    assert rules.ignores("#meta.json")
