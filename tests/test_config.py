"""Tests for repomirror.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from repomirror.config import ConfigError, MirrorConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, MirrorConfig)
    assert config.root == tmp_path.resolve()
    assert config.mirror_dir == "mirror_repo"
    assert config.catalog_file == "repo_metadata.json"
    assert config.ignore_file == ".gitignore"
    assert config.encoding == "utf-8"
    assert config.clean_destination is True
    assert config.exclude_paths == []
    assert config.mirror_path == tmp_path.resolve() / "mirror_repo"
    assert config.catalog_path == tmp_path.resolve() / "repo_metadata.json"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".repomirror.yml").write_text(
        """
mirror_dir: build/mirror
catalog_file: build/catalog.json
ignore_file: .mirrorignore
encoding: latin-1
clean_destination: false
exclude_paths:
  - "*.min.js"
  - fixtures/
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".repomirror.yml")

    assert config.mirror_dir == "build/mirror"
    assert config.mirror_path == tmp_path.resolve() / "build" / "mirror"
    assert config.catalog_path == tmp_path.resolve() / "build" / "catalog.json"
    assert config.ignore_path == tmp_path.resolve() / ".mirrorignore"
    assert config.encoding == "latin-1"
    assert config.clean_destination is False
    assert config.exclude_paths == ["*.min.js", "fixtures/"]


def test_absolute_mirror_dir_is_kept(tmp_path: Path) -> None:
    elsewhere = tmp_path / "elsewhere"
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".repomirror.yml").write_text(f"mirror_dir: {elsewhere}\n", encoding="utf-8")

    config = load_config(repo)

    assert config.mirror_path == elsewhere.resolve()


def test_single_exclude_string_becomes_list(tmp_path: Path) -> None:
    (tmp_path / ".repomirror.yml").write_text("exclude_paths: '*.snap'\n", encoding="utf-8")

    assert load_config(tmp_path).exclude_paths == ["*.snap"]


def test_empty_config_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".repomirror.yml").write_text("\n# nothing here\n", encoding="utf-8")

    assert load_config(tmp_path).mirror_dir == "mirror_repo"


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".repomirror.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".repomirror.yml").write_text("mirror_dir: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_encoding_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".repomirror.yml").write_text("encoding: utf-99\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="utf-99"):
        load_config(tmp_path)


def test_encoding_aliases_are_accepted(tmp_path: Path) -> None:
    (tmp_path / ".repomirror.yml").write_text("encoding: UTF8\n", encoding="utf-8")

    assert load_config(tmp_path).encoding == "UTF8"
