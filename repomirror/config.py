"""Configuration loading for repomirror (.repomirror.yml)."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".repomirror.yml"

DEFAULT_MIRROR_DIR = "mirror_repo"
DEFAULT_CATALOG_FILE = "repo_metadata.json"
DEFAULT_IGNORE_FILE = ".gitignore"
DEFAULT_ENCODING = "utf-8"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MirrorConfig:
    """Represents the settings defined in .repomirror.yml."""

    root: Path
    mirror_dir: str = DEFAULT_MIRROR_DIR
    catalog_file: str = DEFAULT_CATALOG_FILE
    ignore_file: str = DEFAULT_IGNORE_FILE
    encoding: str = DEFAULT_ENCODING
    clean_destination: bool = True
    exclude_paths: List[str] = field(default_factory=list)

    @property
    def mirror_path(self) -> Path:
        """Absolute destination of the mirror tree."""
        return _resolve_under(self.root, self.mirror_dir)

    @property
    def catalog_path(self) -> Path:
        """Absolute destination of the catalog artifact."""
        return _resolve_under(self.root, self.catalog_file)

    @property
    def ignore_path(self) -> Path:
        return _resolve_under(self.root, self.ignore_file)


def load_config(config_path: Path) -> MirrorConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MirrorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = MirrorConfig(root=root)
    config.mirror_dir = _as_str(data.get("mirror_dir")) or config.mirror_dir
    config.catalog_file = _as_str(data.get("catalog_file")) or config.catalog_file
    config.ignore_file = _as_str(data.get("ignore_file")) or config.ignore_file
    config.encoding = _as_encoding(data.get("encoding")) or config.encoding
    clean = _as_bool(data.get("clean_destination"))
    if clean is not None:
        config.clean_destination = clean
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _resolve_under(root: Path, value: str) -> Path:
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate.resolve()
    return (root / candidate).resolve()


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_encoding(value: Any) -> Optional[str]:
    name = _as_str(value)
    if name is None:
        return None
    try:
        codecs.lookup(name)
    except LookupError as exc:
        raise ConfigError(f"Unknown encoding in {CONFIG_FILENAME}: {name!r}") from exc
    return name


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
