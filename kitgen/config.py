"""Configuration loading for kitgen (.kitgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .generator import CONFIG_FILENAME, DEFAULT_CATCHALL_THRESHOLD
from .models import Package


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class KitgenConfig:
    """Represents the settings defined in .kitgen.yml."""

    root: Path
    package: Optional[Package] = None
    catchall_threshold: int = DEFAULT_CATCHALL_THRESHOLD


def load_config(config_path: Path) -> KitgenConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    if config_file is None:
        return KitgenConfig(root=config_path.expanduser().resolve())
    root = config_file.parent.resolve()

    if not config_file.exists():
        return KitgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    package_data = _as_dict(data.get("package"))
    package = None
    if package_data:
        package = Package(
            name=_as_str(package_data.get("name")),
            version=_as_str(package_data.get("version")),
            description=_as_str(package_data.get("description")),
            license=_as_str(package_data.get("license")),
            authors=_as_str_list(package_data.get("authors")),
        )
        if not any(
            (package.name, package.version, package.description, package.license, package.authors)
        ):
            package = None

    generation_data = _as_dict(data.get("generation"))
    threshold = _as_int(generation_data.get("catchall_threshold"))
    if threshold is None or threshold < 0:
        threshold = DEFAULT_CATCHALL_THRESHOLD

    return KitgenConfig(root=root, package=package, catchall_threshold=threshold)


def _resolve_config_path(config_path: Path) -> Optional[Path]:
    """Return the config file for a scanned directory or an explicit config path.

    Anything else (a missing path, a regular file) has no config; the parent
    directory is never consulted.
    """
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name == CONFIG_FILENAME:
        return config_path.resolve()
    return None


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["ConfigError", "KitgenConfig", "load_config"]
