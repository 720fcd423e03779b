"""YAML rendering and persistence of Kitfiles."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from .models import KitFile

DEFAULT_KITFILE_NAME = "Kitfile"


def dump_kitfile(kitfile: KitFile) -> str:
    """Render ``kitfile`` as YAML, keeping Kitfile key order."""
    return yaml.safe_dump(
        kitfile.to_dict(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def load_kitfile_dict(text: str) -> Dict[str, Any]:
    """Parse Kitfile YAML into a plain mapping."""
    loaded = yaml.safe_load(text)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError("Kitfile must contain a mapping at the root")
    return loaded


def write_kitfile(kitfile: KitFile, directory: Path, *, overwrite: bool = False) -> Path:
    """Write ``kitfile`` into ``directory`` and return the written path."""
    target = directory / DEFAULT_KITFILE_NAME
    if target.exists() and not overwrite:
        raise FileExistsError(f"Kitfile already exists at {target}; use --force to overwrite")
    target.write_text(dump_kitfile(kitfile), encoding="utf-8")
    return target


__all__ = ["DEFAULT_KITFILE_NAME", "dump_kitfile", "load_kitfile_dict", "write_kitfile"]
