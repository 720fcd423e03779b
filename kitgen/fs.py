"""Filesystem read primitives used during Kitfile generation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class DirEntry:
    """Immediate child of a directory."""

    name: str
    is_dir: bool


class FileSystem(ABC):
    """Read-only view of a directory tree. Every method may raise ``OSError``."""

    @abstractmethod
    def list_children(self, path: str) -> List[DirEntry]:
        """Return the immediate children of ``path`` in a stable order."""

    @abstractmethod
    def file_size(self, path: str) -> int:
        """Return the size of ``path`` in bytes."""

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Return the raw contents of ``path``."""


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk."""

    def list_children(self, path: str) -> List[DirEntry]:
        entries = [
            DirEntry(name=child.name, is_dir=child.is_dir())
            for child in Path(path).iterdir()
        ]
        entries.sort(key=lambda entry: entry.name)
        return entries

    def file_size(self, path: str) -> int:
        return Path(path).stat().st_size

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()


def join_path(*parts: str) -> str:
    """Join path segments with ``/`` regardless of platform."""
    return "/".join(part.rstrip("/") for part in parts if part)


__all__ = ["DirEntry", "FileSystem", "LocalFileSystem", "join_path"]
