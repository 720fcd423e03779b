"""Whole-directory classification for immediate subdirectories."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .filetypes import FileType, determine_file_type
from .fs import FileSystem, join_path
from .logging import get_logger, trace

logger = get_logger("directory")

DOCS_DIR_NAMES = frozenset({"docs"})
CODE_DIR_NAMES = frozenset({"src", "pkg", "lib", "build"})


class UnprocessedDirectoryError(RuntimeError):
    """Raised when a directory cannot be classified as a single section."""

    def __init__(self, dir_path: str, reason: str) -> None:
        super().__init__(f"{reason}: {dir_path}")
        self.dir_path = dir_path
        self.reason = reason


class DirectoryReadError(UnprocessedDirectoryError):
    """The directory could not be listed."""


class MixedDirectoryError(UnprocessedDirectoryError):
    """The directory holds files from more than one category."""


class AmbiguousDirectoryError(UnprocessedDirectoryError):
    """The directory holds only code, unknown or metadata files."""


@dataclass
class DirectorySummary:
    """Verdict for a directory that can be packaged as one section."""

    path: str
    file_type: FileType
    # For model directories: the model files followed by any metadata files.
    model_files: List[str] = field(default_factory=list)


def _empty_buckets() -> Dict[FileType, List[str]]:
    # Insertion order follows FileType declaration order, so iteration is stable.
    return {file_type: [] for file_type in FileType}


def summarize_directory(fs: FileSystem, base_dir: str, dir_path: str) -> DirectorySummary:
    """Classify the directory ``dir_path`` (relative to ``base_dir``) as a whole.

    Only the immediate children are inspected; nested directories count as
    unknown content. Raises a subclass of UnprocessedDirectoryError when the
    directory should be packaged as code instead.
    """
    name = dir_path.rstrip("/").rsplit("/", 1)[-1]
    if name in DOCS_DIR_NAMES:
        trace(logger, "Directory %s interpreted as documentation", dir_path)
        return DirectorySummary(path=dir_path, file_type=FileType.DOCS)
    if name in CODE_DIR_NAMES:
        trace(logger, "Directory %s interpreted as code", dir_path)
        return DirectorySummary(path=dir_path, file_type=FileType.CODE)

    try:
        entries = fs.list_children(join_path(base_dir, dir_path))
    except OSError as exc:
        raise DirectoryReadError(dir_path, f"failed to read directory ({exc})") from exc

    buckets = _empty_buckets()
    model_files: List[str] = []
    for entry in entries:
        rel_path = join_path(dir_path, entry.name)
        if entry.is_dir:
            # Only one level deep; nested directories are not inspected.
            buckets[FileType.UNKNOWN].append(rel_path)
            continue
        file_type = determine_file_type(entry.name)
        if file_type is FileType.MODEL:
            model_files.append(rel_path)
        buckets[file_type].append(rel_path)

    active = [
        file_type
        for file_type, paths in buckets.items()
        if paths and file_type is not FileType.METADATA
    ]
    if len(active) > 1:
        trace(logger, "Detected mixed contents within directory %s", dir_path)
        raise MixedDirectoryError(dir_path, "mixed content in directory; unable to determine type")

    overall = active[0] if active else FileType.UNKNOWN
    if overall is FileType.MODEL:
        trace(logger, "Interpreting directory %s as a model directory", dir_path)
        return DirectorySummary(
            path=dir_path,
            file_type=FileType.MODEL,
            model_files=model_files + buckets[FileType.METADATA],
        )
    if overall is FileType.DATASET:
        trace(logger, "Interpreting directory %s as a dataset directory", dir_path)
        return DirectorySummary(path=dir_path, file_type=FileType.DATASET)
    if overall is FileType.DOCS:
        trace(logger, "Interpreting directory %s as a docs directory", dir_path)
        return DirectorySummary(path=dir_path, file_type=FileType.DOCS)

    trace(logger, "Could not determine type for directory %s", dir_path)
    raise AmbiguousDirectoryError(dir_path, "directory should be handled as code")


__all__ = [
    "AmbiguousDirectoryError",
    "CODE_DIR_NAMES",
    "DOCS_DIR_NAMES",
    "DirectoryReadError",
    "DirectorySummary",
    "MixedDirectoryError",
    "UnprocessedDirectoryError",
    "summarize_directory",
]
