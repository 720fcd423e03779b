"""Election of the primary model file among model candidates."""

from __future__ import annotations

import posixpath
from typing import List, Optional, Sequence

from .fs import FileSystem, join_path
from .logging import get_logger
from .models import Model, ModelPart

logger = get_logger("assembly")


class ModelAssemblyError(RuntimeError):
    """Raised when model candidates cannot be compared."""


def model_name(path: str) -> str:
    """Return the display name for a model path: its filename without extension."""
    filename = posixpath.basename(path)
    stem, _ = posixpath.splitext(filename)
    return stem


def _build_model(primary: str, others: Sequence[str]) -> Model:
    return Model(
        path=primary,
        name=model_name(primary),
        parts=[ModelPart(path=path) for path in others],
    )


def assemble_model(
    fs: FileSystem, base_dir: str, model_paths: Sequence[str]
) -> Optional[Model]:
    """Pick the primary model among ``model_paths`` and turn the rest into parts.

    Two layouts are told apart by size: a model split into similarly sized
    shards keeps discovery order (first file is the model), while a single
    file more than 1.5x the average size is treated as the model and the
    smaller files as adapters or extras.
    """
    if not model_paths:
        return None

    if len(model_paths) == 1:
        return _build_model(model_paths[0], [])

    largest_path = ""
    largest_size = 0
    total_size = 0
    for path in model_paths:
        full_path = join_path(base_dir, path)
        try:
            size = fs.file_size(full_path)
        except OSError as exc:
            raise ModelAssemblyError(f"failed to process file {full_path}: {exc}") from exc
        if size > largest_size:
            largest_size = size
            largest_path = path
        total_size += size
    # Integer division; at most a byte off.
    average_size = total_size // len(model_paths)

    if largest_size > average_size + average_size // 2:
        logger.debug(
            "Model file %s (%d bytes) dominates average size %d; using it as the model",
            largest_path,
            largest_size,
            average_size,
        )
        primary_index = model_paths.index(largest_path)
    else:
        logger.debug("No dominant model file among %d candidates; using %s", len(model_paths), model_paths[0])
        primary_index = 0

    others: List[str] = [
        path for index, path in enumerate(model_paths) if index != primary_index
    ]
    return _build_model(model_paths[primary_index], others)


__all__ = ["ModelAssemblyError", "assemble_model", "model_name"]
