"""Suffix-based file classification."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class FileType(Enum):
    """Semantic category of a file; declaration order is the bucket order."""

    MODEL = "model"
    DATASET = "dataset"
    CODE = "code"
    DOCS = "docs"
    METADATA = "metadata"
    UNKNOWN = "unknown"


MODEL_WEIGHTS_SUFFIXES: tuple[str, ...] = (
    ".safetensors",
    ".pkl",
    ".joblib",
    # PyTorch
    ".bin",
    ".pth",
    ".pt",
    ".mar",
    ".pt2",
    ".ptl",
    # TensorFlow
    ".pb",
    ".ckpt",
    ".tflite",
    ".tfrecords",
    # NumPy
    ".npy",
    ".npz",
    # Keras and others
    ".keras",
    ".h5",
    ".caffemodel",
    ".pmml",
    ".coreml",
    ".gguf",
    ".ggml",
    ".ggmf",
    ".llamafile",
    ".onnx",
)

METADATA_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".xml", ".txt")

DOCS_SUFFIXES: tuple[str, ...] = (".md", ".adoc", ".html", ".pdf")

DATASET_SUFFIXES: tuple[str, ...] = (".tar", ".zip", ".parquet", ".csv")

_SUFFIX_RULES: tuple[tuple[Sequence[str], FileType], ...] = (
    (MODEL_WEIGHTS_SUFFIXES, FileType.MODEL),
    # Metadata ends up as model parts or datasets depending on the rest of the tree.
    (METADATA_SUFFIXES, FileType.METADATA),
    (DOCS_SUFFIXES, FileType.DOCS),
    (DATASET_SUFFIXES, FileType.DATASET),
)


def determine_file_type(filename: str) -> FileType:
    """Classify ``filename`` by its (case-sensitive) suffix."""
    for suffixes, file_type in _SUFFIX_RULES:
        if filename.endswith(tuple(suffixes)):
            return file_type
    return FileType.UNKNOWN


__all__ = [
    "DATASET_SUFFIXES",
    "DOCS_SUFFIXES",
    "FileType",
    "METADATA_SUFFIXES",
    "MODEL_WEIGHTS_SUFFIXES",
    "determine_file_type",
]
