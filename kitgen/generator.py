"""Kitfile generation from the contents of a directory."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .assembly import ModelAssemblyError, assemble_model
from .directory import UnprocessedDirectoryError, summarize_directory
from .filetypes import FileType, determine_file_type
from .fs import DirEntry, FileSystem, LocalFileSystem, join_path
from .licenses import (
    FingerprintLicenseClassifier,
    LicenseClassifier,
    LicenseDetectionError,
    detect_license,
)
from .logging import get_logger, trace
from .models import Code, DataSet, Docs, KitFile, ModelPart, Package

logger = get_logger("generator")

KITFILE_NAMES = frozenset({"Kitfile", "kitfile", ".kitfile"})
CONFIG_FILENAME = ".kitgen.yml"
DEFAULT_CATCHALL_THRESHOLD = 5
CATCHALL_PATH = "."

README_DESCRIPTION = "Readme file"
LICENSE_DESCRIPTION = "License file"


class GenerationError(RuntimeError):
    """Raised when a Kitfile cannot be generated for a directory."""


def is_kitfile_name(filename: str) -> bool:
    return filename in KITFILE_NAMES


@dataclass
class GenerationContext:
    """Accumulated state for a single pass over the root directory."""

    base_dir: str
    kitfile: KitFile
    # Set when a file of unknown type (including plain code) is found at the root.
    include_catchall: bool = False
    unprocessed_dirs: List[str] = field(default_factory=list)
    model_files: List[str] = field(default_factory=list)
    # Metadata files become model parts if a model exists, datasets otherwise.
    metadata_paths: List[str] = field(default_factory=list)
    detected_license: Optional[str] = None


class KitfileGenerator:
    """Builds a Kitfile by classifying the immediate contents of a directory."""

    def __init__(
        self,
        fs: FileSystem | None = None,
        license_classifier: LicenseClassifier | None = None,
        *,
        catchall_threshold: int = DEFAULT_CATCHALL_THRESHOLD,
    ) -> None:
        self.fs = fs or LocalFileSystem()
        self.license_classifier = license_classifier or FingerprintLicenseClassifier()
        self.catchall_threshold = catchall_threshold

    def generate(self, base_dir: str, package: Package | None = None) -> KitFile:
        """Return a Kitfile describing ``base_dir``.

        ``package`` pre-populates the package section; it is copied, not mutated.
        """
        logger.debug("Generating Kitfile in %s", base_dir)
        kitfile = KitFile()
        if package is not None:
            kitfile.package = replace(package, authors=list(package.authors))
        ctx = GenerationContext(base_dir=base_dir, kitfile=kitfile)

        try:
            entries = self.fs.list_children(base_dir)
        except OSError as exc:
            raise GenerationError(f"error reading directory: {exc}") from exc

        for entry in entries:
            if is_kitfile_name(entry.name) or entry.name == CONFIG_FILENAME:
                trace(logger, "Skipping '%s'", entry.name)
                continue
            if entry.is_dir:
                self._add_directory(ctx, entry)
            else:
                self._add_file(ctx, entry)

        self._add_model(ctx)
        self._add_code(ctx)
        self._attach_license(ctx)
        return kitfile

    def _add_directory(self, ctx: GenerationContext, entry: DirEntry) -> None:
        try:
            summary = summarize_directory(self.fs, ctx.base_dir, entry.name)
        except UnprocessedDirectoryError as exc:
            trace(logger, "Failed to determine type for directory %s: %s", entry.name, exc)
            ctx.unprocessed_dirs.append(entry.name)
            return

        if summary.file_type is FileType.MODEL:
            ctx.model_files.extend(summary.model_files)
        elif summary.file_type is FileType.DATASET:
            ctx.kitfile.datasets.append(DataSet(path=summary.path))
        elif summary.file_type is FileType.DOCS:
            ctx.kitfile.docs.append(Docs(path=summary.path))
        elif summary.file_type is FileType.CODE:
            ctx.kitfile.code.append(Code(path=summary.path))

    def _add_file(self, ctx: GenerationContext, entry: DirEntry) -> None:
        filename = entry.name
        lowered = filename.lower()
        if lowered.startswith("readme"):
            trace(logger, "Found readme file '%s'", filename)
            ctx.kitfile.docs.append(Docs(path=filename, description=README_DESCRIPTION))
            return
        if lowered.startswith("license"):
            trace(logger, "Found license file '%s'", filename)
            ctx.kitfile.docs.append(Docs(path=filename, description=LICENSE_DESCRIPTION))
            ctx.detected_license = self._detect_license(ctx, filename)
            return

        file_type = determine_file_type(filename)
        if file_type is FileType.MODEL:
            ctx.model_files.append(filename)
        elif file_type is FileType.METADATA:
            trace(logger, "Detected metadata file '%s'", filename)
            ctx.metadata_paths.append(filename)
        elif file_type is FileType.DOCS:
            ctx.kitfile.docs.append(Docs(path=filename))
        elif file_type is FileType.DATASET:
            ctx.kitfile.datasets.append(DataSet(path=filename))
        else:
            trace(
                logger,
                "File %s is either code or unknown type; adding a catch-all code section",
                filename,
            )
            ctx.include_catchall = True

    def _detect_license(self, ctx: GenerationContext, filename: str) -> Optional[str]:
        try:
            identifier = detect_license(
                self.fs, join_path(ctx.base_dir, filename), self.license_classifier
            )
        except LicenseDetectionError as exc:
            logger.debug("Error determining license type: %s", exc)
            logger.warning("Unable to determine license type")
            return None
        logger.debug("Detected license %s for license file", identifier)
        return identifier

    def _add_model(self, ctx: GenerationContext) -> None:
        kitfile = ctx.kitfile
        if ctx.model_files:
            try:
                kitfile.model = assemble_model(self.fs, ctx.base_dir, ctx.model_files)
            except ModelAssemblyError as exc:
                raise GenerationError(f"failed to add model to Kitfile: {exc}") from exc
        if kitfile.model is not None:
            logger.debug("Adding metadata files as model parts")
            kitfile.model.parts.extend(ModelPart(path=path) for path in ctx.metadata_paths)
        else:
            logger.debug("No model detected; adding metadata files as datasets")
            kitfile.datasets.extend(DataSet(path=path) for path in ctx.metadata_paths)

    def _add_code(self, ctx: GenerationContext) -> None:
        logger.debug("Unable to process %d paths in %s", len(ctx.unprocessed_dirs), ctx.base_dir)
        if ctx.include_catchall or len(ctx.unprocessed_dirs) > self.catchall_threshold:
            logger.debug("Adding catch-all code section to include files in %s", ctx.base_dir)
            # A single '.' entry already covers 'src' and friends.
            ctx.kitfile.code = [Code(path=CATCHALL_PATH)]
            return
        ctx.kitfile.code.extend(Code(path=path) for path in ctx.unprocessed_dirs)

    def _attach_license(self, ctx: GenerationContext) -> None:
        license_id = ctx.detected_license
        if not license_id:
            return
        kitfile = ctx.kitfile
        if kitfile.model is not None:
            kitfile.model.license = license_id
        elif len(kitfile.datasets) == 1:
            kitfile.datasets[0].license = license_id
        elif len(kitfile.code) == 1:
            kitfile.code[0].license = license_id
        else:
            logger.debug("Unsure what license applies to; adding it to the package section")
            kitfile.package.license = license_id


def generate_kitfile(base_dir: str, package: Package | None = None) -> KitFile:
    """Generate a Kitfile for ``base_dir`` using the local filesystem."""
    return KitfileGenerator().generate(base_dir, package)


__all__ = [
    "CATCHALL_PATH",
    "CONFIG_FILENAME",
    "GenerationContext",
    "GenerationError",
    "KITFILE_NAMES",
    "KitfileGenerator",
    "generate_kitfile",
    "is_kitfile_name",
]
