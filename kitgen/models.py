"""Kitfile data models shared across kitgen components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_MANIFEST_VERSION = "1.0.0"


def _prune(values: Dict[str, Any]) -> Dict[str, Any]:
    # Empty strings count as absent, so an undetected license never gets serialized.
    return {key: value for key, value in values.items() if value not in (None, "", [], {})}


@dataclass
class Package:
    """Package-level metadata for the Kitfile."""

    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    license: Optional[str] = None
    authors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _prune(
            {
                "name": self.name,
                "version": self.version,
                "description": self.description,
                "license": self.license,
                "authors": list(self.authors),
            }
        )


@dataclass
class ModelPart:
    """Additional file belonging to the model (shard, adapter, config)."""

    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path}


@dataclass
class Model:
    """The primary model of a Kitfile."""

    path: str
    name: Optional[str] = None
    license: Optional[str] = None
    parts: List[ModelPart] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _prune(
            {
                "name": self.name,
                "path": self.path,
                "license": self.license,
                "parts": [part.to_dict() for part in self.parts],
            }
        )


@dataclass
class DataSet:
    path: str
    license: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _prune({"path": self.path, "license": self.license})


@dataclass
class Docs:
    path: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _prune({"path": self.path, "description": self.description})


@dataclass
class Code:
    path: str
    license: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _prune({"path": self.path, "license": self.license})


@dataclass
class KitFile:
    """Structured manifest describing the contents of a packaged directory."""

    manifest_version: str = DEFAULT_MANIFEST_VERSION
    package: Package = field(default_factory=Package)
    model: Optional[Model] = None
    datasets: List[DataSet] = field(default_factory=list)
    docs: List[Docs] = field(default_factory=list)
    code: List[Code] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain mapping in Kitfile key order, omitting empty sections."""
        return _prune(
            {
                "manifestVersion": self.manifest_version,
                "package": self.package.to_dict(),
                "model": self.model.to_dict() if self.model is not None else None,
                "datasets": [dataset.to_dict() for dataset in self.datasets],
                "docs": [doc.to_dict() for doc in self.docs],
                "code": [code.to_dict() for code in self.code],
            }
        )
