"""License text classification for LICENSE files."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .fs import FileSystem


class LicenseDetectionError(RuntimeError):
    """Raised when a license file cannot be mapped to exactly one license."""


class LicenseClassifier(ABC):
    """Maps raw license text to a license identifier."""

    @abstractmethod
    def classify(self, data: bytes) -> Optional[str]:
        """Return the matching identifier, or None when nothing matches.

        Raises LicenseDetectionError when the text matches more than one license.
        """


@dataclass(frozen=True)
class LicenseFingerprint:
    """Phrases that must all appear in normalized text for a license to match."""

    identifier: str
    phrases: Tuple[str, ...]
    subsumes: Tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        return all(phrase in text for phrase in self.phrases)


_BSD_2_PHRASES = (
    "redistribution and use in source and binary forms, with or without modification, "
    "are permitted provided that the following conditions are met",
    "redistributions of source code must retain the above copyright notice",
    "redistributions in binary form must reproduce the above copyright notice",
)

# Shared by ISC and 0BSD; only ISC also requires the notice to be kept.
_PERMISSIVE_GRANT_PHRASES = (
    "permission to use, copy, modify, and",
    "distribute this software for any purpose with or without fee is hereby granted",
)

DEFAULT_FINGERPRINTS: Tuple[LicenseFingerprint, ...] = (
    LicenseFingerprint("Apache-2.0", ("apache license", "version 2.0")),
    LicenseFingerprint(
        "MIT",
        (
            "permission is hereby granted, free of charge, to any person obtaining a copy",
            "the above copyright notice and this permission notice shall be included",
        ),
    ),
    LicenseFingerprint("0BSD", _PERMISSIVE_GRANT_PHRASES),
    LicenseFingerprint(
        "ISC",
        _PERMISSIVE_GRANT_PHRASES
        + (
            "provided that the above copyright notice and this permission notice appear in all copies",
        ),
        subsumes=("0BSD",),
    ),
    LicenseFingerprint("BSD-2-Clause", _BSD_2_PHRASES),
    LicenseFingerprint(
        "BSD-3-Clause",
        _BSD_2_PHRASES
        + (
            "neither the name of",
            "endorse or promote products derived from this software",
        ),
        subsumes=("BSD-2-Clause",),
    ),
    LicenseFingerprint("GPL-2.0", ("gnu general public license", "version 2, june 1991")),
    LicenseFingerprint(
        "GPL-3.0",
        (
            "the gnu general public license is a free, copyleft license for software "
            "and other kinds of works",
        ),
    ),
    LicenseFingerprint(
        "LGPL-2.1",
        ("gnu lesser general public license", "version 2.1, february 1999"),
        subsumes=("GPL-2.0",),
    ),
    LicenseFingerprint(
        "LGPL-3.0",
        (
            "this version of the gnu lesser general public license incorporates the terms "
            "and conditions of version 3 of the gnu general public license",
        ),
        subsumes=("GPL-3.0",),
    ),
    LicenseFingerprint(
        "AGPL-3.0",
        (
            "the gnu affero general public license is a free, copyleft license for software "
            "and other kinds of works",
        ),
        subsumes=("GPL-3.0",),
    ),
    LicenseFingerprint("MPL-2.0", ("mozilla public license", "2.0")),
    LicenseFingerprint(
        "Unlicense",
        ("this is free and unencumbered software released into the public domain",),
    ),
    LicenseFingerprint("CC0-1.0", ("cc0 1.0 universal",)),
    LicenseFingerprint(
        "CC-BY-4.0",
        ("creative commons attribution 4.0 international public license",),
    ),
    LicenseFingerprint("BSL-1.0", ("boost software license - version 1.0",)),
    LicenseFingerprint("PSF-2.0", ("python software foundation license version 2",)),
)

_WHITESPACE_RE = re.compile(r"\s+")
# Comment leaders and closers when license text is embedded in a source comment block.
_COMMENT_PREFIX_RE = re.compile(r"^[ \t]*(?:/\*+|\*+/?|//+|#+)", re.MULTILINE)
_COMMENT_SUFFIX_RE = re.compile(r"[ \t]*\*+/[ \t]*$", re.MULTILINE)


def normalize_license_text(data: bytes) -> str:
    """Lower-case the text, drop comment markers and collapse whitespace."""
    text = data.decode("utf-8", errors="replace").lower()
    text = _COMMENT_SUFFIX_RE.sub("", text)
    text = _COMMENT_PREFIX_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


class FingerprintLicenseClassifier(LicenseClassifier):
    """Classifies license text by looking for each license's distinctive phrases."""

    def __init__(self, fingerprints: Sequence[LicenseFingerprint] | None = None) -> None:
        self.fingerprints: Tuple[LicenseFingerprint, ...] = tuple(
            fingerprints if fingerprints is not None else DEFAULT_FINGERPRINTS
        )

    def matches(self, data: bytes) -> List[str]:
        """Return every identifier that matches, with subsumed licenses removed."""
        text = normalize_license_text(data)
        matched: Dict[str, LicenseFingerprint] = {}
        for fingerprint in self.fingerprints:
            if fingerprint.matches(text):
                matched[fingerprint.identifier] = fingerprint

        suppressed = {
            identifier
            for fingerprint in matched.values()
            for identifier in fingerprint.subsumes
        }
        return [identifier for identifier in matched if identifier not in suppressed]

    def classify(self, data: bytes) -> Optional[str]:
        matches = self.matches(data)
        if not matches:
            return None
        if len(matches) > 1:
            raise LicenseDetectionError(
                f"multiple licenses matched license file: {', '.join(matches)}"
            )
        return matches[0]


def detect_license(
    fs: FileSystem, license_path: str, classifier: LicenseClassifier
) -> str:
    """Return the single license identifier for the file at ``license_path``."""
    try:
        data = fs.read_bytes(license_path)
    except OSError as exc:
        raise LicenseDetectionError(f"failed to read license file: {exc}") from exc

    identifier = classifier.classify(data)
    if identifier is None:
        raise LicenseDetectionError("no known license matched license file")
    return identifier


__all__ = [
    "DEFAULT_FINGERPRINTS",
    "FingerprintLicenseClassifier",
    "LicenseClassifier",
    "LicenseDetectionError",
    "LicenseFingerprint",
    "detect_license",
    "normalize_license_text",
]
