"""Tests for kitgen.licenses."""

from __future__ import annotations

from pathlib import Path

import pytest

from kitgen.fs import LocalFileSystem
from kitgen.licenses import (
    DEFAULT_FINGERPRINTS,
    FingerprintLicenseClassifier,
    LicenseDetectionError,
    LicenseFingerprint,
    detect_license,
    normalize_license_text,
)
from tests._fixtures.licenses import (
    AGPL_3_TEXT,
    APACHE_TEXT,
    BSD_2_TEXT,
    BSD_3_TEXT,
    BSL_TEXT,
    CC0_TEXT,
    CC_BY_4_TEXT,
    GPL_2_TEXT,
    GPL_3_TEXT,
    ISC_IN_C_COMMENT_TEXT,
    ISC_TEXT,
    LGPL_2_1_TEXT,
    LGPL_3_TEXT,
    MIT_IN_HASH_COMMENT_TEXT,
    MIT_TEXT,
    MPL_2_TEXT,
    PSF_TEXT,
    PSF_WITH_ZERO_BSD_TEXT,
    UNLICENSE_TEXT,
    UNRECOGNIZED_TEXT,
    ZERO_BSD_TEXT,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (MIT_TEXT, "MIT"),
        (APACHE_TEXT, "Apache-2.0"),
        (BSD_2_TEXT, "BSD-2-Clause"),
        (BSD_3_TEXT, "BSD-3-Clause"),
        (ISC_TEXT, "ISC"),
        (ZERO_BSD_TEXT, "0BSD"),
        (GPL_2_TEXT, "GPL-2.0"),
        (GPL_3_TEXT, "GPL-3.0"),
        (LGPL_2_1_TEXT, "LGPL-2.1"),
        (LGPL_3_TEXT, "LGPL-3.0"),
        (AGPL_3_TEXT, "AGPL-3.0"),
        (MPL_2_TEXT, "MPL-2.0"),
        (UNLICENSE_TEXT, "Unlicense"),
        (CC0_TEXT, "CC0-1.0"),
        (CC_BY_4_TEXT, "CC-BY-4.0"),
        (BSL_TEXT, "BSL-1.0"),
        (PSF_TEXT, "PSF-2.0"),
    ],
)
def test_classifier_identifies_known_licenses(text: str, expected: str) -> None:
    assert FingerprintLicenseClassifier().classify(text.encode("utf-8")) == expected


def test_classifier_returns_none_for_unknown_text() -> None:
    assert FingerprintLicenseClassifier().classify(UNRECOGNIZED_TEXT.encode()) is None


def test_classifier_rejects_multiple_matches() -> None:
    combined = (MIT_TEXT + "\n" + APACHE_TEXT).encode("utf-8")

    with pytest.raises(LicenseDetectionError):
        FingerprintLicenseClassifier().classify(combined)


def test_classifier_accepts_custom_fingerprints() -> None:
    classifier = FingerprintLicenseClassifier(
        [LicenseFingerprint("Custom-1.0", ("acme   public license",))]
    )
    # Phrases are compared against whitespace-normalized text.
    assert classifier.classify(b"The ACME\n  Public   License") is None
    classifier = FingerprintLicenseClassifier(
        [LicenseFingerprint("Custom-1.0", ("acme public license",))]
    )
    assert classifier.classify(b"The ACME\n  Public   License") == "Custom-1.0"


def test_detect_license_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "LICENSE"
    path.write_text(MIT_TEXT, encoding="utf-8")

    assert detect_license(LocalFileSystem(), str(path), FingerprintLicenseClassifier()) == "MIT"


def test_detect_license_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LicenseDetectionError):
        detect_license(
            LocalFileSystem(), str(tmp_path / "LICENSE"), FingerprintLicenseClassifier()
        )


def test_detect_license_raises_when_nothing_matches(tmp_path: Path) -> None:
    path = tmp_path / "LICENSE"
    path.write_text(UNRECOGNIZED_TEXT, encoding="utf-8")

    with pytest.raises(LicenseDetectionError):
        detect_license(LocalFileSystem(), str(path), FingerprintLicenseClassifier())


def test_every_default_fingerprint_is_exercised() -> None:
    covered = {
        "Apache-2.0", "MIT", "BSD-2-Clause", "BSD-3-Clause", "ISC", "0BSD", "GPL-2.0",
        "GPL-3.0", "LGPL-2.1", "LGPL-3.0", "AGPL-3.0", "MPL-2.0", "Unlicense", "CC0-1.0",
        "CC-BY-4.0", "BSL-1.0", "PSF-2.0",
    }
    assert {fingerprint.identifier for fingerprint in DEFAULT_FINGERPRINTS} == covered


def test_zero_clause_bsd_is_not_reported_as_isc() -> None:
    assert FingerprintLicenseClassifier().classify(ZERO_BSD_TEXT.encode("utf-8")) == "0BSD"


def test_psf_file_with_zero_clause_bsd_section_is_ambiguous() -> None:
    with pytest.raises(LicenseDetectionError):
        FingerprintLicenseClassifier().classify(PSF_WITH_ZERO_BSD_TEXT.encode("utf-8"))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (ISC_IN_C_COMMENT_TEXT, "ISC"),
        (MIT_IN_HASH_COMMENT_TEXT, "MIT"),
    ],
)
def test_classifier_reads_license_inside_comment_blocks(text: str, expected: str) -> None:
    assert FingerprintLicenseClassifier().classify(text.encode("utf-8")) == expected


def test_normalize_license_text_drops_comment_markers() -> None:
    data = b"/*\n * Line one\n *   line two */\n// line three\n# line four\n"

    assert normalize_license_text(data) == "line one line two line three line four"
