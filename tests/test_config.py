"""Tests for kitgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from kitgen.config import ConfigError, KitgenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, KitgenConfig)
    assert config.root == tmp_path.resolve()
    assert config.package is None
    assert config.catchall_threshold == 5


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".kitgen.yml"
    config_file.write_text(
        """
package:
  name: "mymodel"
  version: "1.2.0"
  description: "A tiny model"
  authors: [Ada, Grace]
  license: Apache-2.0
generation:
  catchall_threshold: 10
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.package is not None
    assert config.package.name == "mymodel"
    assert config.package.version == "1.2.0"
    assert config.package.description == "A tiny model"
    assert config.package.authors == ["Ada", "Grace"]
    assert config.package.license == "Apache-2.0"
    assert config.catchall_threshold == 10


def test_load_config_ignores_invalid_values(tmp_path: Path) -> None:
    (tmp_path / ".kitgen.yml").write_text(
        "package:\n  name: [1, 2]\ngeneration:\n  catchall_threshold: many\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.package is None
    assert config.catchall_threshold == 5


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".kitgen.yml").write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".kitgen.yml").write_text("package: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_ignores_parent_config_for_missing_directory(tmp_path: Path) -> None:
    (tmp_path / ".kitgen.yml").write_text("- not a mapping\n", encoding="utf-8")
    missing = tmp_path / "missing"

    config = load_config(missing)

    assert config.root == missing.resolve()
    assert config.package is None


def test_load_config_ignores_parent_config_for_regular_file(tmp_path: Path) -> None:
    (tmp_path / ".kitgen.yml").write_text("package: [unclosed\n", encoding="utf-8")
    target = tmp_path / "model.bin"
    target.write_bytes(b"\0")

    config = load_config(target)

    assert config.package is None
    assert config.catchall_threshold == 5
