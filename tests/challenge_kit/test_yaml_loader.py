from __future__ import annotations

from pathlib import Path

import pytest

from challenge_kit.config.loader import ConfigError, load_yaml_mapping, validate_model
from challenge_kit.config.models import LoggingConfig


def test_load_yaml_mapping_happy_path(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("version: 1\nitems:\n  - a\n", encoding="utf-8")
    raw = load_yaml_mapping(path, allowed={"version", "items"}, required=("version",))
    assert raw == {"version": 1, "items": ["a"]}


def test_load_yaml_mapping_rejects_non_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_yaml_mapping(path)


def test_load_yaml_mapping_rejects_unknown_keys(tmp_path: Path) -> None:
    # Unknown top-level keys fail fast.
    path = tmp_path / "config.yml"
    path.write_text("version: 1\nsurprise: true\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="surprise"):
        load_yaml_mapping(path, allowed={"version"})


def test_load_yaml_mapping_reports_missing_required_keys(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("items: []\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="version"):
        load_yaml_mapping(path, required=("version",))


def test_load_yaml_mapping_wraps_missing_file_and_bad_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_yaml_mapping(tmp_path / "absent.yml")

    broken = tmp_path / "broken.yml"
    broken.write_text("version: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_mapping(broken)


def test_validate_model_wraps_pydantic_errors() -> None:
    with pytest.raises(ConfigError):
        validate_model(LoggingConfig, {"sink": "syslog"})


def test_logging_config_requires_path_for_jsonl() -> None:
    with pytest.raises(ConfigError):
        validate_model(LoggingConfig, {"sink": "jsonl"})
    cfg = validate_model(LoggingConfig, {"sink": "jsonl", "path": "log.jsonl"})
    assert cfg.path == "log.jsonl"
