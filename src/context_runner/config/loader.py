from __future__ import annotations

from pathlib import Path

from challenge_kit.config.loader import load_yaml_mapping, validate_model
from context_runner.config.models import RunnerConfig

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "demo_config.yml"

_ALLOWED_KEYS = set(RunnerConfig.model_fields)


def load_config(path: Path | None = None) -> RunnerConfig:
    raw = load_yaml_mapping(path or DEFAULT_CONFIG_PATH, allowed=_ALLOWED_KEYS, required=("version",))
    return validate_model(RunnerConfig, raw)
