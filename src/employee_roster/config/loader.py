from __future__ import annotations

from pathlib import Path

from challenge_kit.config.loader import load_yaml_mapping, validate_model
from employee_roster.config.models import RosterConfig

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "demo_config.yml"

_ALLOWED_KEYS = {"version", "employees", "remove", "find", "logging"}


def load_config(path: Path | None = None) -> RosterConfig:
    # Packaged demo scenario is used when no path is given.
    raw = load_yaml_mapping(path or DEFAULT_CONFIG_PATH, allowed=_ALLOWED_KEYS, required=("version",))
    return validate_model(RosterConfig, raw)
