from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


# ConfigError is raised for invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


def load_yaml_mapping(
    path: Path,
    *,
    allowed: Iterable[str] | None = None,
    required: Iterable[str] = (),
) -> dict[str, object]:
    # YAML loader shared by the challenge apps; returns a raw mapping for model validation.
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")

    # Fail fast on unknown keys to prevent silent misconfiguration.
    if allowed is not None:
        unknown = set(raw.keys()) - set(allowed)
        if unknown:
            raise ConfigError(f"Unknown top-level keys: {sorted(unknown)}")

    missing = [key for key in required if key not in raw]
    if missing:
        raise ConfigError(f"Missing required top-level keys: {', '.join(missing)}")
    return raw


def validate_model(model: type[M], raw: dict[str, object]) -> M:
    # Pydantic errors are surfaced as ConfigError so callers handle one exception type.
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
