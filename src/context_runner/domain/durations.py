from __future__ import annotations

from datetime import timedelta


def to_seconds(value: float | timedelta) -> float:
    # Durations are plain seconds or timedelta; strings and bools are rejected.
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"duration must be seconds or timedelta, got {type(value).__name__}")
    return float(value)
