from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class LogMessage:
    # Structured log payload emitted by roster and runner services.
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.level or not self.message:
            raise ValueError("LogMessage requires non-empty level/message")


def info(message: str, **fields: object) -> LogMessage:
    return LogMessage(level="info", message=message, fields=fields)


def warning(message: str, **fields: object) -> LogMessage:
    return LogMessage(level="warning", message=message, fields=fields)


def debug(message: str, **fields: object) -> LogMessage:
    return LogMessage(level="debug", message=message, fields=fields)
