from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from challenge_kit.config.models import LoggingConfig


class RunnerConfig(BaseModel):
    # Timings for the demo walk-through; all durations are seconds.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    values: dict[str, str] = Field(default_factory=lambda: {"user": "alice", "requestID": "12345"})
    task_seconds: float = Field(default=0.05, ge=0)
    wait_seconds: float = Field(default=0.5, ge=0)
    cancel_after_seconds: float = Field(default=0.1, ge=0)
    items: list[str] = Field(default_factory=lambda: ["alpha", "beta", "gamma"])
    item_delay_seconds: float = Field(default=0.1, ge=0)
    batch_timeout_seconds: float = Field(default=0.15, ge=0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
