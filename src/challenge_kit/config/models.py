from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator


class LoggingConfig(BaseModel):
    # Logging section shared by both apps; selects a structured log sink.
    model_config = ConfigDict(extra="forbid")
    sink: Literal["none", "stdout", "jsonl"] = "none"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path_for_jsonl(self) -> LoggingConfig:
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when logging.sink is 'jsonl'")
        return self
