from __future__ import annotations

import json
import sys
import threading
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

from challenge_kit.config.models import LoggingConfig
from challenge_kit.observability.logging import LogMessage


@runtime_checkable
class LogSink(Protocol):
    # Port for structured log delivery; services receive a sink instead of a global logger.
    def emit(self, message: LogMessage) -> None:
        """Consume one LogMessage."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")


class NullLogSink:
    # Default sink: drops everything.
    def emit(self, message: LogMessage) -> None:
        _ = message


class StdoutLogSink:
    # One JSON object per line; stream is injectable so demo output and logs can be split.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, message: LogMessage) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        line = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
        with self._lock:
            print(line, file=stream)


class JsonlLogSink:
    # File-backed structured log sink.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")
        self._lock = threading.Lock()

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
        with self._lock:
            self._file.write(payload + "\n")
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            self._file.close()


class MemoryLogSink:
    # Collects messages in order; used by tests and diagnostics.
    def __init__(self) -> None:
        self._messages: list[LogMessage] = []
        self._lock = threading.Lock()

    def emit(self, message: LogMessage) -> None:
        with self._lock:
            self._messages.append(message)

    @property
    def messages(self) -> list[LogMessage]:
        with self._lock:
            return list(self._messages)

    def texts(self) -> list[str]:
        return [item.message for item in self.messages]


def build_log_sink(config: LoggingConfig | None) -> NullLogSink | StdoutLogSink | JsonlLogSink:
    if config is None or config.sink == "none":
        return NullLogSink()
    if config.sink == "stdout":
        return StdoutLogSink()
    assert config.path is not None
    return JsonlLogSink(Path(config.path))


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
