from .logging import LogMessage
from .sinks import (
    JsonlLogSink,
    LogSink,
    MemoryLogSink,
    NullLogSink,
    StdoutLogSink,
    build_log_sink,
)

__all__ = [
    "JsonlLogSink",
    "LogMessage",
    "LogSink",
    "MemoryLogSink",
    "NullLogSink",
    "StdoutLogSink",
    "build_log_sink",
]
