from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from datetime import timedelta

from challenge_kit.observability.logging import info, warning
from challenge_kit.observability.sinks import LogSink, NullLogSink
from context_runner.domain.context import Context
from context_runner.domain.durations import to_seconds
from context_runner.domain.errors import ContextError


def simulate_work(
    ctx: Context,
    work_duration: float | timedelta,
    description: str,
    *,
    log_sink: LogSink | None = None,
) -> ContextError | None:
    # Waits out work_duration unless ctx finishes first.
    log = log_sink or NullLogSink()
    seconds = to_seconds(work_duration)
    log.emit(info("work started", description=description, seconds=seconds))
    if ctx.wait(max(seconds, 0.0)):
        reason = ctx.err()
        log.emit(warning("work cancelled", description=description, reason=str(reason)))
        return reason
    log.emit(info("work completed", description=description))
    return None


def _default_transform(item: str) -> str:
    return f"processed_{item}"


def process_items(
    ctx: Context,
    items: Iterable[str],
    *,
    item_delay: float = 0.1,
    transform: Callable[[str], str] | None = None,
    log_sink: LogSink | None = None,
) -> tuple[list[str], ContextError | None]:
    """Transform items one by one, checking ``ctx`` before each.

    On interruption the results gathered so far are returned together with the
    cancellation reason. The per-item delay itself is not interrupted.
    """
    log = log_sink or NullLogSink()
    convert = transform or _default_transform
    results: list[str] = []
    for index, item in enumerate(items):
        reason = ctx.err()
        if reason is not None:
            log.emit(warning("batch interrupted", processed=index, reason=str(reason)))
            return results, reason
        time.sleep(item_delay)
        results.append(convert(item))
    log.emit(info("batch completed", processed=len(results)))
    return results, None
