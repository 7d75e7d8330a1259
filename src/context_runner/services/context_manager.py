from __future__ import annotations

import itertools
import queue
import threading
from collections.abc import Callable, Hashable
from datetime import timedelta
from typing import Literal, Protocol, runtime_checkable

from challenge_kit.observability.logging import debug, warning
from challenge_kit.observability.sinks import LogSink, NullLogSink
from context_runner.domain.context import (
    CancelFunc,
    Context,
    with_cancel,
    with_timeout,
    with_value,
)
from context_runner.domain.durations import to_seconds
from context_runner.domain.errors import ContextError

# A task either raises or returns an exception instance to report failure; anything else is success.
TaskFn = Callable[[], object]

_Source = Literal["task", "context"]


@runtime_checkable
class ContextManager(Protocol):
    # Facade over the context tree plus the cancellable execution helpers.
    def create_cancellable_context(self, parent: Context) -> tuple[Context, CancelFunc]:
        raise NotImplementedError("ContextManager.create_cancellable_context must be implemented")

    def create_timeout_context(
        self, parent: Context, timeout: float | timedelta
    ) -> tuple[Context, CancelFunc]:
        raise NotImplementedError("ContextManager.create_timeout_context must be implemented")

    def add_value(self, parent: Context, key: Hashable, value: object) -> Context:
        raise NotImplementedError("ContextManager.add_value must be implemented")

    def get_value(self, ctx: Context, key: Hashable) -> tuple[object | None, bool]:
        raise NotImplementedError("ContextManager.get_value must be implemented")

    def execute_with_context(self, ctx: Context, task: TaskFn) -> BaseException | None:
        raise NotImplementedError("ContextManager.execute_with_context must be implemented")

    def wait_for_completion(self, ctx: Context, duration: float | timedelta) -> ContextError | None:
        raise NotImplementedError("ContextManager.wait_for_completion must be implemented")


class SimpleContextManager(ContextManager):
    """Thread-backed ContextManager.

    ``execute_with_context`` runs each task on its own daemon thread and races
    it against the context. When the context wins, the thread is left running:
    Python threads cannot be interrupted, so tasks that must stop early should
    poll the context themselves. Such leftovers are counted as ``detached``.
    """

    def __init__(self, *, log_sink: LogSink | None = None) -> None:
        self._log = log_sink or NullLogSink()
        self._lock = threading.Lock()
        self._task_ids = itertools.count(1)
        self._counters: dict[str, int] = {
            "executed": 0,
            "completed": 0,
            "failed": 0,
            "cancelled": 0,
            "detached": 0,
            "rejected": 0,
            "waits": 0,
            "wait_cancelled": 0,
        }

    def create_cancellable_context(self, parent: Context) -> tuple[Context, CancelFunc]:
        return with_cancel(parent)

    def create_timeout_context(
        self, parent: Context, timeout: float | timedelta
    ) -> tuple[Context, CancelFunc]:
        return with_timeout(parent, to_seconds(timeout))

    def add_value(self, parent: Context, key: Hashable, value: object) -> Context:
        return with_value(parent, key, value)

    def get_value(self, ctx: Context, key: Hashable) -> tuple[object | None, bool]:
        # None doubles as the "absent" marker, so a stored None reads as not found.
        value = ctx.value(key)
        if value is None:
            return None, False
        return value, True

    def execute_with_context(self, ctx: Context, task: TaskFn) -> BaseException | None:
        task_id = next(self._task_ids)
        self._increment("executed")

        # A context that is already done pre-empts the task; it is never started.
        reason = ctx.err()
        if reason is not None:
            self._increment("rejected")
            self._log.emit(debug("task rejected", task_id=task_id, reason=str(reason)))
            return reason

        # One-slot channel: whichever side offers first decides the outcome.
        outcome: queue.Queue[tuple[_Source, BaseException | None]] = queue.Queue(maxsize=1)

        def offer(source: _Source, result: BaseException | None) -> None:
            try:
                outcome.put_nowait((source, result))
            except queue.Full:
                pass

        def on_done(done_ctx: Context) -> None:
            offer("context", done_ctx.err())

        def run_task() -> None:
            try:
                returned = task()
            except Exception as exc:
                offer("task", exc)
                return
            except BaseException as exc:
                # Re-raised by the caller below.
                offer("task", exc)
                return
            offer("task", returned if isinstance(returned, BaseException) else None)

        worker = threading.Thread(target=run_task, name=f"context-task-{task_id}", daemon=True)
        worker.start()
        ctx.add_done_callback(on_done)
        try:
            source, result = outcome.get()
        finally:
            ctx.remove_done_callback(on_done)

        if source == "context":
            self._increment("cancelled")
            if worker.is_alive():
                self._increment("detached")
                self._log.emit(warning("task detached", task_id=task_id, reason=str(result)))
            else:
                self._log.emit(debug("task cancelled", task_id=task_id, reason=str(result)))
            return result

        if result is not None and not isinstance(result, Exception):
            # KeyboardInterrupt/SystemExit from the task are not task results.
            raise result
        self._increment("failed" if result is not None else "completed")
        self._log.emit(debug("task finished", task_id=task_id, ok=result is None))
        return result

    def wait_for_completion(self, ctx: Context, duration: float | timedelta) -> ContextError | None:
        self._increment("waits")
        if ctx.wait(max(to_seconds(duration), 0.0)):
            self._increment("wait_cancelled")
            return ctx.err()
        return None

    def diagnostics_counters(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def _increment(self, key: str) -> None:
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + 1


def new_context_manager(*, log_sink: LogSink | None = None) -> SimpleContextManager:
    return SimpleContextManager(log_sink=log_sink)

