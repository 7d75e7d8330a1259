from __future__ import annotations

import time
from datetime import timedelta

import pytest

from challenge_kit.observability.sinks import MemoryLogSink
from context_runner.domain.context import background, with_cancel, with_timeout
from context_runner.domain.errors import Cancelled, DeadlineExceeded
from context_runner.services.work import process_items, simulate_work


def test_simulate_work_completes() -> None:
    sink = MemoryLogSink()
    assert simulate_work(background(), 0.02, "short job", log_sink=sink) is None
    assert sink.texts() == ["work started", "work completed"]


def test_simulate_work_stops_on_timeout() -> None:
    sink = MemoryLogSink()
    ctx, cancel = with_timeout(background(), 0.05)
    started = time.monotonic()
    try:
        result = simulate_work(ctx, 5.0, "long job", log_sink=sink)
    finally:
        cancel()
    assert isinstance(result, DeadlineExceeded)
    assert time.monotonic() - started < 2.0
    assert sink.texts()[-1] == "work cancelled"


def test_simulate_work_on_cancelled_context() -> None:
    ctx, cancel = with_cancel(background())
    cancel()
    assert isinstance(simulate_work(ctx, 1.0, "never"), Cancelled)


def test_simulate_work_accepts_timedelta() -> None:
    assert simulate_work(background(), timedelta(milliseconds=20), "short job") is None


@pytest.mark.parametrize("duration", ["1.0", True, None])
def test_simulate_work_rejects_non_numeric_duration(duration: object) -> None:
    sink = MemoryLogSink()
    with pytest.raises(TypeError):
        simulate_work(background(), duration, "bad job", log_sink=sink)  # type: ignore[arg-type]
    assert sink.texts() == []


def test_process_items_completes_all() -> None:
    results, err = process_items(background(), ["a", "b", "c"], item_delay=0.01)
    assert results == ["processed_a", "processed_b", "processed_c"]
    assert err is None


def test_process_items_returns_partial_results_on_timeout() -> None:
    # Checks run at ~0.0s, ~0.2s and ~0.4s; the 0.3s deadline lands before the third.
    ctx, cancel = with_timeout(background(), 0.3)
    try:
        results, err = process_items(ctx, ["a", "b", "c"], item_delay=0.2)
    finally:
        cancel()
    assert results == ["processed_a", "processed_b"]
    assert isinstance(err, DeadlineExceeded)


def test_process_items_on_cancelled_context_processes_nothing() -> None:
    ctx, cancel = with_cancel(background())
    cancel()
    results, err = process_items(ctx, ["a"], item_delay=0)
    assert results == []
    assert isinstance(err, Cancelled)


def test_process_items_custom_transform_and_logging() -> None:
    sink = MemoryLogSink()
    results, err = process_items(
        background(), iter(["x", "y"]), item_delay=0, transform=str.upper, log_sink=sink
    )
    assert results == ["X", "Y"]
    assert err is None
    assert sink.texts() == ["batch completed"]


def test_process_items_empty_input() -> None:
    assert process_items(background(), [], item_delay=0) == ([], None)
