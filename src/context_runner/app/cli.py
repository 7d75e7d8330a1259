from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from challenge_kit.config.loader import ConfigError
from challenge_kit.observability.sinks import LogSink, NullLogSink, build_log_sink
from context_runner.config.loader import load_config
from context_runner.config.models import RunnerConfig
from context_runner.domain.context import background
from context_runner.services.context_manager import SimpleContextManager
from context_runner.services.work import process_items, simulate_work


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Context management demo")
    parser.add_argument("--config", help="Path to YAML timings (defaults to the packaged demo)")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def describe(err: BaseException | None) -> str:
    return "ok" if err is None else str(err)


def run_demo(
    config: RunnerConfig,
    manager: SimpleContextManager,
    out: TextIO,
    *,
    log_sink: LogSink | None = None,
) -> None:
    log = log_sink or NullLogSink()
    print("Context Management Challenge", file=out)

    ctx, cancel = manager.create_cancellable_context(background())
    try:
        for key, value in config.values.items():
            ctx = manager.add_value(ctx, key, value)
        print("Context created with values!", file=out)
        for key in config.values:
            value, found = manager.get_value(ctx, key)
            print(f"  {key} = {value if found else '<missing>'}", file=out)

        err = manager.execute_with_context(
            ctx, lambda: simulate_work(ctx, config.task_seconds, "demo task", log_sink=log)
        )
        print(f"Task finished: {describe(err)}", file=out)

        wait_ctx, wait_cancel = manager.create_timeout_context(ctx, config.cancel_after_seconds)
        try:
            err = manager.wait_for_completion(wait_ctx, config.wait_seconds)
        finally:
            wait_cancel()
        print(f"Wait finished: {describe(err)}", file=out)

        batch_ctx, batch_cancel = manager.create_timeout_context(ctx, config.batch_timeout_seconds)
        try:
            results, err = process_items(
                batch_ctx,
                config.items,
                item_delay=config.item_delay_seconds,
                log_sink=log,
            )
        finally:
            batch_cancel()
        print(
            f"Processed {len(results)}/{len(config.items)} items: {results} ({describe(err)})",
            file=out,
        )
    finally:
        cancel()


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2

    sink = build_log_sink(config.logging)
    manager = SimpleContextManager(log_sink=sink)
    try:
        run_demo(config, manager, sys.stdout, log_sink=sink)
    finally:
        close = getattr(sink, "close", None)
        if close is not None:
            close()
    return 0
