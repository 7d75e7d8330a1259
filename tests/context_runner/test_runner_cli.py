from __future__ import annotations

import io
import json
import runpy
from pathlib import Path

import pytest

import context_runner.main as main_module
from challenge_kit.config.loader import ConfigError
from challenge_kit.observability.sinks import MemoryLogSink
from context_runner.app.cli import describe, parse_args, run, run_demo
from context_runner.config.loader import load_config
from context_runner.config.models import RunnerConfig
from context_runner.domain.errors import Cancelled
from context_runner.services.context_manager import SimpleContextManager


def test_packaged_demo_config_loads() -> None:
    config = load_config()
    assert config.values == {"user": "alice", "requestID": "12345"}
    assert config.items == ["alpha", "beta", "gamma"]


def test_load_config_rejects_negative_durations(tmp_path: Path) -> None:
    path = tmp_path / "runner.yml"
    path.write_text("version: 1\nwait_seconds: -1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "runner.yml"
    path.write_text("version: 1\nretries: 3\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="retries"):
        load_config(path)


def test_parse_args_reads_config_flag() -> None:
    assert parse_args(["--config", "runner.yml"]).config == "runner.yml"


def test_describe() -> None:
    assert describe(None) == "ok"
    assert describe(Cancelled()) == "context canceled"


def test_run_demo_walkthrough() -> None:
    config = RunnerConfig(
        task_seconds=0.01,
        wait_seconds=2.0,
        cancel_after_seconds=0.05,
        items=["a", "b", "c"],
        item_delay_seconds=0.2,
        batch_timeout_seconds=0.3,
    )
    out = io.StringIO()
    sink = MemoryLogSink()
    manager = SimpleContextManager(log_sink=sink)

    run_demo(config, manager, out, log_sink=sink)

    assert out.getvalue().splitlines() == [
        "Context Management Challenge",
        "Context created with values!",
        "  user = alice",
        "  requestID = 12345",
        "Task finished: ok",
        "Wait finished: context deadline exceeded",
        "Processed 2/3 items: ['processed_a', 'processed_b'] (context deadline exceeded)",
    ]
    assert manager.diagnostics_counters()["completed"] == 1
    assert "batch interrupted" in sink.texts()


def test_run_with_stdout_logging(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "runner.yml"
    path.write_text(
        "\n".join(
            [
                "version: 1",
                "task_seconds: 0",
                "wait_seconds: 0",
                "items: [x]",
                "item_delay_seconds: 0",
                "batch_timeout_seconds: 5",
                "logging:",
                "  sink: stdout",
            ]
        ),
        encoding="utf-8",
    )
    assert run(["--config", str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "Processed 1/1 items: ['processed_x'] (ok)" in lines
    log_lines = [json.loads(line) for line in lines if line.startswith("{")]
    assert any(item["message"] == "batch completed" for item in log_lines)


def test_run_returns_2_on_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "runner.yml"
    path.write_text("version: 1\nitems: nope\n", encoding="utf-8")
    assert run(["--config", str(path)]) == 2
    assert "config error" in capsys.readouterr().err


def test_main_delegates_to_run(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def _fake_run(argv: list[str] | None) -> int:
        seen["argv"] = argv
        return 5

    monkeypatch.setattr(main_module, "run", _fake_run)
    assert main_module.main([]) == 5
    assert seen["argv"] == []


def test_module_main_exits_with_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "main", lambda _argv=None: 4)
    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("context_runner", run_name="__main__")
    assert excinfo.value.code == 4
