from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from challenge_kit.config.loader import ConfigError
from challenge_kit.observability.sinks import build_log_sink
from employee_roster.config.loader import load_config
from employee_roster.config.models import RosterConfig
from employee_roster.domain.employee import Employee
from employee_roster.services.manager import Manager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Employee roster demo")
    parser.add_argument("--config", help="Path to YAML scenario (defaults to the packaged demo)")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def format_employee(employee: Employee) -> str:
    return (
        f"{{ID:{employee.id} Name:{employee.name} Age:{employee.age} "
        f"Salary:{employee.salary:g}}}"
    )


def run_scenario(config: RosterConfig, manager: Manager, out: TextIO) -> None:
    for decl in config.employees:
        manager.add_employee(decl.to_employee())
    for employee_id in config.remove:
        manager.remove_employee(employee_id)

    print(f"Average Salary: {manager.get_average_salary():f}", file=out)
    if config.find is None:
        return
    employee = manager.find_employee_by_id(config.find)
    if employee is not None:
        print(f"Employee found: {format_employee(employee)}", file=out)
    else:
        print(f"Employee {config.find} not found", file=out)


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2

    sink = build_log_sink(config.logging)
    manager = Manager(log_sink=sink)
    try:
        run_scenario(config, manager, sys.stdout)
    finally:
        close = getattr(sink, "close", None)
        if close is not None:
            close()
    return 0
