from .cli import build_parser, format_employee, parse_args, run, run_scenario

# app package exports CLI helpers for reuse in tests and entrypoints.
__all__ = ["build_parser", "format_employee", "parse_args", "run", "run_scenario"]
