from .cli import build_parser, describe, parse_args, run, run_demo

# app package exports CLI helpers for reuse in tests and entrypoints.
__all__ = ["build_parser", "describe", "parse_args", "run", "run_demo"]
