"""Shared support for the challenge packages: YAML config loading and structured logging."""
