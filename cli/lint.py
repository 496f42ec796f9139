"""CLI wrappers: Lint and format."""

from __future__ import annotations

from cli._runner import run_module

_PATHS = ("datamod", "tests", "cli", "example_usage.py")


def main() -> None:
    run_module("ruff", "check", *_PATHS)


def format_main() -> None:
    run_module("ruff", "format", *_PATHS)
