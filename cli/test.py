"""CLI wrappers: Run the test suite."""

from __future__ import annotations

import os

from cli._runner import run_module


def main() -> None:
    """Everything except scenario-level integration tests."""
    run_module("pytest", "-q", "-m", "not integration")


def main_all() -> None:
    """Every test; PostgreSQL scenarios skip unless DATAMOD_TEST_POSTGRES_URL is set."""
    run_module("pytest", "-v", "-m", "")


def main_postgres() -> None:
    """Integration tests against PostgreSQL."""
    if not os.environ.get("DATAMOD_TEST_POSTGRES_URL"):
        raise SystemExit("DATAMOD_TEST_POSTGRES_URL must point at a disposable test database")
    run_module("pytest", "-v", "-m", "integration", "-k", "Postgres")
