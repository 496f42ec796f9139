"""
Shared CLI runner helper.

Wrappers exposed as console scripts in pyproject.toml delegate here so every
command runs with the current interpreter and propagates its exit code.
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Sequence


def run(cmd: Sequence[str]) -> None:
    """
    Run a command and exit with its return code.

    Example:
        >>> run([sys.executable, "-m", "pytest", "-q"])
    """
    result = subprocess.run(cmd)
    raise SystemExit(result.returncode)


def run_module(module: str, *args: str) -> None:
    """Run ``python -m <module>`` with extra command-line arguments appended."""
    run([sys.executable, "-m", module, *args, *sys.argv[1:]])
