"""Command implementations.

Each command takes already-collected commits and rich consoles, so the
argument parser and the version-control layer stay outside the core.
"""

from __future__ import annotations

from chronicle.cli.commands.generate import run_generate
from chronicle.cli.commands.lint import run_lint

__all__ = ["run_generate", "run_lint"]
