"""Real console implementation using click prompts and sys.stdin.isatty()."""

import os
import sys

import click

from openspec.gateway.console.abc import Console


class RealConsole(Console):
    """Production implementation backed by the process terminal."""

    def is_stdin_interactive(self) -> bool:
        """Check if stdin is an interactive terminal outside CI.

        OPENSPEC_INTERACTIVE=0 forces non-interactive behavior.
        """
        if os.environ.get("OPENSPEC_INTERACTIVE") == "0":
            return False
        if os.environ.get("CI"):
            return False
        return sys.stdin.isatty()

    def confirm(self, question: str, *, default: bool) -> bool:
        return click.confirm(question, default=default)

    def prompt(self, text: str, *, default: str) -> str:
        return click.prompt(text, default=default, show_default=True)
