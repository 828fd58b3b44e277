"""Application context with dependency injection."""

import importlib.metadata
from dataclasses import dataclass
from pathlib import Path

import click

from openspec.gateway.config_store import ConfigStore, RealConfigStore
from openspec.gateway.console import Console, RealConsole


def get_current_version() -> str:
    """Get the currently installed version of openspec.

    Returns:
        Version string (e.g., "1.0.0")
    """
    return importlib.metadata.version("openspec")


@dataclass(frozen=True)
class OpenSpecContext:
    """Immutable context holding all dependencies for openspec operations.

    Created at CLI entry point and threaded through the application. Tests
    inject a context built with fakes instead.

    Attributes:
        config_store: Read/write access to the global config file
        console: Interactive prompts
        cwd: Directory the command was invoked from
        current_version: Version marker embedded in generated files
    """

    config_store: ConfigStore
    console: Console
    cwd: Path
    current_version: str


def create_context() -> OpenSpecContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.
    """
    try:
        cwd = Path.cwd()
    except (FileNotFoundError, OSError):
        click.echo(
            click.style("Error: ", fg="red") + "Current working directory no longer exists",
            err=True,
        )
        raise SystemExit(1) from None

    return OpenSpecContext(
        config_store=RealConfigStore(),
        console=RealConsole(),
        cwd=cwd,
        current_version=get_current_version(),
    )
