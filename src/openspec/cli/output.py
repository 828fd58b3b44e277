"""Output helpers separating human-readable messages from machine-readable values.

user_output goes to stderr so that machine_output on stdout stays pipeable
(e.g. `openspec config get profile`).
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Print a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str) -> None:
    """Print a value meant for scripts to stdout."""
    click.echo(message)


def success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green")


def failure(message: str) -> str:
    return click.style(f"✗ {message}", fg="red")


def warning(message: str) -> str:
    return click.style(f"⚠ {message}", fg="yellow")


def dim(message: str) -> str:
    return click.style(message, dim=True)
