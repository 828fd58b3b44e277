"""openspec new: create new items."""

import datetime

import click

from openspec.cli.output import success, user_output
from openspec.core.changes import create_change
from openspec.core.context import OpenSpecContext
from openspec.core.project import DEFAULT_SCHEMA


@click.group("new")
def new_group() -> None:
    """Create new items."""


@new_group.command("change")
@click.argument("name")
@click.option("--description", default=None, help="Description to add to README.md.")
@click.option(
    "--schema",
    default=DEFAULT_SCHEMA,
    show_default=True,
    help="Workflow schema to use.",
)
@click.pass_obj
def new_change(ctx: OpenSpecContext, name: str, description: str | None, schema: str) -> None:
    """Create a new change directory under openspec/changes.

    Examples:

        openspec new change add-dark-mode

        openspec new change add-dark-mode --description "Theme toggle in settings"
    """
    change_dir = create_change(
        ctx.cwd,
        name,
        schema=schema,
        description=description,
        today=datetime.date.today(),
    )
    location = change_dir.relative_to(ctx.cwd).as_posix()
    user_output(success(f"Created change '{name}' at {location}/ (schema: {schema})"))
