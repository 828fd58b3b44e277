import logging

import click

from openspec.cli.commands.config import config_group
from openspec.cli.commands.init import init_cmd
from openspec.cli.commands.list_cmd import list_cmd
from openspec.cli.commands.new import new_group
from openspec.cli.commands.update import update_cmd
from openspec.cli.output import user_output
from openspec.core.context import create_context
from openspec.core.errors import OpenSpecError

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


class OpenSpecGroup(click.Group):
    """Root group that renders OpenSpecError as a one-line error and exit code 1."""

    def invoke(self, ctx: click.Context) -> object:
        try:
            return super().invoke(ctx)
        except OpenSpecError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None


@click.group(cls=OpenSpecGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="openspec")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Spec-driven development scaffolding for AI coding assistants."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(config_group)
cli.add_command(init_cmd)
cli.add_command(list_cmd)
cli.add_command(new_group)
cli.add_command(update_cmd)


def main() -> None:
    """CLI entry point used by the `openspec` console script."""
    cli()
