"""openspec list: show active changes or specs."""

import datetime
import json

import click

from openspec.cli.output import machine_output, user_output
from openspec.core.changes import ChangeSummary, list_changes, list_specs
from openspec.core.context import OpenSpecContext
from openspec.core.errors import ValidationError
from openspec.core.project import is_initialized


def format_relative_time(then: datetime.datetime, now: datetime.datetime) -> str:
    """Format a timestamp as a short age such as "3h ago"."""
    delta = now - then
    if delta.days > 30:
        return then.date().isoformat()
    if delta.days > 0:
        return f"{delta.days}d ago"
    if delta.seconds >= 3600:
        return f"{delta.seconds // 3600}h ago"
    if delta.seconds >= 60:
        return f"{delta.seconds // 60}m ago"
    return "just now"


def _format_task_status(change: ChangeSummary) -> str:
    if change.status == "no-tasks":
        return "No tasks"
    if change.status == "complete":
        return "✓ Complete"
    return f"{change.completed_tasks}/{change.total_tasks} tasks"


def _list_changes(ctx: OpenSpecContext, sort: str, output_json: bool) -> None:
    if not is_initialized(ctx.cwd):
        raise ValidationError("No OpenSpec changes directory found. Run 'openspec init' first.")

    changes = list_changes(ctx.cwd)
    if sort == "recent":
        changes.sort(key=lambda change: change.last_modified, reverse=True)

    if output_json:
        data = [
            {
                "name": change.name,
                "completedTasks": change.completed_tasks,
                "totalTasks": change.total_tasks,
                "lastModified": change.last_modified.isoformat(),
                "status": change.status,
            }
            for change in changes
        ]
        machine_output(json.dumps({"changes": data}, indent=2))
        return

    if not changes:
        user_output("No active changes found.")
        return

    now = datetime.datetime.now(datetime.UTC)
    width = max(len(change.name) for change in changes)
    user_output("Changes:")
    for change in changes:
        status = _format_task_status(change)
        age = format_relative_time(change.last_modified, now)
        user_output(f"  {change.name.ljust(width)}     {status.ljust(12)}  {age}")


def _list_specs(ctx: OpenSpecContext, output_json: bool) -> None:
    specs = list_specs(ctx.cwd)

    if output_json:
        data = [{"id": spec.name, "requirementCount": spec.requirement_count} for spec in specs]
        machine_output(json.dumps({"specs": data}, indent=2))
        return

    if not specs:
        user_output("No specs found.")
        return

    width = max(len(spec.name) for spec in specs)
    user_output("Specs:")
    for spec in specs:
        user_output(f"  {spec.name.ljust(width)}     requirements {spec.requirement_count}")


@click.command("list")
@click.option("--specs", "show_specs", is_flag=True, help="List specs instead of changes.")
@click.option("--changes", "show_changes", is_flag=True, help="List changes (default).")
@click.option(
    "--sort",
    type=click.Choice(["recent", "name"]),
    default="recent",
    show_default=True,
    help="Sort order for changes.",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON for scripting.")
@click.pass_obj
def list_cmd(
    ctx: OpenSpecContext, show_specs: bool, show_changes: bool, sort: str, output_json: bool
) -> None:
    """List active changes, or specs with --specs.

    Examples:

        openspec list

        openspec list --specs --json
    """
    if show_specs and show_changes:
        raise ValidationError("Use either --specs or --changes, not both.")
    if show_specs:
        _list_specs(ctx, output_json)
        return
    _list_changes(ctx, sort, output_json)
