"""openspec init: first-time setup of a project."""

import os
from pathlib import Path

import click

from openspec.artifacts.legacy import detect_legacy_artifacts, format_detection_summary
from openspec.artifacts.reconcile import ReconcileRunSummary, reconcile_tools
from openspec.artifacts.status import get_configured_tools
from openspec.cli.commands.common import (
    parse_tools_arg,
    perform_legacy_cleanup,
    render_failures,
    render_removal_counts,
    run_migration,
)
from openspec.cli.output import dim, user_output, warning
from openspec.core.context import OpenSpecContext
from openspec.core.errors import ValidationError
from openspec.core.project import (
    DEFAULT_SCHEMA,
    ProjectConfigResult,
    create_directory_structure,
    create_project_config,
    is_initialized,
)
from openspec.core.resolver import DesiredState, parse_profile_override, resolve_desired_state
from openspec.tools.registry import (
    detect_available_tools,
    get_tool,
    tool_display_name,
    tools_with_skills_dir,
)


def _validate_project_dir(project_dir: Path) -> None:
    if project_dir.exists() and not project_dir.is_dir():
        raise ValidationError(f"Path is not a directory: {project_dir}")
    existing = project_dir
    while not existing.exists():
        existing = existing.parent
    if not os.access(existing, os.W_OK):
        raise ValidationError(f"Insufficient permissions to write to {project_dir}")


def _handle_legacy(
    ctx: OpenSpecContext, project_dir: Path, *, force: bool, can_prompt: bool
) -> None:
    detection = detect_legacy_artifacts(project_dir)
    if not detection.has_legacy_artifacts:
        return

    user_output()
    user_output(format_detection_summary(detection))
    user_output()

    if force:
        perform_legacy_cleanup(project_dir, detection)
        return

    if not can_prompt:
        user_output(click.style("Legacy files detected in non-interactive mode.", fg="red"))
        user_output(dim("Run interactively to upgrade, or use --force to auto-cleanup."))
        raise SystemExit(1)

    if not ctx.console.confirm("Upgrade and clean up legacy files?", default=True):
        user_output(dim("Initialization cancelled."))
        user_output(dim("Run with --force to skip this prompt, or manually remove legacy files."))
        raise SystemExit(0)

    perform_legacy_cleanup(project_dir, detection)


def _prompt_for_tools(ctx: OpenSpecContext, project_dir: Path, detected: list[str]) -> list[str]:
    available = tools_with_skills_dir()
    configured = get_configured_tools(project_dir)
    preselected = [t for t in available if t in configured or t in detected]

    if detected:
        names = ", ".join(tool_display_name(tool_id) for tool_id in detected)
        user_output(f"Detected: {names}")
    user_output(f"Available tools: {', '.join(available)}")

    answer = ctx.console.prompt(
        f"Select tools to set up ({len(available)} available, comma-separated)",
        default=",".join(preselected),
    )
    if not answer.strip():
        raise ValidationError("At least one tool must be selected")
    selected = parse_tools_arg(answer)
    if not selected:
        raise ValidationError("At least one tool must be selected")
    return selected


def _render_summary(
    desired: DesiredState,
    selected: list[str],
    previously_configured: set[str],
    summary: ReconcileRunSummary,
    config_result: ProjectConfigResult,
) -> None:
    succeeded = [r.tool_id for r in summary.results if r.state == "reconciled"]
    created = [t for t in succeeded if t not in previously_configured]
    refreshed = [t for t in succeeded if t in previously_configured]

    user_output()
    user_output(click.style("OpenSpec Setup Complete", bold=True))
    user_output()

    if created:
        user_output(f"Created: {', '.join(tool_display_name(t) for t in created)}")
    if refreshed:
        user_output(f"Refreshed: {', '.join(tool_display_name(t) for t in refreshed)}")

    if succeeded:
        skill_count = len(desired.workflows) if desired.generate_skills else 0
        command_count = len(desired.workflows) if desired.generate_commands else 0
        tool_dirs = ", ".join(
            tool.skills_dir
            for tool_id in succeeded
            if (tool := get_tool(tool_id)) is not None and tool.skills_dir is not None
        )
        if skill_count and command_count:
            user_output(f"{skill_count} skills and {command_count} commands in {tool_dirs}/")
        elif skill_count:
            user_output(f"{skill_count} skills in {tool_dirs}/")
        elif command_count:
            user_output(f"{command_count} commands in {tool_dirs}/")

    render_failures(summary)
    if summary.commands_unsupported:
        skipped = ", ".join(summary.commands_unsupported)
        user_output(dim(f"Commands skipped for: {skipped} (no adapter)"))
    render_removal_counts(summary)

    if config_result.status == "created":
        user_output(f"Config: openspec/config.yaml (schema: {DEFAULT_SCHEMA})")
    elif config_result.status == "exists":
        user_output("Config: openspec/config.yaml (exists)")
    elif config_result.status == "failed":
        error = config_result.error
        user_output(warning(f"Config: could not write openspec/config.yaml ({error})"))
    else:
        user_output(dim("Config: skipped (non-interactive mode)"))

    user_output()
    if "propose" in desired.workflows:
        user_output(click.style("Getting started:", bold=True))
        user_output('  Start your first change: /opsx:propose "your idea"')
    elif "new" in desired.workflows:
        user_output(click.style("Getting started:", bold=True))
        user_output('  Start your first change: /opsx:new "your idea"')
    else:
        user_output("Done. Run 'openspec config set profile' to configure your workflows.")

    if selected and succeeded:
        user_output()
        user_output("Restart your IDE for slash commands to take effect.")


@click.command("init")
@click.argument(
    "path",
    required=False,
    default=".",
    type=click.Path(path_type=Path),
)
@click.option(
    "--tools",
    "tools_arg",
    default=None,
    help='Configure tools non-interactively: "all", "none", or a comma-separated list of ids.',
)
@click.option("--force", is_flag=True, help="Auto-cleanup legacy files without prompting.")
@click.option(
    "--profile",
    "profile_arg",
    default=None,
    help="Override the global profile for this run (core or custom).",
)
@click.pass_obj
def init_cmd(
    ctx: OpenSpecContext,
    path: Path,
    tools_arg: str | None,
    force: bool,
    profile_arg: str | None,
) -> None:
    """Set up OpenSpec in a project and generate tool artifacts."""
    project_dir = (ctx.cwd / path).resolve()

    # Validation happens before anything on disk changes
    override = parse_profile_override(profile_arg)
    tools_from_flag = parse_tools_arg(tools_arg)
    _validate_project_dir(project_dir)

    extend_mode = is_initialized(project_dir)
    can_prompt = ctx.console.is_stdin_interactive()
    detected = [tool.tool_id for tool in detect_available_tools(project_dir)]

    if tools_from_flag is None and not can_prompt and not detected:
        raise ValidationError(
            "No tools detected and no --tools flag provided. Valid tools:\n  "
            + "\n  ".join(tools_with_skills_dir())
            + "\n\nUse --tools all, --tools none, or --tools claude,cursor,..."
        )

    _handle_legacy(ctx, project_dir, force=force, can_prompt=can_prompt)

    config = ctx.config_store.read()
    if extend_mode:
        config = run_migration(ctx, project_dir, detected, config)

    desired = resolve_desired_state(config, override)

    if can_prompt and desired.profile == "custom" and desired.workflows:
        workflows = ", ".join(desired.workflows)
        user_output(f"Applying custom profile ({len(desired.workflows)} workflows): {workflows}")
        if not ctx.console.confirm(
            "Proceed? Or run 'openspec config set profile' to change.", default=True
        ):
            user_output("Run 'openspec config set profile' to update your profile, then try again.")
            return

    if tools_from_flag is not None:
        selected = tools_from_flag
    elif not can_prompt:
        selected = detected
    else:
        selected = _prompt_for_tools(ctx, project_dir, detected)

    previously_configured = set(get_configured_tools(project_dir))

    create_directory_structure(project_dir)
    summary = reconcile_tools(project_dir, selected, desired, ctx.current_version, force=True)
    config_result = create_project_config(project_dir, allowed=can_prompt or force)

    _render_summary(desired, selected, previously_configured, summary, config_result)
