"""openspec update: refresh generated artifacts for configured tools."""

from pathlib import Path

import click

from openspec.artifacts.legacy import (
    LegacyDetectionResult,
    detect_legacy_artifacts,
    format_detection_summary,
    get_tools_from_legacy_artifacts,
)
from openspec.artifacts.reconcile import ToolAssessment, assess_tool, reconcile_tools
from openspec.artifacts.status import get_configured_tools
from openspec.cli.commands.common import (
    perform_legacy_cleanup,
    render_failures,
    render_removal_counts,
    run_migration,
    tools_with_generation_support,
)
from openspec.cli.output import dim, success, user_output, warning
from openspec.core.context import OpenSpecContext
from openspec.core.errors import ValidationError
from openspec.core.project import is_initialized
from openspec.core.resolver import resolve_desired_state
from openspec.tools.registry import detect_available_tools, tool_display_name


def _select_legacy_tools(
    ctx: OpenSpecContext, project_dir: Path, detection: LegacyDetectionResult, *, force: bool
) -> list[str]:
    """Pick legacy-only tools to set up with the current layout."""
    configured = set(get_configured_tools(project_dir))
    candidates = [
        tool_id
        for tool_id in tools_with_generation_support(get_tools_from_legacy_artifacts(detection))
        if tool_id not in configured
    ]
    if not candidates:
        return []

    user_output(click.style("Tools detected from legacy artifacts:", bold=True))
    for tool_id in candidates:
        user_output(f"  • {tool_display_name(tool_id)}")
    user_output()

    if force:
        user_output(f"Setting up skills for: {', '.join(candidates)}")
        return candidates

    answer = ctx.console.prompt(
        "Select tools to set up with the new skill system (comma-separated, blank to skip)",
        default=",".join(candidates),
    )
    tokens = list(dict.fromkeys(t.strip().lower() for t in answer.split(",") if t.strip()))
    ignored = [token for token in tokens if token not in candidates]
    if ignored:
        user_output(warning(f"Ignoring unknown tool(s): {', '.join(ignored)}"))
    selected = [token for token in tokens if token in candidates]
    if not selected:
        user_output(dim("Skipping tool setup."))
        user_output()
    return selected


def _handle_legacy(ctx: OpenSpecContext, project_dir: Path, *, force: bool) -> list[str]:
    """Clean up legacy artifacts and return tools newly set up from them.

    Unlike init, a non-interactive run without --force warns and continues.
    """
    detection = detect_legacy_artifacts(project_dir)
    if not detection.has_legacy_artifacts:
        return []

    user_output()
    user_output(format_detection_summary(detection))
    user_output()

    if force:
        perform_legacy_cleanup(project_dir, detection)
        return _select_legacy_tools(ctx, project_dir, detection, force=True)

    if not ctx.console.is_stdin_interactive():
        user_output(warning("Run with --force to auto-cleanup legacy files, or run interactively."))
        user_output()
        return []

    if not ctx.console.confirm("Upgrade and clean up legacy files?", default=True):
        user_output(dim("Skipping legacy cleanup. Continuing with skill update..."))
        user_output()
        return []

    perform_legacy_cleanup(project_dir, detection)
    return _select_legacy_tools(ctx, project_dir, detection, force=False)


def _describe_update(assessment: ToolAssessment, current_version: str) -> str:
    if assessment.state == "needs-version-update":
        from_version = assessment.status.generated_by_version or "unknown"
        return f"{assessment.tool_id} ({from_version} → {current_version})"
    return f"{assessment.tool_id} (config sync)"


def _report_new_tools(project_dir: Path, known: list[str]) -> None:
    new_tools = [tool for tool in detect_available_tools(project_dir) if tool.tool_id not in known]
    if not new_tools:
        return
    user_output()
    for tool in new_tools:
        user_output(warning(f"Detected new tool: {tool.name}. Run 'openspec init' to add it."))


@click.command("update")
@click.argument("path", required=False, default=".", type=click.Path(path_type=Path))
@click.option("--force", is_flag=True, help="Force update even when tools are up to date.")
@click.pass_obj
def update_cmd(ctx: OpenSpecContext, path: Path, force: bool) -> None:
    """Refresh OpenSpec skills and commands for configured tools."""
    project_dir = (ctx.cwd / path).resolve()
    if not is_initialized(project_dir):
        raise ValidationError("No OpenSpec directory found. Run 'openspec init' first.")

    newly_configured = _handle_legacy(ctx, project_dir, force=force)
    configured = get_configured_tools(project_dir)

    if not configured and not newly_configured:
        user_output(warning("No configured tools found."))
        user_output(dim("Run 'openspec init' to set up tools."))
        return

    tool_ids = list(dict.fromkeys([*configured, *newly_configured]))
    config = run_migration(ctx, project_dir, tool_ids, ctx.config_store.read())
    desired = resolve_desired_state(config, None)
    version = ctx.current_version

    assessments = [assess_tool(project_dir, tool_id, desired, version) for tool_id in tool_ids]
    needing = [a for a in assessments if a.needs_action]

    if not force and not needing:
        user_output(success(f"All {len(tool_ids)} tool(s) up to date (v{version})"))
        user_output(dim(f"  Tools: {', '.join(tool_ids)}"))
        user_output()
        user_output(dim("Use --force to refresh files anyway."))
        _report_new_tools(project_dir, tool_ids)
        return

    if force:
        user_output(f"Force updating {len(tool_ids)} tool(s): {', '.join(tool_ids)}")
    else:
        plan = ", ".join(_describe_update(a, version) for a in needing)
        user_output(f"Updating {len(needing)} tool(s): {plan}")
        up_to_date = [a.tool_id for a in assessments if not a.needs_action]
        if up_to_date:
            user_output(dim(f"Already up to date: {', '.join(up_to_date)}"))
    user_output()

    summary = reconcile_tools(project_dir, tool_ids, desired, version, force)

    updated = [tool_display_name(r.tool_id) for r in summary.reconciled]
    if updated:
        user_output(success(f"Updated: {', '.join(updated)} (v{version})"))
    render_failures(summary)
    render_removal_counts(summary)

    if newly_configured:
        user_output()
        user_output(click.style("Getting started:", bold=True))
        if "propose" in desired.workflows:
            user_output("  /opsx:propose   Propose a change with all artifacts")
        if "new" in desired.workflows:
            user_output("  /opsx:new       Start a new change")
        if "apply" in desired.workflows:
            user_output("  /opsx:apply     Implement tasks")

    _report_new_tools(project_dir, tool_ids)

    user_output()
    user_output(dim("Restart your IDE for changes to take effect."))
