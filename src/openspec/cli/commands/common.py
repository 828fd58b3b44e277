"""Steps shared by the init and update commands."""

from pathlib import Path

from openspec.artifacts.legacy import (
    LegacyDetectionResult,
    cleanup_legacy_artifacts,
    format_cleanup_summary,
)
from openspec.artifacts.migration import migrate_if_needed
from openspec.artifacts.reconcile import ReconcileRunSummary
from openspec.cli.output import dim, failure, user_output, warning
from openspec.core.context import OpenSpecContext
from openspec.core.errors import ValidationError
from openspec.core.global_config import GlobalConfig
from openspec.tools.registry import get_tool, tool_display_name, tools_with_skills_dir


def perform_legacy_cleanup(project_dir: Path, detection: LegacyDetectionResult) -> None:
    """Clean up legacy artifacts and print what happened.

    Per-item failures are printed as warnings; the run continues.
    """
    summary = cleanup_legacy_artifacts(project_dir, detection)
    user_output("Legacy files cleaned up")
    text = format_cleanup_summary(summary)
    if text:
        user_output()
        user_output(text)
    if summary.errors:
        user_output(warning("Some legacy files could not be cleaned up; continuing."))
    user_output()


def run_migration(
    ctx: OpenSpecContext, project_dir: Path, tool_ids: list[str], config: GlobalConfig
) -> GlobalConfig:
    """Run the one-time profile migration, warning instead of failing on write errors.

    Returns:
        The config to resolve this run against: the migrated config when a
        migration was written, otherwise the config passed in
    """
    try:
        result = migrate_if_needed(project_dir, tool_ids, config, ctx.config_store)
    except OSError as e:
        path = ctx.config_store.config_path()
        user_output(warning(f"Could not save migrated profile to {path}: {e}"))
        return config
    if result is None:
        return config
    user_output(f"Migrated: custom profile with {len(result.workflows)} workflows")
    user_output(
        "New in this version: /opsx:propose. "
        "Try 'openspec config set profile core' for the streamlined experience."
    )
    return result.config


def tools_with_generation_support(tool_ids: list[str]) -> list[str]:
    """Keep only tools that can receive generated artifacts."""
    return [
        tool_id
        for tool_id in tool_ids
        if (tool := get_tool(tool_id)) is not None and tool.skills_dir is not None
    ]


def render_removal_counts(summary: ReconcileRunSummary) -> None:
    if summary.removed_commands > 0:
        user_output(dim(f"Removed: {summary.removed_commands} command files (delivery: skills)"))
    if summary.removed_skills > 0:
        removed = summary.removed_skills
        user_output(dim(f"Removed: {removed} skill directories (delivery: commands)"))
    if summary.pruned > 0:
        user_output(dim(f"Removed: {summary.pruned} artifacts for workflows not in profile"))


def render_failures(summary: ReconcileRunSummary) -> None:
    if not summary.failed:
        return
    details = ", ".join(f"{tool_display_name(r.tool_id)} ({r.error})" for r in summary.failed)
    user_output(failure(f"Failed: {details}"))


def parse_tools_arg(raw: str | None) -> list[str] | None:
    """Parse --tools into tool ids.

    Returns:
        None when the flag was not given, otherwise the selected ids in
        the given order without duplicates

    Raises:
        ValidationError: On an empty value, unknown ids, or "all"/"none"
            mixed with specific ids
    """
    if raw is None:
        return None

    value = raw.strip()
    if not value:
        raise ValidationError(
            'The --tools option requires a value. Use "all", "none", '
            "or a comma-separated list of tool IDs."
        )

    available = tools_with_skills_dir()
    if value.lower() == "all":
        return available
    if value.lower() == "none":
        return []

    tokens = [token.strip().lower() for token in value.split(",") if token.strip()]
    if not tokens:
        raise ValidationError(
            'The --tools option requires at least one tool ID when not using "all" or "none".'
        )
    if any(token in ("all", "none") for token in tokens):
        raise ValidationError(
            'Cannot combine reserved values "all" or "none" with specific tool IDs.'
        )

    invalid = [token for token in tokens if token not in available]
    if invalid:
        choices = ", ".join(["all", "none", *available])
        raise ValidationError(f"Invalid tool(s): {', '.join(invalid)}. Available values: {choices}")

    selected: list[str] = []
    for token in tokens:
        if token not in selected:
            selected.append(token)
    return selected
