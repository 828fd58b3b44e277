"""Read-only inspection of managed artifacts on disk.

Nothing in this module writes. A missing project directory is a valid
"not configured" state, and unreadable files count as having no marker.
"""

import logging
from pathlib import Path

from openspec.artifacts.markers import read_generated_by
from openspec.artifacts.models import ArtifactStatus, ManagedArtifact
from openspec.command_generation import get_adapter
from openspec.core.profiles import ALL_WORKFLOWS, WorkflowId
from openspec.templates.catalog import SKILL_FILENAME, skill_dir_name
from openspec.tools.registry import AI_TOOLS, get_tool, skills_root

logger = logging.getLogger(__name__)


def managed_skill_file(project_dir: Path, tool_id: str, workflow_id: WorkflowId) -> Path | None:
    """Return the SKILL.md path for a workflow, or None if the tool has no skills root."""
    tool = get_tool(tool_id)
    if tool is None:
        return None
    root = skills_root(project_dir, tool)
    if root is None:
        return None
    return root / skill_dir_name(workflow_id) / SKILL_FILENAME


def managed_command_file(project_dir: Path, tool_id: str, workflow_id: WorkflowId) -> Path | None:
    """Return the command file path for a workflow, or None if the tool has no adapter."""
    adapter = get_adapter(tool_id)
    if adapter is None:
        return None
    return project_dir / adapter.get_file_path(workflow_id)


def list_managed_files(project_dir: Path, tool_id: str) -> list[ManagedArtifact]:
    """List existing managed files for a tool.

    Skills come first, then commands; each in catalog order. This order
    decides which file is authoritative for the version marker.
    """
    found: list[ManagedArtifact] = []
    for workflow in ALL_WORKFLOWS:
        path = managed_skill_file(project_dir, tool_id, workflow)
        if path is not None and path.is_file():
            found.append(ManagedArtifact(workflow_id=workflow, kind="skill", path=path))
    for workflow in ALL_WORKFLOWS:
        path = managed_command_file(project_dir, tool_id, workflow)
        if path is not None and path.is_file():
            found.append(ManagedArtifact(workflow_id=workflow, kind="command", path=path))
    return found


def tool_has_any_skill(project_dir: Path, tool_id: str) -> bool:
    for workflow in ALL_WORKFLOWS:
        path = managed_skill_file(project_dir, tool_id, workflow)
        if path is not None and path.is_file():
            return True
    return False


def tool_has_any_command(project_dir: Path, tool_id: str) -> bool:
    for workflow in ALL_WORKFLOWS:
        path = managed_command_file(project_dir, tool_id, workflow)
        if path is not None and path.is_file():
            return True
    return False


def get_configured_tools(project_dir: Path) -> list[str]:
    """Return ids of tools with at least one managed skill or command file."""
    return [
        tool.tool_id
        for tool in AI_TOOLS
        if tool.skills_dir is not None
        and (
            tool_has_any_skill(project_dir, tool.tool_id)
            or tool_has_any_command(project_dir, tool.tool_id)
        )
    ]


def scan_installed_workflows(project_dir: Path, tool_ids: list[str]) -> list[WorkflowId]:
    """Return the union of workflows installed across tools, in catalog order.

    Both skill files and command files count as installed.
    """
    installed: set[str] = set()
    for tool_id in tool_ids:
        for artifact in list_managed_files(project_dir, tool_id):
            installed.add(artifact.workflow_id)
    return [workflow for workflow in ALL_WORKFLOWS if workflow in installed]


def get_tool_version_status(
    project_dir: Path, tool_id: str, current_version: str
) -> ArtifactStatus:
    """Inspect one tool's managed artifacts.

    The marker is read from the first managed file found, skills before
    commands. A tool with no managed files has no marker and so needs update.

    Args:
        project_dir: Project root (need not exist)
        tool_id: Tool to inspect
        current_version: Running openspec version

    Returns:
        ArtifactStatus for the tool
    """
    managed = list_managed_files(project_dir, tool_id)
    if not managed:
        return ArtifactStatus(
            tool_id=tool_id,
            configured=False,
            generated_by_version=None,
            needs_update=True,
        )

    version = read_generated_by(managed[0].path)
    logger.debug("Inspected %s: marker %s from %s", tool_id, version, managed[0].path)
    return ArtifactStatus(
        tool_id=tool_id,
        configured=True,
        generated_by_version=version,
        needs_update=version is None or version != current_version,
    )
