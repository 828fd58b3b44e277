"""Reconcile a tool's managed artifacts against the desired state.

Per tool and per run, the engine inspects what is on disk, decides whether
anything differs from the desired state, and if so regenerates every
desired artifact and removes every managed artifact that should no longer
exist. It never prompts and never raises for filesystem errors; a failing
tool is recorded as FAILED and the next tool proceeds.

State machine for one tool:

    INSPECTED -> up-to-date | needs-version-update | needs-config-sync
              -> reconciled | failed
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from openspec.artifacts.markers import read_generated_by
from openspec.artifacts.models import ArtifactStatus, ManagedArtifact
from openspec.artifacts.status import (
    get_tool_version_status,
    list_managed_files,
    managed_command_file,
)
from openspec.command_generation import generate_commands, get_adapter
from openspec.core.errors import ValidationError
from openspec.core.profiles import ALL_WORKFLOWS
from openspec.core.resolver import DesiredState
from openspec.templates.catalog import (
    SKILL_FILENAME,
    generate_skill_content,
    get_command_contents,
    get_skill_templates,
    skill_dir_name,
)
from openspec.tools.registry import get_tool, skills_root

logger = logging.getLogger(__name__)

AssessmentState = Literal["up-to-date", "needs-version-update", "needs-config-sync"]
ReconcileState = Literal["reconciled", "failed"]


@dataclass(frozen=True)
class DriftReport:
    """Differences between the desired state and disk for one tool.

    Attributes:
        missing: Desired artifacts that do not exist
        extra: Managed artifacts for workflows outside the desired set, of a
            kind that is still generated
        disabled: Managed artifacts of a kind no longer generated
        stale: Managed files whose marker is missing or differs from the
            running version
    """

    missing: tuple[ManagedArtifact, ...]
    extra: tuple[ManagedArtifact, ...]
    disabled: tuple[ManagedArtifact, ...]
    stale: tuple[Path, ...]

    @property
    def has_config_drift(self) -> bool:
        return bool(self.missing or self.extra or self.disabled)


@dataclass(frozen=True)
class ToolAssessment:
    """Inspection result plus drift classification for one tool."""

    tool_id: str
    status: ArtifactStatus
    drift: DriftReport
    state: AssessmentState

    @property
    def needs_action(self) -> bool:
        return self.state != "up-to-date"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of reconciling one tool.

    Attributes:
        tool_id: Tool that was reconciled
        state: "reconciled" (possibly a no-op) or "failed"
        writes: Files written, in order
        deletes: Files or skill directories removed, in order
        skipped: True when the tool was already up to date and nothing ran
        error: Failure reason when state is "failed"
        removed_skills: Skill directories removed because skills are not delivered
        removed_commands: Command files removed because commands are not delivered
        pruned: Artifacts removed for workflows outside the desired set
        commands_unsupported: Commands were desired but the tool has no adapter
    """

    tool_id: str
    state: ReconcileState
    writes: tuple[Path, ...]
    deletes: tuple[Path, ...]
    skipped: bool
    error: str | None
    removed_skills: int = 0
    removed_commands: int = 0
    pruned: int = 0
    commands_unsupported: bool = False


@dataclass(frozen=True)
class ReconcileRunSummary:
    """Aggregate of one sequential pass over several tools."""

    results: tuple[ReconcileResult, ...]

    @property
    def reconciled(self) -> list[ReconcileResult]:
        """Tools that ran and succeeded (excludes up-to-date skips)."""
        return [r for r in self.results if r.state == "reconciled" and not r.skipped]

    @property
    def failed(self) -> list[ReconcileResult]:
        return [r for r in self.results if r.state == "failed"]

    @property
    def removed_skills(self) -> int:
        return sum(r.removed_skills for r in self.results)

    @property
    def removed_commands(self) -> int:
        return sum(r.removed_commands for r in self.results)

    @property
    def pruned(self) -> int:
        return sum(r.pruned for r in self.results)

    @property
    def commands_unsupported(self) -> list[str]:
        return [r.tool_id for r in self.results if r.commands_unsupported]


@dataclass
class _Changes:
    writes: list[Path] = field(default_factory=list)
    deletes: list[Path] = field(default_factory=list)
    removed_skills: int = 0
    removed_commands: int = 0
    pruned: int = 0
    commands_unsupported: bool = False


def _require_skills_root(project_dir: Path, tool_id: str) -> Path:
    tool = get_tool(tool_id)
    if tool is None:
        raise ValidationError(f"Unknown tool '{tool_id}'")
    root = skills_root(project_dir, tool)
    if root is None:
        raise ValidationError(f"Tool '{tool_id}' does not support skill generation")
    return root


def _existing_skill_dirs(root: Path) -> list[ManagedArtifact]:
    return [
        ManagedArtifact(workflow_id=workflow, kind="skill", path=root / skill_dir_name(workflow))
        for workflow in ALL_WORKFLOWS
        if (root / skill_dir_name(workflow)).is_dir()
    ]


def _existing_command_files(project_dir: Path, tool_id: str) -> list[ManagedArtifact]:
    found: list[ManagedArtifact] = []
    for workflow in ALL_WORKFLOWS:
        path = managed_command_file(project_dir, tool_id, workflow)
        if path is not None and path.is_file():
            found.append(ManagedArtifact(workflow_id=workflow, kind="command", path=path))
    return found


def assess_tool(
    project_dir: Path, tool_id: str, desired: DesiredState, current_version: str
) -> ToolAssessment:
    """Inspect a tool and classify how it differs from the desired state.

    Read-only.

    Raises:
        ValidationError: If the tool is unknown or cannot receive artifacts
    """
    root = _require_skills_root(project_dir, tool_id)
    adapter = get_adapter(tool_id)
    status = get_tool_version_status(project_dir, tool_id, current_version)

    stale = tuple(
        artifact.path
        for artifact in list_managed_files(project_dir, tool_id)
        if read_generated_by(artifact.path) != current_version
    )

    missing: list[ManagedArtifact] = []
    extra: list[ManagedArtifact] = []
    disabled: list[ManagedArtifact] = []

    skill_dirs = _existing_skill_dirs(root)
    if desired.generate_skills:
        for workflow in desired.workflows:
            skill_file = root / skill_dir_name(workflow) / SKILL_FILENAME
            if not skill_file.is_file():
                missing.append(ManagedArtifact(workflow_id=workflow, kind="skill", path=skill_file))
        extra.extend(a for a in skill_dirs if a.workflow_id not in desired.workflows)
    else:
        disabled.extend(skill_dirs)

    if adapter is not None:
        command_files = _existing_command_files(project_dir, tool_id)
        if desired.generate_commands:
            for workflow in desired.workflows:
                command_file = project_dir / adapter.get_file_path(workflow)
                if not command_file.is_file():
                    missing.append(
                        ManagedArtifact(workflow_id=workflow, kind="command", path=command_file)
                    )
            extra.extend(a for a in command_files if a.workflow_id not in desired.workflows)
        else:
            disabled.extend(command_files)

    drift = DriftReport(
        missing=tuple(missing),
        extra=tuple(extra),
        disabled=tuple(disabled),
        stale=stale,
    )

    state: AssessmentState = "up-to-date"
    if stale:
        state = "needs-version-update"
    elif drift.has_config_drift:
        state = "needs-config-sync"

    logger.debug(
        "Assessed %s: %s (missing=%d extra=%d disabled=%d stale=%d)",
        tool_id,
        state,
        len(missing),
        len(extra),
        len(disabled),
        len(stale),
    )
    return ToolAssessment(tool_id=tool_id, status=status, drift=drift, state=state)


def _write_file(path: Path, content: str, changes: _Changes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    changes.writes.append(path)
    logger.debug("Wrote %s", path)


def _remove_skill_dir(path: Path, changes: _Changes) -> bool:
    if not path.is_dir():
        return False
    shutil.rmtree(path)
    changes.deletes.append(path)
    logger.debug("Removed skill directory %s", path)
    return True


def _remove_file(path: Path, changes: _Changes) -> bool:
    if not path.is_file():
        return False
    path.unlink()
    changes.deletes.append(path)
    logger.debug("Removed %s", path)
    return True


def _apply_skills(
    root: Path, tool_id: str, desired: DesiredState, version: str, c: _Changes
) -> None:
    adapter = get_adapter(tool_id)
    transform = adapter.transform_instructions if adapter is not None else None

    if not desired.generate_skills:
        for workflow in ALL_WORKFLOWS:
            if _remove_skill_dir(root / skill_dir_name(workflow), c):
                c.removed_skills += 1
        return

    for entry in get_skill_templates(desired.workflows):
        content = generate_skill_content(entry.template, version, transform)
        _write_file(root / entry.dir_name / SKILL_FILENAME, content, c)

    for workflow in ALL_WORKFLOWS:
        if workflow in desired.workflows:
            continue
        if _remove_skill_dir(root / skill_dir_name(workflow), c):
            c.pruned += 1


def _apply_commands(
    project_dir: Path, tool_id: str, desired: DesiredState, version: str, c: _Changes
) -> None:
    adapter = get_adapter(tool_id)
    if adapter is None:
        c.commands_unsupported = desired.generate_commands and bool(desired.workflows)
        return

    if not desired.generate_commands:
        for workflow in ALL_WORKFLOWS:
            if _remove_file(project_dir / adapter.get_file_path(workflow), c):
                c.removed_commands += 1
        return

    contents = get_command_contents(desired.workflows)
    for command in generate_commands(contents, adapter, generated_by=version):
        _write_file(project_dir / command.path, command.file_content, c)

    for workflow in ALL_WORKFLOWS:
        if workflow in desired.workflows:
            continue
        if _remove_file(project_dir / adapter.get_file_path(workflow), c):
            c.pruned += 1


def reconcile(
    project_dir: Path,
    tool_id: str,
    desired: DesiredState,
    current_version: str,
    force: bool,
) -> ReconcileResult:
    """Converge one tool's managed artifacts to the desired state.

    Without force, an up-to-date tool is skipped with no I/O beyond the
    status check. Otherwise every desired artifact is (re)written
    unconditionally and every managed artifact that should not exist is
    removed; skills are handled before commands. The first OSError stops this tool and is
    recorded; files already written stay in place.

    Args:
        project_dir: Project root
        tool_id: Tool to reconcile (must have a skills directory)
        desired: Resolved desired state
        current_version: Version marker to embed
        force: Regenerate even when no drift is detected

    Returns:
        ReconcileResult describing what happened

    Raises:
        ValidationError: If the tool cannot receive artifacts. Drivers
            validate tool ids before any mutation, so this signals a bug.
    """
    root = _require_skills_root(project_dir, tool_id)
    changes = _Changes()

    try:
        if not force:
            assessment = assess_tool(project_dir, tool_id, desired, current_version)
            if not assessment.needs_action:
                return ReconcileResult(
                    tool_id=tool_id,
                    state="reconciled",
                    writes=(),
                    deletes=(),
                    skipped=True,
                    error=None,
                )
        _apply_skills(root, tool_id, desired, current_version, changes)
        _apply_commands(project_dir, tool_id, desired, current_version, changes)
    except OSError as e:
        logger.debug("Reconciling %s failed: %s", tool_id, e)
        return ReconcileResult(
            tool_id=tool_id,
            state="failed",
            writes=tuple(changes.writes),
            deletes=tuple(changes.deletes),
            skipped=False,
            error=str(e),
            removed_skills=changes.removed_skills,
            removed_commands=changes.removed_commands,
            pruned=changes.pruned,
        )

    return ReconcileResult(
        tool_id=tool_id,
        state="reconciled",
        writes=tuple(changes.writes),
        deletes=tuple(changes.deletes),
        skipped=False,
        error=None,
        removed_skills=changes.removed_skills,
        removed_commands=changes.removed_commands,
        pruned=changes.pruned,
        commands_unsupported=changes.commands_unsupported,
    )


def reconcile_tools(
    project_dir: Path,
    tool_ids: list[str],
    desired: DesiredState,
    current_version: str,
    force: bool,
) -> ReconcileRunSummary:
    """Reconcile tools one at a time. A failing tool never stops the others."""
    results = [
        reconcile(project_dir, tool_id, desired, current_version, force) for tool_id in tool_ids
    ]
    return ReconcileRunSummary(results=tuple(results))
