"""Changes and specs under openspec/: scaffolding and listing."""

import datetime
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml

from openspec.core.errors import ValidationError
from openspec.core.project import DEFAULT_SCHEMA, openspec_dir

logger = logging.getLogger(__name__)

CHANGE_METADATA_FILE = ".openspec.yaml"
ARCHIVE_DIR_NAME = "archive"
BUILTIN_SCHEMAS = (DEFAULT_SCHEMA,)

_KEBAB_CASE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_TASK_LINE = re.compile(r"^[-*]\s+\[[\sxX]\]")
_DONE_TASK_LINE = re.compile(r"^[-*]\s+\[[xX]\]")
_REQUIREMENT_HEADER = re.compile(r"^###\s+Requirement:")

TaskStatus = Literal["no-tasks", "in-progress", "complete"]


@dataclass(frozen=True)
class ChangeSummary:
    """An active change directory.

    Attributes:
        name: Directory name under openspec/changes
        completed_tasks: Checked items in tasks.md
        total_tasks: All checklist items in tasks.md
        last_modified: Newest mtime of any file in the change, UTC
    """

    name: str
    completed_tasks: int
    total_tasks: int
    last_modified: datetime.datetime

    @property
    def status(self) -> TaskStatus:
        if self.total_tasks == 0:
            return "no-tasks"
        if self.completed_tasks == self.total_tasks:
            return "complete"
        return "in-progress"


@dataclass(frozen=True)
class SpecSummary:
    name: str
    requirement_count: int


def changes_dir(project_dir: Path) -> Path:
    return openspec_dir(project_dir) / "changes"


def specs_dir(project_dir: Path) -> Path:
    return openspec_dir(project_dir) / "specs"


def validate_change_name(name: str) -> None:
    """Check that a change name is kebab-case.

    Raises:
        ValidationError: With the first rule the name breaks
    """
    if not name:
        raise ValidationError("Change name cannot be empty")
    if _KEBAB_CASE.match(name):
        return
    if name != name.lower():
        raise ValidationError("Change name must be lowercase (use kebab-case)")
    if " " in name:
        raise ValidationError("Change name cannot contain spaces (use hyphens instead)")
    if "_" in name:
        raise ValidationError("Change name cannot contain underscores (use hyphens instead)")
    if name.startswith("-"):
        raise ValidationError("Change name cannot start with a hyphen")
    if name.endswith("-"):
        raise ValidationError("Change name cannot end with a hyphen")
    if "--" in name:
        raise ValidationError("Change name cannot contain consecutive hyphens")
    raise ValidationError("Change name can only contain lowercase letters, numbers, and hyphens")


def available_schemas(project_dir: Path) -> list[str]:
    """Built-in schemas followed by project-local ones in openspec/schemas."""
    schemas = list(BUILTIN_SCHEMAS)
    local_root = openspec_dir(project_dir) / "schemas"
    if local_root.is_dir():
        for entry in sorted(local_root.iterdir()):
            if entry.is_dir() and entry.name not in schemas:
                schemas.append(entry.name)
    return schemas


def create_change(
    project_dir: Path,
    name: str,
    *,
    schema: str,
    description: str | None,
    today: datetime.date,
) -> Path:
    """Scaffold openspec/changes/<name>/ with its metadata file.

    Args:
        project_dir: Project root
        name: Kebab-case change name
        schema: Workflow schema recorded for the change
        description: Optional text written to README.md
        today: Creation date recorded in the metadata

    Returns:
        The created change directory

    Raises:
        ValidationError: On a bad name, an unknown schema, or an existing change
    """
    validate_change_name(name)
    schemas = available_schemas(project_dir)
    if schema not in schemas:
        raise ValidationError(f"Unknown schema '{schema}'. Available: {', '.join(schemas)}")

    change_dir = changes_dir(project_dir) / name
    if change_dir.exists():
        raise ValidationError(f"Change '{name}' already exists at {change_dir}")

    change_dir.mkdir(parents=True)
    metadata = yaml.safe_dump({"schema": schema, "created": today.isoformat()}, sort_keys=False)
    (change_dir / CHANGE_METADATA_FILE).write_text(metadata, encoding="utf-8")
    if description:
        (change_dir / "README.md").write_text(f"# {name}\n\n{description}\n", encoding="utf-8")
    logger.debug("Created change %s with schema %s", name, schema)
    return change_dir


def count_tasks(content: str) -> tuple[int, int]:
    """Return (completed, total) checklist items in tasks.md text."""
    completed = 0
    total = 0
    for line in content.splitlines():
        stripped = line.strip()
        if _TASK_LINE.match(stripped):
            total += 1
            if _DONE_TASK_LINE.match(stripped):
                completed += 1
    return completed, total


def _last_modified(directory: Path) -> datetime.datetime:
    newest = directory.stat().st_mtime
    for path in directory.rglob("*"):
        if path.is_file():
            newest = max(newest, path.stat().st_mtime)
    return datetime.datetime.fromtimestamp(newest, tz=datetime.UTC)


def list_changes(project_dir: Path) -> list[ChangeSummary]:
    """Active changes, in directory-name order. The archive directory is skipped."""
    root = changes_dir(project_dir)
    if not root.is_dir():
        return []

    changes: list[ChangeSummary] = []
    for entry in sorted(root.iterdir()):
        if not entry.is_dir() or entry.name == ARCHIVE_DIR_NAME or entry.name.startswith("."):
            continue
        tasks_file = entry / "tasks.md"
        completed, total = 0, 0
        if tasks_file.is_file():
            completed, total = count_tasks(tasks_file.read_text(encoding="utf-8"))
        changes.append(
            ChangeSummary(
                name=entry.name,
                completed_tasks=completed,
                total_tasks=total,
                last_modified=_last_modified(entry),
            )
        )
    return changes


def list_specs(project_dir: Path) -> list[SpecSummary]:
    """Capability specs (openspec/specs/<name>/spec.md), sorted by name."""
    root = specs_dir(project_dir)
    if not root.is_dir():
        return []

    specs: list[SpecSummary] = []
    for entry in sorted(root.iterdir()):
        spec_file = entry / "spec.md"
        if not spec_file.is_file():
            continue
        lines = spec_file.read_text(encoding="utf-8").splitlines()
        count = sum(1 for line in lines if _REQUIREMENT_HEADER.match(line))
        specs.append(SpecSummary(name=entry.name, requirement_count=count))
    return specs
