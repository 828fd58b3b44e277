"""Project directory layout: openspec/ with specs, changes and config.yaml."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml

logger = logging.getLogger(__name__)

OPENSPEC_DIR_NAME = "openspec"
DEFAULT_SCHEMA = "spec-driven"

ConfigStatus = Literal["created", "exists", "skipped", "failed"]


@dataclass(frozen=True)
class ProjectConfigResult:
    """Outcome of writing openspec/config.yaml.

    Attributes:
        status: What happened to the file
        error: The write error when status is "failed"
    """

    status: ConfigStatus
    error: str | None = None


def openspec_dir(project_dir: Path) -> Path:
    return project_dir / OPENSPEC_DIR_NAME


def is_initialized(project_dir: Path) -> bool:
    """Check whether the project root marker directory exists."""
    return openspec_dir(project_dir).is_dir()


def create_directory_structure(project_dir: Path) -> None:
    """Create openspec/{specs,changes,changes/archive}. Existing directories are kept."""
    root = openspec_dir(project_dir)
    for directory in (root, root / "specs", root / "changes", root / "changes" / "archive"):
        directory.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory structure under %s", root)


def create_project_config(project_dir: Path, *, allowed: bool) -> ProjectConfigResult:
    """Write openspec/config.yaml unless one already exists.

    Args:
        project_dir: Project root
        allowed: Whether creation is permitted (interactive or forced runs)

    Returns:
        "exists" if config.yaml or config.yml is present, "skipped" if not
        allowed, "failed" with the error if the write failed, "created"
        otherwise
    """
    root = openspec_dir(project_dir)
    if (root / "config.yaml").exists() or (root / "config.yml").exists():
        return ProjectConfigResult(status="exists")
    if not allowed:
        return ProjectConfigResult(status="skipped")

    content = yaml.safe_dump({"schema": DEFAULT_SCHEMA}, sort_keys=False)
    try:
        (root / "config.yaml").write_text(content, encoding="utf-8")
    except OSError as e:
        logger.debug("Could not write project config: %s", e)
        return ProjectConfigResult(status="failed", error=str(e))
    return ProjectConfigResult(status="created")
