"""One-time profile migration for installs that predate profiles.

Before profiles existed, every workflow was installed. Resolving such an
install against the smaller core default would silently narrow it, so the
first run records what is already installed as a custom profile.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from openspec.artifacts.status import scan_installed_workflows
from openspec.core.global_config import GlobalConfig
from openspec.core.profiles import WorkflowId
from openspec.gateway.config_store import ConfigStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationResult:
    """A migration that was written.

    Attributes:
        config: The config as persisted by the migration
        workflows: Workflows recorded as the custom profile
    """

    config: GlobalConfig
    workflows: tuple[WorkflowId, ...]


def migrate_if_needed(
    project_dir: Path, tool_ids: list[str], config: GlobalConfig, store: ConfigStore
) -> MigrationResult | None:
    """Persist a custom profile matching installed workflows, at most once.

    Gated purely on the presence of the profile key: once any profile has
    been written, this is a no-op regardless of its value or of what is on
    disk. With no profile key and nothing installed, config is left
    untouched so the core default applies to new users.

    Args:
        project_dir: Project root to scan
        tool_ids: Tools whose managed files are scanned
        config: Global config already read for this run
        store: Global config store (written at most once)

    Returns:
        MigrationResult if config was written, None otherwise

    Raises:
        OSError: If the config write fails
    """
    if config.profile is not None:
        return None

    installed = scan_installed_workflows(project_dir, tool_ids)
    if not installed:
        logger.debug("No installed workflows in %s, skipping profile migration", project_dir)
        return None

    migrated = replace(config, profile="custom", workflows=tuple(installed))
    store.write(migrated)
    logger.debug("Migrated to custom profile with workflows %s", installed)
    return MigrationResult(config=migrated, workflows=tuple(installed))
