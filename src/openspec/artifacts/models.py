"""Data models for managed artifact state."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

# Kind of managed artifact a tool can receive
ArtifactKind = Literal["skill", "command"]


@dataclass(frozen=True)
class ManagedArtifact:
    """A managed artifact path for one workflow of one tool."""

    workflow_id: str
    kind: ArtifactKind
    path: Path


@dataclass(frozen=True)
class ArtifactStatus:
    """Per-tool result of probing on-disk artifacts.

    Attributes:
        tool_id: Tool that was inspected
        configured: True iff at least one managed skill or command file exists
        generated_by_version: Marker from the first managed file found, or None
        needs_update: True when the marker is missing or differs from the
            running version (exact string comparison)
    """

    tool_id: str
    configured: bool
    generated_by_version: str | None
    needs_update: bool
