"""Detect and clean up artifacts from the pre-skills OpenSpec layout.

Three legacy shapes exist:

1. Marker blocks: an OPENSPEC:START/END comment pair embedded in a shared,
   user-owned instruction file such as CLAUDE.md. Only the block is removed;
   the host file is never deleted.
2. Flat command layouts: whole openspec/ command directories, or
   openspec-*.md files in a tool's command directory. These contain no user
   content and are deleted outright.
3. Generated project files such as openspec/AGENTS.md, also deleted.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from openspec.tools.registry import AI_TOOLS

logger = logging.getLogger(__name__)

MARKER_START = "<!-- OPENSPEC:START -->"
MARKER_END = "<!-- OPENSPEC:END -->"

# Shared instruction files that may hold a marker block, and the tool each implies
LEGACY_MARKER_FILES: dict[str, str] = {
    "CLAUDE.md": "claude",
    "AGENTS.md": "agents",
    "CLINE.md": "cline",
    "QWEN.md": "qwen",
    "GEMINI.md": "gemini",
    ".github/copilot-instructions.md": "github-copilot",
}

# Legacy command directories, deleted recursively
LEGACY_COMMAND_DIRS: dict[str, str] = {
    ".claude/commands/openspec": "claude",
    ".claude-internal/commands/openspec": "claude-internal",
    ".gemini/commands/openspec": "gemini",
    ".opencode/command/openspec": "opencode",
}

# (directory, glob, tool) for flat legacy command files
LEGACY_COMMAND_GLOBS: tuple[tuple[str, str, str], ...] = (
    (".cursor/commands", "openspec-*.md", "cursor"),
    (".windsurf/workflows", "openspec-*.md", "windsurf"),
    (".opencode/command", "openspec-*.md", "opencode"),
    (".github/prompts", "openspec-*.prompt.md", "github-copilot"),
    (".qwen/commands", "openspec-*.toml", "qwen"),
)

# Fully generated project files from the old layout
LEGACY_PROJECT_FILES: tuple[str, ...] = ("openspec/AGENTS.md",)


@dataclass(frozen=True)
class LegacyMarkerFile:
    """A shared instruction file containing an OpenSpec marker block.

    Attributes:
        path: Path relative to the project root
        tool_id: Tool implied by this file
        terminated: False when the start marker has no matching end marker
    """

    path: Path
    tool_id: str
    terminated: bool


@dataclass(frozen=True)
class LegacyLocation:
    """A legacy command directory or file, relative to the project root."""

    path: Path
    tool_id: str


@dataclass(frozen=True)
class LegacyDetectionResult:
    """Everything legacy found in a project."""

    marker_files: tuple[LegacyMarkerFile, ...]
    command_dirs: tuple[LegacyLocation, ...]
    command_files: tuple[LegacyLocation, ...]
    project_files: tuple[Path, ...]

    @property
    def has_legacy_artifacts(self) -> bool:
        return bool(
            self.marker_files or self.command_dirs or self.command_files or self.project_files
        )


@dataclass
class CleanupSummary:
    """Outcome of legacy cleanup.

    Attributes:
        removed: Human-readable lines for each completed removal
        skipped: Items left untouched on purpose (e.g. unterminated markers)
        errors: Items that failed with an OSError
    """

    removed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable legacy candidate %s: %s", path, e)
        return None


def detect_legacy_artifacts(project_dir: Path) -> LegacyDetectionResult:
    """Scan the project for every legacy shape. Read-only."""
    marker_files: list[LegacyMarkerFile] = []
    for rel, tool_id in LEGACY_MARKER_FILES.items():
        path = project_dir / rel
        if not path.is_file():
            continue
        content = _read_text(path)
        if content is None or MARKER_START not in content:
            continue
        start = content.index(MARKER_START)
        terminated = content.find(MARKER_END, start + len(MARKER_START)) != -1
        marker_files.append(
            LegacyMarkerFile(path=Path(rel), tool_id=tool_id, terminated=terminated)
        )

    command_dirs = [
        LegacyLocation(path=Path(rel), tool_id=tool_id)
        for rel, tool_id in LEGACY_COMMAND_DIRS.items()
        if (project_dir / rel).is_dir()
    ]

    command_files: list[LegacyLocation] = []
    for rel_dir, pattern, tool_id in LEGACY_COMMAND_GLOBS:
        directory = project_dir / rel_dir
        if not directory.is_dir():
            continue
        for path in sorted(directory.glob(pattern)):
            if path.is_file():
                command_files.append(
                    LegacyLocation(path=path.relative_to(project_dir), tool_id=tool_id)
                )

    project_files = [Path(rel) for rel in LEGACY_PROJECT_FILES if (project_dir / rel).is_file()]

    return LegacyDetectionResult(
        marker_files=tuple(marker_files),
        command_dirs=tuple(command_dirs),
        command_files=tuple(command_files),
        project_files=tuple(project_files),
    )


def remove_marker_blocks(content: str) -> str:
    """Remove every complete marker block, sentinel lines included.

    Text before the start line and after the end line is kept byte for byte.
    An unterminated start marker and everything after it is left as is.
    """
    result = content
    while True:
        start = result.find(MARKER_START)
        if start == -1:
            return result
        end = result.find(MARKER_END, start + len(MARKER_START))
        if end == -1:
            return result

        line_start = result.rfind("\n", 0, start) + 1
        newline_after_end = result.find("\n", end + len(MARKER_END))
        line_end = len(result) if newline_after_end == -1 else newline_after_end + 1
        result = result[:line_start] + result[line_end:]


def cleanup_legacy_artifacts(project_dir: Path, detection: LegacyDetectionResult) -> CleanupSummary:
    """Remove detected legacy artifacts.

    Never raises for filesystem problems: each failing item is recorded in
    CleanupSummary.errors and the remaining items are still processed.
    """
    summary = CleanupSummary()

    for marker_file in detection.marker_files:
        if not marker_file.terminated:
            summary.skipped.append(
                f"Left {marker_file.path} unchanged: OpenSpec start marker has no end marker"
            )
            continue
        path = project_dir / marker_file.path
        try:
            # newline="" keeps CRLF host files byte-identical outside the block
            with path.open(encoding="utf-8", newline="") as f:
                content = f.read()
            with path.open("w", encoding="utf-8", newline="") as f:
                f.write(remove_marker_blocks(content))
        except (OSError, UnicodeDecodeError) as e:
            summary.errors.append(f"Failed to clean {marker_file.path}: {e}")
            continue
        logger.debug("Stripped marker block from %s", path)
        summary.removed.append(f"Removed OpenSpec markers from {marker_file.path}")

    for location in detection.command_dirs:
        path = project_dir / location.path
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            summary.errors.append(f"Failed to remove {location.path}/: {e}")
            continue
        logger.debug("Deleted legacy command directory %s", path)
        summary.removed.append(f"Removed {location.path}/")

    removable_files = [location.path for location in detection.command_files]
    removable_files.extend(detection.project_files)
    for rel in removable_files:
        try:
            (project_dir / rel).unlink(missing_ok=True)
        except OSError as e:
            summary.errors.append(f"Failed to remove {rel}: {e}")
            continue
        logger.debug("Deleted legacy file %s", project_dir / rel)
        summary.removed.append(f"Removed {rel}")

    return summary


def get_tools_from_legacy_artifacts(detection: LegacyDetectionResult) -> list[str]:
    """Map legacy locations back to tool ids, in registry order.

    The result may include tools that cannot receive generated artifacts
    (e.g. "agents"); callers filter for tools with a skills directory.
    """
    implied = {marker_file.tool_id for marker_file in detection.marker_files}
    implied.update(location.tool_id for location in detection.command_dirs)
    implied.update(location.tool_id for location in detection.command_files)
    return [tool.tool_id for tool in AI_TOOLS if tool.tool_id in implied]


def format_detection_summary(detection: LegacyDetectionResult) -> str:
    """Describe what an upgrade will remove and what it will edit."""
    lines = [
        "Upgrading to the new OpenSpec",
        "",
        "OpenSpec now uses agent skills and per-tool slash commands.",
        "Your existing setup keeps working; old files are replaced.",
    ]

    to_remove = [f"{location.path}/" for location in detection.command_dirs]
    to_remove.extend(str(location.path) for location in detection.command_files)
    to_remove.extend(str(path) for path in detection.project_files)
    if to_remove:
        lines.extend(["", "Files to remove", "No user content to preserve:"])
        lines.extend(f"  • {item}" for item in to_remove)

    to_update = [m for m in detection.marker_files if m.terminated]
    if to_update:
        lines.extend(["", "Files to update", "Markers will be removed, your content preserved:"])
        lines.extend(f"  • {m.path}" for m in to_update)

    unterminated = [m for m in detection.marker_files if not m.terminated]
    if unterminated:
        lines.extend(["", "Needs manual review", "Start marker without end marker, unchanged:"])
        lines.extend(f"  • {m.path}" for m in unterminated)

    return "\n".join(lines)


def format_cleanup_summary(summary: CleanupSummary) -> str:
    """Render cleanup results. Returns an empty string when nothing happened."""
    lines = [f"  ✓ {line}" for line in summary.removed]
    lines.extend(f"  ⚠ {line}" for line in summary.skipped)
    lines.extend(f"  ✗ {line}" for line in summary.errors)
    return "\n".join(lines)
