"""Registry of supported AI assistant tools.

The registry is a closed, static table. Adding a tool is a data change here
(plus an optional command adapter), never a new code path in the
reconciliation engine.
"""

from dataclasses import dataclass
from functools import cache
from pathlib import Path


@dataclass(frozen=True)
class ToolDescriptor:
    """A supported AI assistant tool.

    Attributes:
        tool_id: Stable identifier used on the command line (e.g. "claude")
        name: Human-readable display name
        skills_dir: Base directory (relative to the project root) that holds
            the tool's generated artifacts. None means the tool cannot receive
            generated skills or commands; only legacy detection refers to it.
    """

    tool_id: str
    name: str
    skills_dir: str | None


AI_TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(tool_id="claude", name="Claude Code", skills_dir=".claude"),
    ToolDescriptor(
        tool_id="claude-internal", name="Claude Internal", skills_dir=".claude-internal"
    ),
    ToolDescriptor(tool_id="cursor", name="Cursor", skills_dir=".cursor"),
    ToolDescriptor(tool_id="windsurf", name="Windsurf", skills_dir=".windsurf"),
    ToolDescriptor(tool_id="opencode", name="OpenCode", skills_dir=".opencode"),
    ToolDescriptor(tool_id="qwen", name="Qwen Code", skills_dir=".qwen"),
    ToolDescriptor(tool_id="gemini", name="Gemini CLI", skills_dir=".gemini"),
    ToolDescriptor(tool_id="github-copilot", name="GitHub Copilot", skills_dir=".github"),
    ToolDescriptor(tool_id="codex", name="Codex", skills_dir=".codex"),
    ToolDescriptor(tool_id="agents", name="AGENTS.md (universal)", skills_dir=None),
    ToolDescriptor(tool_id="cline", name="Cline", skills_dir=None),
)


@cache
def _tools_by_id() -> dict[str, ToolDescriptor]:
    return {tool.tool_id: tool for tool in AI_TOOLS}


def get_tool(tool_id: str) -> ToolDescriptor | None:
    """Look up a tool by identifier, returning None for unknown ids."""
    return _tools_by_id().get(tool_id)


def tools_with_skills_dir() -> list[str]:
    """Return ids of tools that can receive generated artifacts, in registry order."""
    return [tool.tool_id for tool in AI_TOOLS if tool.skills_dir is not None]


def skills_root(project_dir: Path, tool: ToolDescriptor) -> Path | None:
    """Return the tool's managed skills root (<skills_dir>/skills), if it has one."""
    if tool.skills_dir is None:
        return None
    return project_dir / tool.skills_dir / "skills"


def detect_available_tools(project_dir: Path) -> list[ToolDescriptor]:
    """Return tools whose base directory already exists in the project.

    Used as the fallback selection for non-interactive init and for the
    "Detected new tool" hint after update.
    """
    return [
        tool
        for tool in AI_TOOLS
        if tool.skills_dir is not None and (project_dir / tool.skills_dir).is_dir()
    ]


def tool_display_name(tool_id: str) -> str:
    """Return the display name for a tool id, or the id itself if unknown."""
    tool = get_tool(tool_id)
    if tool is None:
        return tool_id
    return tool.name
