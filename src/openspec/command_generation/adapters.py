"""Command adapters for each tool that supports slash commands.

Markdown tools get YAML front matter; Qwen and Gemini read TOML command
files. Every format carries the generatedBy marker in its header so the
status check can detect stale files.
"""

import re
from pathlib import Path
from typing import Any

import tomli_w
import yaml

from openspec.command_generation.types import CommandContent, ToolCommandAdapter

_COLON_COMMAND_REF = re.compile(r"/opsx:([a-z][a-z-]*)")


def _with_marker(metadata: dict[str, Any], content: CommandContent) -> dict[str, Any]:
    if content.generated_by is not None:
        metadata["generatedBy"] = content.generated_by
    return metadata


def format_markdown_command(metadata: dict[str, Any], body: str) -> str:
    """Render a markdown file with a YAML front matter header."""
    header = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n{body}"


def format_toml_command(data: dict[str, Any]) -> str:
    return tomli_w.dumps(data, multiline_strings=True)


class ClaudeAdapter(ToolCommandAdapter):
    """Claude Code: .claude/commands/opsx/<id>.md"""

    base_dir = ".claude"

    @property
    def tool_id(self) -> str:
        return "claude"

    def get_file_path(self, command_id: str) -> Path:
        return Path(self.base_dir) / "commands" / "opsx" / f"{command_id}.md"

    def format_file(self, content: CommandContent) -> str:
        metadata = {
            "name": content.name,
            "description": content.description,
            "category": content.category,
            "tags": list(content.tags),
        }
        return format_markdown_command(_with_marker(metadata, content), content.body)


class ClaudeInternalAdapter(ClaudeAdapter):
    """Same format as Claude Code, rooted at .claude-internal."""

    base_dir = ".claude-internal"

    @property
    def tool_id(self) -> str:
        return "claude-internal"


class CursorAdapter(ToolCommandAdapter):
    """Cursor: .cursor/commands/opsx-<id>.md"""

    @property
    def tool_id(self) -> str:
        return "cursor"

    def get_file_path(self, command_id: str) -> Path:
        return Path(".cursor") / "commands" / f"opsx-{command_id}.md"

    def format_file(self, content: CommandContent) -> str:
        metadata = {
            "name": f"/opsx-{content.command_id}",
            "id": f"opsx-{content.command_id}",
            "category": content.category,
            "description": content.description,
        }
        return format_markdown_command(_with_marker(metadata, content), content.body)


class WindsurfAdapter(ToolCommandAdapter):
    """Windsurf: .windsurf/workflows/opsx-<id>.md"""

    @property
    def tool_id(self) -> str:
        return "windsurf"

    def get_file_path(self, command_id: str) -> Path:
        return Path(".windsurf") / "workflows" / f"opsx-{command_id}.md"

    def format_file(self, content: CommandContent) -> str:
        metadata = {
            "name": content.name,
            "description": content.description,
            "category": content.category,
            "tags": list(content.tags),
        }
        return format_markdown_command(_with_marker(metadata, content), content.body)


class OpenCodeAdapter(ToolCommandAdapter):
    """OpenCode: .opencode/command/opsx-<id>.md

    OpenCode has no namespaced commands, so /opsx:<id> references are
    rewritten to /opsx-<id>.
    """

    @property
    def tool_id(self) -> str:
        return "opencode"

    def get_file_path(self, command_id: str) -> Path:
        return Path(".opencode") / "command" / f"opsx-{command_id}.md"

    def format_file(self, content: CommandContent) -> str:
        metadata = {"description": content.description}
        return format_markdown_command(_with_marker(metadata, content), content.body)

    def transform_instructions(self, text: str) -> str:
        return _COLON_COMMAND_REF.sub(r"/opsx-\1", text)


class GitHubCopilotAdapter(ToolCommandAdapter):
    """GitHub Copilot: .github/prompts/opsx-<id>.prompt.md"""

    @property
    def tool_id(self) -> str:
        return "github-copilot"

    def get_file_path(self, command_id: str) -> Path:
        return Path(".github") / "prompts" / f"opsx-{command_id}.prompt.md"

    def format_file(self, content: CommandContent) -> str:
        metadata = {"description": content.description}
        return format_markdown_command(_with_marker(metadata, content), content.body)


class QwenAdapter(ToolCommandAdapter):
    """Qwen Code: .qwen/commands/opsx-<id>.toml"""

    @property
    def tool_id(self) -> str:
        return "qwen"

    def get_file_path(self, command_id: str) -> Path:
        return Path(".qwen") / "commands" / f"opsx-{command_id}.toml"

    def format_file(self, content: CommandContent) -> str:
        data = _with_marker({"description": content.description}, content)
        data["prompt"] = content.body
        return format_toml_command(data)


class GeminiAdapter(ToolCommandAdapter):
    """Gemini CLI: .gemini/commands/opsx/<id>.toml"""

    @property
    def tool_id(self) -> str:
        return "gemini"

    def get_file_path(self, command_id: str) -> Path:
        return Path(".gemini") / "commands" / "opsx" / f"{command_id}.toml"

    def format_file(self, content: CommandContent) -> str:
        data = _with_marker({"description": content.description}, content)
        data["prompt"] = content.body
        return format_toml_command(data)
