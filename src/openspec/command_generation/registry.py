"""Adapter lookup and command generation."""

from dataclasses import replace
from functools import cache

from openspec.command_generation.adapters import (
    ClaudeAdapter,
    ClaudeInternalAdapter,
    CursorAdapter,
    GeminiAdapter,
    GitHubCopilotAdapter,
    OpenCodeAdapter,
    QwenAdapter,
    WindsurfAdapter,
)
from openspec.command_generation.types import (
    CommandContent,
    GeneratedCommand,
    ToolCommandAdapter,
)


@cache
def _adapters_by_tool() -> dict[str, ToolCommandAdapter]:
    adapters: list[ToolCommandAdapter] = [
        ClaudeAdapter(),
        ClaudeInternalAdapter(),
        CursorAdapter(),
        WindsurfAdapter(),
        OpenCodeAdapter(),
        QwenAdapter(),
        GeminiAdapter(),
        GitHubCopilotAdapter(),
    ]
    return {adapter.tool_id: adapter for adapter in adapters}


def get_adapter(tool_id: str) -> ToolCommandAdapter | None:
    """Return the command adapter for a tool, or None if it has no commands."""
    return _adapters_by_tool().get(tool_id)


def generate_commands(
    contents: list[CommandContent],
    adapter: ToolCommandAdapter,
    *,
    generated_by: str | None,
) -> list[GeneratedCommand]:
    """Format every command for one tool.

    Args:
        contents: Tool-agnostic command data, in catalog order
        adapter: Target tool's adapter
        generated_by: Version marker to embed in each file

    Returns:
        One GeneratedCommand per content entry, in the same order
    """
    generated: list[GeneratedCommand] = []
    for content in contents:
        prepared = replace(
            content,
            body=adapter.transform_instructions(content.body),
            generated_by=generated_by,
        )
        generated.append(
            GeneratedCommand(
                path=adapter.get_file_path(content.command_id),
                file_content=adapter.format_file(prepared),
            )
        )
    return generated
