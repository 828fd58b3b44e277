"""Types for tool-specific slash command generation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CommandContent:
    """Tool-agnostic command data handed to an adapter.

    Attributes:
        command_id: Workflow id the command belongs to (e.g. "apply")
        name: Display name
        description: One-line description
        category: Grouping label
        tags: Free-form tags
        body: Instruction text
        generated_by: Version marker to embed, or None to omit it
    """

    command_id: str
    name: str
    description: str
    category: str
    tags: tuple[str, ...]
    body: str
    generated_by: str | None = None


@dataclass(frozen=True)
class GeneratedCommand:
    """A formatted command ready to write.

    Attributes:
        path: Path relative to the project root
        file_content: Full file text
    """

    path: Path
    file_content: str


class ToolCommandAdapter(ABC):
    """Per-tool path and format convention for slash commands.

    Adapters are pure string formatting. They never touch the filesystem.
    """

    @property
    @abstractmethod
    def tool_id(self) -> str:
        """Identifier of the tool this adapter serves."""
        ...

    @abstractmethod
    def get_file_path(self, command_id: str) -> Path:
        """Return the command file path for a workflow, relative to the project root."""
        ...

    @abstractmethod
    def format_file(self, content: CommandContent) -> str:
        """Render the complete command file text."""
        ...

    def transform_instructions(self, text: str) -> str:
        """Rewrite instruction text for this tool's command syntax.

        Applied to command bodies and skill instructions alike.
        """
        return text
