"""Tool-specific slash command generation."""

from openspec.command_generation.registry import generate_commands as generate_commands
from openspec.command_generation.registry import get_adapter as get_adapter
from openspec.command_generation.types import CommandContent as CommandContent
from openspec.command_generation.types import GeneratedCommand as GeneratedCommand
from openspec.command_generation.types import ToolCommandAdapter as ToolCommandAdapter
