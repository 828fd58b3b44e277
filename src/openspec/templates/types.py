"""Template data types for workflow skills and commands."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SkillTemplate:
    """Static content for one workflow's SKILL.md."""

    name: str
    description: str
    instructions: str
    license: str = "MIT"
    compatibility: str = "Requires openspec CLI."
    author: str = "openspec"
    version: str = "1.0"


@dataclass(frozen=True)
class CommandTemplate:
    """Static content for one workflow's slash command."""

    name: str
    description: str
    category: str
    tags: tuple[str, ...]
    content: str
