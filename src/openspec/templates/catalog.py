"""Template catalog: workflow id to skill and command content.

The catalog order is fixed and every lookup preserves it, so generated
files and summaries are deterministic across runs.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import cache

import yaml

from openspec.command_generation.types import CommandContent
from openspec.core.profiles import ALL_WORKFLOWS, WorkflowId
from openspec.templates import workflows
from openspec.templates.types import CommandTemplate, SkillTemplate

SKILL_FILENAME = "SKILL.md"

_SKILL_DIR_NAMES: dict[WorkflowId, str] = {
    "propose": "openspec-propose",
    "explore": "openspec-explore",
    "new": "openspec-new-change",
    "continue": "openspec-continue-change",
    "apply": "openspec-apply-change",
    "archive": "openspec-archive-change",
    "verify": "openspec-verify-change",
}

_SKILL_FACTORIES: dict[WorkflowId, Callable[[], SkillTemplate]] = {
    "propose": workflows.get_propose_skill_template,
    "explore": workflows.get_explore_skill_template,
    "new": workflows.get_new_change_skill_template,
    "continue": workflows.get_continue_change_skill_template,
    "apply": workflows.get_apply_change_skill_template,
    "archive": workflows.get_archive_change_skill_template,
    "verify": workflows.get_verify_change_skill_template,
}

_COMMAND_FACTORIES: dict[WorkflowId, Callable[[], CommandTemplate]] = {
    "propose": workflows.get_propose_command_template,
    "explore": workflows.get_explore_command_template,
    "new": workflows.get_new_command_template,
    "continue": workflows.get_continue_command_template,
    "apply": workflows.get_apply_command_template,
    "archive": workflows.get_archive_command_template,
    "verify": workflows.get_verify_command_template,
}


@dataclass(frozen=True)
class SkillTemplateEntry:
    """A skill template with its on-disk directory name."""

    template: SkillTemplate
    dir_name: str
    workflow_id: WorkflowId


@dataclass(frozen=True)
class CommandTemplateEntry:
    """A command template with its command id."""

    template: CommandTemplate
    command_id: WorkflowId


def skill_dir_name(workflow_id: WorkflowId) -> str:
    """Return the skill directory name for a workflow (e.g. openspec-apply-change)."""
    return _SKILL_DIR_NAMES[workflow_id]


def _select(workflow_filter: Iterable[str] | None) -> list[WorkflowId]:
    if workflow_filter is None:
        return list(ALL_WORKFLOWS)
    wanted = set(workflow_filter)
    return [workflow for workflow in ALL_WORKFLOWS if workflow in wanted]


@cache
def _all_skill_entries() -> tuple[SkillTemplateEntry, ...]:
    return tuple(
        SkillTemplateEntry(
            template=_SKILL_FACTORIES[workflow](),
            dir_name=_SKILL_DIR_NAMES[workflow],
            workflow_id=workflow,
        )
        for workflow in ALL_WORKFLOWS
    )


@cache
def _all_command_entries() -> tuple[CommandTemplateEntry, ...]:
    return tuple(
        CommandTemplateEntry(template=_COMMAND_FACTORIES[workflow](), command_id=workflow)
        for workflow in ALL_WORKFLOWS
    )


def get_skill_templates(workflow_filter: Iterable[str] | None) -> list[SkillTemplateEntry]:
    """Return skill templates in catalog order.

    Args:
        workflow_filter: Workflow ids to include, or None for all. Unknown ids
            match nothing.
    """
    selected = set(_select(workflow_filter))
    return [entry for entry in _all_skill_entries() if entry.workflow_id in selected]


def get_command_templates(workflow_filter: Iterable[str] | None) -> list[CommandTemplateEntry]:
    """Return command templates in catalog order, filtered like get_skill_templates."""
    selected = set(_select(workflow_filter))
    return [entry for entry in _all_command_entries() if entry.command_id in selected]


def get_command_contents(workflow_filter: Iterable[str] | None) -> list[CommandContent]:
    """Convert command templates into adapter input."""
    return [
        CommandContent(
            command_id=entry.command_id,
            name=entry.template.name,
            description=entry.template.description,
            category=entry.template.category,
            tags=entry.template.tags,
            body=entry.template.content,
        )
        for entry in get_command_templates(workflow_filter)
    ]


def generate_skill_content(
    template: SkillTemplate,
    generated_by: str,
    transform: Callable[[str], str] | None,
) -> str:
    """Render SKILL.md text with YAML front matter.

    The generatedBy marker lives under metadata so the status check can
    detect stale skills.

    Args:
        template: Skill template to render
        generated_by: Version marker to embed
        transform: Optional rewrite applied to the instructions
    """
    instructions = template.instructions
    if transform is not None:
        instructions = transform(instructions)

    metadata = {
        "name": template.name,
        "description": template.description,
        "license": template.license,
        "compatibility": template.compatibility,
        "metadata": {
            "author": template.author,
            "version": template.version,
            "generatedBy": generated_by,
        },
    }
    header = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n{instructions}"
