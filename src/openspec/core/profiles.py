"""Workflow profiles.

Profiles determine WHICH workflows are active; delivery (in the global config)
determines HOW they are delivered (skills, commands, or both).
"""

from typing import Literal, TypeGuard, get_args

WorkflowId = Literal["propose", "explore", "new", "continue", "apply", "archive", "verify"]
Profile = Literal["core", "custom"]
Delivery = Literal["skills", "commands", "both"]

# Catalog order. Everything that iterates workflows uses this order.
ALL_WORKFLOWS: tuple[WorkflowId, ...] = (
    "propose",
    "explore",
    "new",
    "continue",
    "apply",
    "archive",
    "verify",
)

# Streamlined subset for new users
CORE_WORKFLOWS: tuple[WorkflowId, ...] = ("propose", "explore", "apply", "archive")

PROFILES: tuple[Profile, ...] = get_args(Profile)
DELIVERIES: tuple[Delivery, ...] = get_args(Delivery)

DEFAULT_PROFILE: Profile = "core"
DEFAULT_DELIVERY: Delivery = "both"


def is_workflow_id(value: str) -> TypeGuard[WorkflowId]:
    """Return True if value names a known workflow."""
    return value in ALL_WORKFLOWS


def is_profile(value: str) -> TypeGuard[Profile]:
    return value in PROFILES


def is_delivery(value: str) -> TypeGuard[Delivery]:
    return value in DELIVERIES


def normalize_workflows(workflows: tuple[str, ...] | list[str]) -> tuple[WorkflowId, ...]:
    """Drop unknown ids and duplicates, keeping first-seen order."""
    result: list[WorkflowId] = []
    for workflow in workflows:
        if is_workflow_id(workflow) and workflow not in result:
            result.append(workflow)
    return tuple(result)


def get_profile_workflows(
    profile: Profile, custom_workflows: tuple[str, ...] | None
) -> tuple[WorkflowId, ...]:
    """Resolve the active workflows for a profile.

    The core profile always yields CORE_WORKFLOWS; a custom list is ignored,
    never merged. The custom profile yields the custom list verbatim (minus
    unknown ids), and an absent list means no workflows at all.
    """
    if profile == "custom":
        if custom_workflows is None:
            return ()
        return normalize_workflows(custom_workflows)
    return CORE_WORKFLOWS
