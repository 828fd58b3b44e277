"""Resolve the desired artifact state from profile and delivery settings."""

from dataclasses import dataclass

from openspec.core.errors import ValidationError
from openspec.core.global_config import GlobalConfig
from openspec.core.profiles import (
    DEFAULT_DELIVERY,
    DEFAULT_PROFILE,
    PROFILES,
    Delivery,
    Profile,
    WorkflowId,
    get_profile_workflows,
    is_delivery,
    is_profile,
)


@dataclass(frozen=True)
class DesiredState:
    """What should exist on disk for every configured tool.

    Attributes:
        profile: Profile the workflows were resolved from
        delivery: Delivery mode the artifact kinds were resolved from
        workflows: Active workflows in catalog order (may be empty)
        generate_skills: Whether skill artifacts should exist
        generate_commands: Whether command artifacts should exist
    """

    profile: Profile
    delivery: Delivery
    workflows: tuple[WorkflowId, ...]
    generate_skills: bool
    generate_commands: bool


def parse_profile_override(raw: str | None) -> Profile | None:
    """Validate a caller-supplied profile override.

    Raises:
        ValidationError: If raw is not a known profile
    """
    if raw is None:
        return None
    if is_profile(raw):
        return raw
    raise ValidationError(f'Invalid profile "{raw}". Available profiles: {", ".join(PROFILES)}')


def effective_profile(config: GlobalConfig, override: Profile | None) -> Profile:
    """Override first, then the persisted profile; unknown values fall back to core."""
    if override is not None:
        return override
    if config.profile is not None and is_profile(config.profile):
        return config.profile
    return DEFAULT_PROFILE


def effective_delivery(config: GlobalConfig) -> Delivery:
    if is_delivery(config.delivery):
        return config.delivery
    return DEFAULT_DELIVERY


def resolve_desired_state(config: GlobalConfig, override: Profile | None) -> DesiredState:
    """Compute the desired state for this run.

    Pure and total over any persisted config: invalid values resolve to
    defaults rather than raising. Only parse_profile_override rejects input.

    Args:
        config: Persisted global config
        override: Already-validated one-shot profile override
    """
    profile = effective_profile(config, override)
    delivery = effective_delivery(config)
    return DesiredState(
        profile=profile,
        delivery=delivery,
        workflows=get_profile_workflows(profile, config.workflows),
        generate_skills=delivery != "commands",
        generate_commands=delivery != "skills",
    )
