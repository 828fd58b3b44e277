"""Global openspec configuration model.

The global config is the only persisted mutable state the reconciliation
core depends on. It is read once near the start of a run and written at
most once (by migration) or by explicit `openspec config` commands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from openspec.core.profiles import DEFAULT_DELIVERY


@dataclass(frozen=True)
class GlobalConfig:
    """In-memory representation of ~/.openspec/config.toml.

    Values are kept as persisted, without validation, so that a stale or
    hand-edited file never breaks resolution. Interpretation happens in
    openspec.core.resolver.

    Attributes:
        profile: Persisted profile name. None means the key has never been
            written, which is what gates the one-time profile migration.
        delivery: Persisted delivery mode ("skills", "commands" or "both").
        workflows: Custom workflow list, only consulted under the custom profile.
        feature_flags: Named boolean toggles.
    """

    profile: str | None
    delivery: str
    workflows: tuple[str, ...] | None
    feature_flags: dict[str, bool] = field(default_factory=dict)

    @staticmethod
    def default() -> GlobalConfig:
        """Configuration used when no config file exists."""
        return GlobalConfig(profile=None, delivery=DEFAULT_DELIVERY, workflows=None)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> GlobalConfig:
        """Build a config from parsed TOML data, tolerating missing keys."""
        profile = data.get("profile")
        delivery = data.get("delivery", DEFAULT_DELIVERY)
        raw_workflows = data.get("workflows")
        raw_flags = data.get("feature_flags", {})

        workflows: tuple[str, ...] | None = None
        if isinstance(raw_workflows, list):
            workflows = tuple(str(w) for w in raw_workflows)

        flags: dict[str, bool] = {}
        if isinstance(raw_flags, dict):
            flags = {str(k): v for k, v in raw_flags.items() if isinstance(v, bool)}

        return GlobalConfig(
            profile=str(profile) if profile is not None else None,
            delivery=str(delivery),
            workflows=workflows,
            feature_flags=flags,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for TOML output. Absent values are omitted, not nulled."""
        data: dict[str, Any] = {}
        if self.profile is not None:
            data["profile"] = self.profile
        data["delivery"] = self.delivery
        if self.workflows is not None:
            data["workflows"] = list(self.workflows)
        if self.feature_flags:
            data["feature_flags"] = dict(self.feature_flags)
        return data
