"""Fake ConfigStore implementation for testing.

FakeConfigStore is an in-memory implementation that enables fast and
deterministic tests without touching the user's real config file.
"""

from pathlib import Path

from openspec.core.global_config import GlobalConfig
from openspec.gateway.config_store.abc import ConfigStore


class FakeConfigStore(ConfigStore):
    """In-memory fake implementation that tracks mutations.

    This class has NO public setup methods beyond constructor.
    All state is provided via constructor or captured during execution.
    """

    def __init__(self, *, config: GlobalConfig | None) -> None:
        """Create FakeConfigStore with optional initial state.

        Args:
            config: Initial config state (None = config file doesn't exist)
        """
        self._config = config
        self._saved_configs: list[GlobalConfig] = []
        self._read_count = 0

    # --- Test assertions ---

    @property
    def saved_configs(self) -> list[GlobalConfig]:
        """Get list of configs that were written.

        Returns a copy to prevent external mutation.
        This property is for test assertions only.
        """
        return list(self._saved_configs)

    @property
    def current_config(self) -> GlobalConfig | None:
        """Get current config state.

        This property is for test assertions only.
        """
        return self._config

    @property
    def read_count(self) -> int:
        """Number of times read() was called.

        This property is for test assertions only.
        """
        return self._read_count

    # --- ConfigStore ---

    def config_path(self) -> Path:
        return Path("/fake/openspec/config.toml")

    def exists(self) -> bool:
        return self._config is not None

    def read(self) -> GlobalConfig:
        self._read_count += 1
        if self._config is None:
            return GlobalConfig.default()
        return self._config

    def write(self, config: GlobalConfig) -> None:
        self._config = config
        self._saved_configs.append(config)
