"""Abstract base class for global config persistence.

ConfigStore is the narrow read/write capability through which the core
reaches the process-wide config file. Nothing else touches that file.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from openspec.core.global_config import GlobalConfig


class ConfigStore(ABC):
    """Abstract interface for global config operations.

    All implementations (real, fake) must implement this interface.
    This gateway enables testing by avoiding direct Path.home() calls.
    """

    @abstractmethod
    def config_path(self) -> Path:
        """Get path to the config file (used in messages)."""
        ...

    @abstractmethod
    def exists(self) -> bool:
        """Check if the config file exists."""
        ...

    @abstractmethod
    def read(self) -> GlobalConfig:
        """Load the global config.

        Returns GlobalConfig.default() when no config exists. Reading never
        creates the file, so an untouched install still has no profile key.

        Raises:
            ValidationError: If the file exists but cannot be parsed
        """
        ...

    @abstractmethod
    def write(self, config: GlobalConfig) -> None:
        """Persist the global config, replacing previous contents."""
        ...
