"""Real ConfigStore implementation.

RealConfigStore reads and writes ~/.openspec/config.toml. The directory can
be relocated with the OPENSPEC_CONFIG_DIR environment variable.
"""

import logging
import os
import tomllib
from pathlib import Path

import tomli_w

from openspec.core.errors import ValidationError
from openspec.core.global_config import GlobalConfig
from openspec.gateway.config_store.abc import ConfigStore

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"


def _config_dir() -> Path:
    """Return the directory holding the global config.

    Note: Not cached to allow tests to monkeypatch Path.home() and the environment.
    """
    override = os.environ.get("OPENSPEC_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".openspec"


class RealConfigStore(ConfigStore):
    """Production implementation backed by a TOML file."""

    def config_path(self) -> Path:
        return _config_dir() / CONFIG_FILENAME

    def exists(self) -> bool:
        return self.config_path().exists()

    def read(self) -> GlobalConfig:
        """Load global config, falling back to defaults when the file is absent.

        Raises:
            ValidationError: If the file is not valid TOML
        """
        path = self.config_path()
        if not path.exists():
            logger.debug("No global config at %s, using defaults", path)
            return GlobalConfig.default()

        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValidationError(f"Invalid global config at {path}: {e}") from e
        return GlobalConfig.from_dict(data)

    def write(self, config: GlobalConfig) -> None:
        """Write global config atomically.

        Raises:
            PermissionError: If the config directory or file is not writable
        """
        path = self.config_path()
        parent = path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable.\n\n"
                f"Set OPENSPEC_CONFIG_DIR to a writable location or fix the permissions."
            )
        parent.mkdir(parents=True, exist_ok=True)

        tmp = path.with_suffix(path.suffix + ".tmp")
        content = "# Global openspec configuration\n" + tomli_w.dumps(config.to_dict())
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
        logger.debug("Wrote global config to %s", path)
