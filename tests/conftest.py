"""Shared pytest fixtures."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the real config store at a temp directory so no test touches ~/.openspec."""
    config_dir = tmp_path / "global-config"
    monkeypatch.setenv("OPENSPEC_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("OPENSPEC_INTERACTIVE", raising=False)
    return config_dir
