"""Test factories for creating OpenSpecContext instances."""

from pathlib import Path

from openspec.core.context import OpenSpecContext
from openspec.gateway.config_store import ConfigStore, FakeConfigStore
from openspec.gateway.console import Console, FakeConsole


def context_for_test(
    *,
    cwd: Path,
    config_store: ConfigStore | None = None,
    console: Console | None = None,
    current_version: str = "1.0.0",
) -> OpenSpecContext:
    """Create test context with fakes for anything not supplied.

    Args:
        cwd: Working directory (usually tmp_path)
        config_store: Optional store. If None, creates an empty FakeConfigStore.
        console: Optional console. If None, creates a non-interactive FakeConsole.
        current_version: Version marker for generated files

    Example:
        >>> store = FakeConfigStore(config=None)
        >>> ctx = context_for_test(cwd=tmp_path, config_store=store)
    """
    resolved_store = config_store if config_store is not None else FakeConfigStore(config=None)
    resolved_console = (
        console
        if console is not None
        else FakeConsole(is_interactive=False, confirm_responses=None, prompt_responses=None)
    )
    return OpenSpecContext(
        config_store=resolved_store,
        console=resolved_console,
        cwd=cwd,
        current_version=current_version,
    )
