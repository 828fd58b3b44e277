"""Tests for workflow profiles."""

from openspec.core.profiles import (
    ALL_WORKFLOWS,
    CORE_WORKFLOWS,
    get_profile_workflows,
    is_delivery,
    is_profile,
    is_workflow_id,
    normalize_workflows,
)


def test_core_workflows_are_a_subset_in_catalog_order() -> None:
    """Core workflows appear in the same relative order as the catalog."""
    positions = [ALL_WORKFLOWS.index(w) for w in CORE_WORKFLOWS]
    assert positions == sorted(positions)


def test_core_profile_ignores_custom_list() -> None:
    """The core profile never merges a persisted custom list."""
    result = get_profile_workflows("core", ("verify", "new"))
    assert result == ("propose", "explore", "apply", "archive")


def test_custom_profile_returns_list_verbatim() -> None:
    """Custom profile keeps the persisted order."""
    result = get_profile_workflows("custom", ("verify", "apply"))
    assert result == ("verify", "apply")


def test_custom_profile_without_list_is_empty() -> None:
    """An absent custom list means no workflows."""
    assert get_profile_workflows("custom", None) == ()


def test_custom_profile_drops_unknown_and_duplicate_ids() -> None:
    result = get_profile_workflows("custom", ("apply", "bogus", "apply", "explore"))
    assert result == ("apply", "explore")


def test_normalize_workflows_accepts_lists() -> None:
    assert normalize_workflows(["new", "continue"]) == ("new", "continue")


def test_type_guards() -> None:
    """Type guards accept only known literal values."""
    assert is_workflow_id("propose")
    assert not is_workflow_id("Propose")
    assert is_profile("custom")
    assert not is_profile("full")
    assert is_delivery("skills")
    assert not is_delivery("none")
