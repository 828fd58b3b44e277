"""Tests for FakeConsole scripted responses."""

from openspec.gateway.console import FakeConsole


def test_returns_scripted_answers_then_defaults() -> None:
    console = FakeConsole(is_interactive=True, confirm_responses=[False], prompt_responses=["x"])

    assert console.confirm("First?", default=True) is False
    assert console.confirm("Second?", default=True) is True
    assert console.prompt("Name", default="d") == "x"
    assert console.prompt("Again", default="d") == "d"


def test_records_questions_in_order() -> None:
    console = FakeConsole(is_interactive=False, confirm_responses=None, prompt_responses=None)

    console.confirm("Proceed?", default=False)
    console.prompt("Tools", default="")

    assert console.questions == ["Proceed?", "Tools"]
    assert console.is_stdin_interactive() is False
