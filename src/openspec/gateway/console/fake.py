"""Fake Console implementation for testing.

FakeConsole answers prompts from scripted responses and records every
question asked, enabling fast and deterministic tests.
"""

from openspec.gateway.console.abc import Console


class FakeConsole(Console):
    """In-memory fake implementation with scripted answers.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        is_interactive: bool,
        confirm_responses: list[bool] | None,
        prompt_responses: list[str] | None,
    ) -> None:
        """Create FakeConsole with scripted answers.

        Args:
            is_interactive: Whether to report stdin as interactive
            confirm_responses: Answers returned by confirm(), in order.
                When exhausted (or None), the question's default is returned.
            prompt_responses: Answers returned by prompt(), in order.
                When exhausted (or None), the prompt's default is returned.
        """
        self._is_interactive = is_interactive
        self._confirm_responses = list(confirm_responses or [])
        self._prompt_responses = list(prompt_responses or [])
        self._questions: list[str] = []

    @property
    def questions(self) -> list[str]:
        """Questions asked through confirm() and prompt(), in order.

        This property is for test assertions only.
        """
        return list(self._questions)

    def is_stdin_interactive(self) -> bool:
        return self._is_interactive

    def confirm(self, question: str, *, default: bool) -> bool:
        self._questions.append(question)
        if self._confirm_responses:
            return self._confirm_responses.pop(0)
        return default

    def prompt(self, text: str, *, default: str) -> str:
        self._questions.append(text)
        if self._prompt_responses:
            return self._prompt_responses.pop(0)
        return default
