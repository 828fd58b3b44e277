"""Console operations abstraction for testing.

Interactive prompts are the only points where a run waits on external
input. Drivers reach them through this interface so that tests, and the
reconciliation engine itself, never need a terminal.
"""

from abc import ABC, abstractmethod


class Console(ABC):
    """Abstract console operations for dependency injection."""

    @abstractmethod
    def is_stdin_interactive(self) -> bool:
        """Check if prompts can be shown.

        Returns:
            True if the user can answer prompts, False in CI or when piped
        """
        ...

    @abstractmethod
    def confirm(self, question: str, *, default: bool) -> bool:
        """Ask a yes/no question.

        Args:
            question: Question text shown to the user
            default: Answer used when the user just presses enter

        Returns:
            The user's answer
        """
        ...

    @abstractmethod
    def prompt(self, text: str, *, default: str) -> str:
        """Ask for a free-form value.

        Args:
            text: Prompt text shown to the user
            default: Value used when the user just presses enter

        Returns:
            The entered value
        """
        ...
