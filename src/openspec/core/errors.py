"""Error types surfaced to CLI callers.

Only validation failures are raised out of the core. Status read failures,
per-tool write failures and legacy cleanup failures are recovered where
they happen and reported through result objects instead.
"""


class OpenSpecError(Exception):
    """Base class for errors that abort a command with a user-facing message."""


class ValidationError(OpenSpecError):
    """Invalid input detected before any filesystem mutation.

    Examples: an unknown --profile value, an unknown tool id in --tools,
    or running update in a directory without an openspec/ root.
    """
