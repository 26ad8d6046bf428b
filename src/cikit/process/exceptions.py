from __future__ import annotations

from collections.abc import Sequence

from .utils import format_command


class ProcessError(Exception):
    """Base exception for the process module."""


class CommandFailed(ProcessError):
    """Raised when a command exits with a non-zero status."""

    def __init__(self, tokens: Sequence[str], returncode: int) -> None:
        self.tokens = list(tokens)
        self.returncode = returncode
        super().__init__(
            f"Command failed with exit status {returncode}: {format_command(tokens)}"
        )


class SpawnFailed(ProcessError):
    """Raised when the operating system cannot start the command."""

    def __init__(self, tokens: Sequence[str], reason: OSError) -> None:
        self.tokens = list(tokens)
        self.reason = reason
        super().__init__(f"Failed to spawn {format_command(tokens)}: {reason}")


class TaskConsumedError(ProcessError):
    """Raised when a task handle is collected more than once."""
