from __future__ import annotations


class ArgvError(Exception):
    """Base exception for the argv module."""


class InvalidValueKind(ArgvError, TypeError):
    """Raised when a configuration value has no argv conversion rule."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"Unsupported value for flag {key!r}: {type(value).__name__}"
        )
