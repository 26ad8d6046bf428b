from __future__ import annotations

from typing import IO, NamedTuple

type StdinData = str | bytes | IO[str] | IO[bytes]


class TaskResult(NamedTuple):
    """Output and exit status of a collected background command."""

    output: str | bytes
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0
