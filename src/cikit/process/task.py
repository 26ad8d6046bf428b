from __future__ import annotations

import subprocess
from collections.abc import Iterator
from typing import IO

from attrs import define, field
from loguru import logger

from .exceptions import TaskConsumedError
from .schema import TaskResult


@define
class TaskHandle:
    """A command started by :func:`~cikit.process.async_run`.

    Unpacks as ``(stdout, process)``. The owner must call
    :meth:`wait_and_collect` exactly once, otherwise the pipe stays open and
    the child is never reaped.
    """

    stdout: IO[str] | IO[bytes]
    process: subprocess.Popen[bytes]
    _consumed: bool = field(init=False, default=False)

    def __iter__(self) -> Iterator[object]:
        yield self.stdout
        yield self.process

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def consumed(self) -> bool:
        return self._consumed

    def wait_and_collect(self) -> TaskResult:
        if self._consumed:
            msg = f"Task {self.pid} has already been collected"
            raise TaskConsumedError(msg)
        self._consumed = True

        # drain before waiting so a full pipe cannot block the child
        try:
            with self.stdout:
                output = self.stdout.read()
        finally:
            returncode = self.process.wait()
        logger.debug("Task {} exited with status {}", self.pid, returncode)
        return TaskResult(output=output, returncode=returncode)


def wait_and_collect(handle: TaskHandle) -> TaskResult:
    return handle.wait_and_collect()
