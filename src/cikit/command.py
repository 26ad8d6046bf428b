from __future__ import annotations

import subprocess
from collections.abc import Iterable, Mapping
from typing import Any

from attrs import field, frozen

from .argv import ArgConfig, FlagStyle, build_argv
from .process import TaskHandle, arun, async_run, run, run_cmd, spawn


def _to_tuple(values: Iterable[object]) -> tuple[str, ...]:
    return tuple(str(v) for v in values)


@frozen
class CommandSpec:
    """A command described by an argv configuration.

    ``extra_args`` are appended verbatim after the built flags, e.g. the build
    context of ``docker build``.
    """

    config: ArgConfig
    style: FlagStyle = field(factory=FlagStyle)
    env: Mapping[str, str] | None = None
    extra_args: tuple[str, ...] = field(default=(), converter=_to_tuple)

    @classmethod
    def from_tokens(
        cls, tokens: Iterable[str], env: Mapping[str, str] | None = None
    ) -> CommandSpec:
        tokens = list(tokens)
        if not tokens:
            raise ValueError("Command must have at least one token")
        return cls(config={tokens[0]: None}, env=env, extra_args=tokens[1:])

    def to_argv(self) -> list[str]:
        return [*build_argv(self.config, self.style), *self.extra_args]

    def run(self, **options: Any) -> str | bytes | None:
        return run(self.to_argv(), self.env, **options)

    def run_cmd(self, **options: Any) -> bool:
        return run_cmd(self.to_argv(), self.env, **options)

    def run_async(self, **options: Any) -> TaskHandle:
        return async_run(self.to_argv(), self.env, **options)

    def spawn(self, **options: Any) -> subprocess.Popen[bytes]:
        return spawn(self.to_argv(), self.env, **options)

    async def arun(self, **options: Any) -> str | bytes | None:
        return await arun(self.to_argv(), self.env, **options)
