from __future__ import annotations

from loguru import logger

from .argv import (
    ArgvBuilder,
    FlagStyle,
    InvalidValueKind,
    build_argv,
    to_argv,
    to_argv_bsd,
)
from .command import CommandSpec
from .process import (
    CommandFailed,
    SpawnFailed,
    TaskHandle,
    TaskResult,
    arun,
    async_run,
    run,
    run_cmd,
    spawn,
    wait_and_collect,
    wait_task,
)

logger.disable("cikit")

__all__ = [
    "ArgvBuilder",
    "CommandFailed",
    "CommandSpec",
    "FlagStyle",
    "InvalidValueKind",
    "SpawnFailed",
    "TaskHandle",
    "TaskResult",
    "arun",
    "async_run",
    "build_argv",
    "run",
    "run_cmd",
    "spawn",
    "to_argv",
    "to_argv_bsd",
    "wait_and_collect",
    "wait_task",
]
