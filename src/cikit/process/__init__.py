from __future__ import annotations

from .aio import arun
from .exceptions import CommandFailed, ProcessError, SpawnFailed, TaskConsumedError
from .runner import async_run, run, run_cmd, spawn, wait_task
from .schema import StdinData, TaskResult
from .task import TaskHandle, wait_and_collect
from .utils import normalize_env

__all__ = [
    "CommandFailed",
    "ProcessError",
    "SpawnFailed",
    "StdinData",
    "TaskConsumedError",
    "TaskHandle",
    "TaskResult",
    "arun",
    "async_run",
    "normalize_env",
    "run",
    "run_cmd",
    "spawn",
    "wait_and_collect",
    "wait_task",
]
