from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import timedelta
from pathlib import Path

import anyio
from loguru import logger

from .exceptions import CommandFailed, SpawnFailed
from .utils import coerce_data, decode_output, format_command, normalize_env


async def arun(
    tokens: Sequence[str],
    env: Mapping[object, object] | None = None,
    *,
    allow_failure: bool = False,
    stdin_data: str | bytes | None = None,
    binmode: bool = False,
    cwd: str | Path | None = None,
    timeout: timedelta | None = None,
) -> str | bytes | None:
    """Awaitable counterpart of :func:`~cikit.process.run`.

    Standard error is captured only so it can be logged when the command
    fails.
    """
    argv = list(tokens)
    logger.debug("Running system command (awaitable)")
    logger.info("{}", argv)

    data = coerce_data(stdin_data, binary=True) if stdin_data is not None else None

    try:
        if timeout is not None:
            with anyio.fail_after(timeout.total_seconds()):
                result = await anyio.run_process(
                    argv, input=data, check=False, cwd=cwd, env=normalize_env(env)
                )
        else:
            result = await anyio.run_process(
                argv, input=data, check=False, cwd=cwd, env=normalize_env(env)
            )
    except OSError as err:
        if not allow_failure:
            raise SpawnFailed(argv, err) from err
        logger.error("Failed to spawn {}: {}", format_command(argv), err)
        return None

    if result.returncode != 0:
        if not allow_failure:
            raise CommandFailed(argv, result.returncode)
        logger.error(
            "Command exited with status {}: {}\n{}",
            result.returncode,
            format_command(argv),
            decode_output(result.stderr),
        )

    return result.stdout if binmode else decode_output(result.stdout)
