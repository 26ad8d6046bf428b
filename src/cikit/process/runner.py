from __future__ import annotations

import io
import subprocess
from collections.abc import Mapping, Sequence
from contextlib import suppress
from typing import IO, Any

from loguru import logger

from .exceptions import CommandFailed, SpawnFailed
from .schema import StdinData
from .task import TaskHandle
from .utils import coerce_data, decode_output, format_command, normalize_env

COPY_BUFSIZE = 64 * 1024

type Env = Mapping[object, object] | None


def _announce(message: str, argv: list[str]) -> None:
    logger.debug(message)
    logger.info("{}", argv)


def run(
    tokens: Sequence[str],
    env: Env = None,
    *,
    allow_failure: bool = False,
    stdin_data: str | bytes | None = None,
    binmode: bool = False,
    **options: Any,
) -> str | bytes | None:
    """Run a command, wait for it and return its standard output.

    Output is decoded as UTF-8 with undecodable bytes replaced unless
    ``binmode`` is set. Standard error is inherited, not captured. With
    ``allow_failure`` a non-zero exit is logged and whatever was captured is
    returned; a command that could not be started returns ``None``.
    """
    argv = list(tokens)
    _announce("Running system command (captured)", argv)

    if stdin_data is not None:
        stdin_data = coerce_data(stdin_data, binary=True)

    try:
        completed = subprocess.run(
            argv,
            input=stdin_data,
            stdout=subprocess.PIPE,
            env=normalize_env(env),
            **options,
        )
    except OSError as err:
        if not allow_failure:
            raise SpawnFailed(argv, err) from err
        logger.error("Failed to spawn {}: {}", format_command(argv), err)
        return None

    if completed.returncode != 0:
        if not allow_failure:
            raise CommandFailed(argv, completed.returncode)
        logger.error(
            "Command exited with status {}: {}",
            completed.returncode,
            format_command(argv),
        )
    return completed.stdout if binmode else decode_output(completed.stdout)


def run_cmd(
    tokens: Sequence[str],
    env: Env = None,
    *,
    allow_failure: bool = False,
    **options: Any,
) -> bool:
    """Run a command with inherited standard streams.

    Returns ``True`` on exit status 0 and ``False`` for a non-zero exit when
    ``allow_failure`` is set.
    """
    argv = list(tokens)
    _announce("Running system command", argv)

    try:
        completed = subprocess.run(
            argv, env=normalize_env(env), check=not allow_failure, **options
        )
    except subprocess.CalledProcessError as err:
        raise CommandFailed(argv, err.returncode) from err
    except OSError as err:
        raise SpawnFailed(argv, err) from err

    if completed.returncode != 0:
        logger.warning(
            "Command exited with status {}: {}",
            completed.returncode,
            format_command(argv),
        )
        return False
    return True


def _write_stdin(pipe: IO[Any], data: StdinData, *, binary: bool) -> None:
    if isinstance(data, (str, bytes, bytearray)):
        pipe.write(coerce_data(data, binary=binary))
        return
    while chunk := data.read(COPY_BUFSIZE):
        pipe.write(coerce_data(chunk, binary=binary))


def _close_stdin(pipe: IO[Any], pid: int) -> None:
    try:
        pipe.close()
    except BrokenPipeError:
        logger.warning("Stdin of task {} was closed early", pid)


def _abort(process: subprocess.Popen[bytes], *pipes: IO[Any]) -> None:
    process.kill()
    for pipe in pipes:
        with suppress(OSError):
            pipe.close()
    process.wait()


def async_run(
    tokens: Sequence[str],
    env: Env = None,
    *,
    stdin_data: StdinData | None = None,
    binmode: bool = False,
    stdin_binmode: bool = False,
    stdout_binmode: bool = False,
    **options: Any,
) -> TaskHandle:
    """Start a command without waiting for it.

    The child's standard input and output are pipes. ``stdin_data`` (a string,
    bytes, or a readable stream copied in chunks) is written and stdin is
    closed before returning. Collect the result with
    :meth:`TaskHandle.wait_and_collect`.
    """
    argv = list(tokens)
    if "allow_failure" in options:
        options.pop("allow_failure")
        logger.warning("allow_failure is not supported by async_run; ignoring it")
    _announce("Running system command in the background", argv)

    stdin_binary = binmode or stdin_binmode
    stdout_binary = binmode or stdout_binmode

    try:
        process = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            env=normalize_env(env),
            **options,
        )
    except OSError as err:
        raise SpawnFailed(argv, err) from err

    assert process.stdin and process.stdout
    stdout: IO[Any] = (
        process.stdout
        if stdout_binary
        else io.TextIOWrapper(
            process.stdout, encoding="utf-8", errors="replace", newline=""
        )
    )
    stdin: IO[Any] = (
        process.stdin
        if stdin_binary
        else io.TextIOWrapper(
            process.stdin, encoding="utf-8", newline="", write_through=True
        )
    )

    if stdin_data is not None:
        try:
            _write_stdin(stdin, stdin_data, binary=stdin_binary)
        except BrokenPipeError:
            logger.warning(
                "Task {} closed its stdin before all input was written", process.pid
            )
        except Exception as err:
            logger.error("Failed to write stdin of task {}: {}", process.pid, err)
            _abort(process, stdin, stdout)
            raise

    _close_stdin(stdin, process.pid)
    return TaskHandle(stdout=stdout, process=process)


def spawn(
    tokens: Sequence[str], env: Env = None, **options: Any
) -> subprocess.Popen[bytes]:
    """Start a command in the background with inherited standard streams."""
    argv = list(tokens)
    _announce("Running system command in the background", argv)
    try:
        return subprocess.Popen(argv, env=normalize_env(env), **options)
    except OSError as err:
        raise SpawnFailed(argv, err) from err


def wait_task(process: subprocess.Popen[Any]) -> int:
    """Wait for a spawned process and require a zero exit status."""
    logger.debug("wait pid: {}", process.pid)
    returncode = process.wait()
    logger.debug("child status: {}", returncode)
    if returncode != 0:
        raise CommandFailed(list(process.args), returncode)  # type: ignore[arg-type]
    return returncode
