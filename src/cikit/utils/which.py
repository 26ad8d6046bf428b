from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence

from loguru import logger

from .platform import is_windows


def capture_stdout(tokens: Sequence[str]) -> str | None:
    """Return the stdout of a probe command, or ``None`` if it failed."""
    try:
        result = subprocess.run(
            list(tokens),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            encoding="utf-8",
            check=False,
        )
    except OSError as err:
        logger.debug("Probe {} unavailable: {}", tokens[0], err)
        return None
    if result.returncode != 0:
        return None
    return result.stdout


def _probe(probe: str, name: str) -> list[str]:
    if probe == "command":
        return ["sh", "-c", f"command -v {shlex.quote(name)}"]
    return [probe, name]


def which(name: str) -> list[str] | None:
    """Locate ``name`` using the system's own lookup commands.

    >>> which("sh")  # doctest: +SKIP
    ['/usr/bin/sh']
    """
    if is_windows():
        probes = ("where", "which", "command")
    else:
        probes = ("which", "command", "where")
    for probe in probes:
        out = capture_stdout(_probe(probe, name))
        if not out:
            continue
        paths = [line.strip() for line in out.splitlines() if line.strip()]
        if paths:
            return paths
    return None
