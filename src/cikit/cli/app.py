from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Final

from cyclopts import App
from pydantic import TypeAdapter, ValidationError

from cikit.argv import FlagStyle, build_argv
from cikit.logging import setup_logging
from cikit.process import ProcessError, run_cmd
from cikit.utils import which

app = App(name="cikit", help="Build and run command lines for CI scripts.")

DEFAULT_LOG_LEVEL: Final = os.environ.get("CIKIT_LOG_LEVEL", "INFO")

JsonScalar = int | float | str
JsonArgValue = None | bool | JsonScalar | list[JsonScalar] | dict[str, JsonScalar]
_config_adapter: Final = TypeAdapter(dict[str, JsonArgValue])


def load_config(source: str) -> dict[str, JsonArgValue]:
    """Read a JSON argv configuration from a file, or stdin for ``-``."""
    if source == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(source).read_text(encoding="utf-8")
    try:
        return _config_adapter.validate_json(raw)
    except ValidationError as err:
        raise SystemExit(f"Invalid configuration in {source}:\n{err}") from err


def _build(config: str, *, bsd: bool, kebab: bool) -> list[str]:
    style = FlagStyle(bsd_style=bsd, kebab_case_flags=kebab)
    return build_argv(load_config(config), style)


@app.command
def argv(
    config: str,
    *,
    bsd: bool = False,
    kebab: bool = True,
    log_level: str = DEFAULT_LOG_LEVEL,
) -> None:
    """Print the argument vector built from a JSON configuration as JSON.

    Parameters
    ----------
    config
        Path to a JSON object, or ``-`` to read it from stdin.
    bsd
        Use single-dash flags for every key.
    kebab
        Rewrite underscores in flag names to hyphens.
    """
    setup_logging(log_level)
    print(json.dumps(_build(config, bsd=bsd, kebab=kebab)))


@app.command(name="run")
def run_command(
    config: str,
    *,
    bsd: bool = False,
    kebab: bool = True,
    allow_failure: bool = False,
    cwd: Path | None = None,
    log_level: str = DEFAULT_LOG_LEVEL,
) -> None:
    """Build the argument vector from a JSON configuration and run it."""
    setup_logging(log_level)
    tokens = _build(config, bsd=bsd, kebab=kebab)
    if not tokens:
        raise SystemExit("Configuration produced an empty command.")

    try:
        ok = run_cmd(tokens, allow_failure=allow_failure, cwd=cwd)
    except ProcessError as err:
        raise SystemExit(str(err)) from err
    if not ok:
        raise SystemExit(1)


@app.command(name="which")
def which_command(name: str, *, log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Print every path the system resolves for a command name."""
    setup_logging(log_level)
    paths = which(name)
    if paths is None:
        raise SystemExit(f"{name} not found")
    for path in paths:
        print(path)
