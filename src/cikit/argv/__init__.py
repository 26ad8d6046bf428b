from __future__ import annotations

from .builder import ArgvBuilder, FlagStyle, build_argv, to_argv, to_argv_bsd
from .exceptions import ArgvError, InvalidValueKind
from .schema import ArgConfig, ArgValue, Scalar

__all__ = [
    "ArgConfig",
    "ArgValue",
    "ArgvBuilder",
    "ArgvError",
    "FlagStyle",
    "InvalidValueKind",
    "Scalar",
    "build_argv",
    "to_argv",
    "to_argv_bsd",
]
