"""Conversion of configuration mappings into command-line argument vectors.

Rules, GNU style (the default)::

    {"verbose": True}            -> ["--verbose"]
    {"v": True}                  -> ["-v"]
    {"v": False}                 -> []
    {"file": "a.txt"}            -> ["--file", "a.txt"]
    {"tag": ["a", "b"]}          -> ["--tag", "a", "--tag", "b"]
    {"label": {"env": "test"}}   -> ["--label", "env=test"]

BSD style always uses a single dash (``{"tag": "a"}`` -> ``["-tag", "a"]``).
A ``None`` value emits the key verbatim, which is how program names,
subcommands and pre-formatted raw tokens are passed::

    {"cargo": None, "b": None, "r": True} -> ["cargo", "b", "-r"]
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from os import PathLike
from typing import ClassVar, Self

import attrs
from attrs import define, frozen

from .exceptions import InvalidValueKind
from .schema import ArgConfig, ArgValue


@frozen
class FlagStyle:
    bsd_style: bool = False
    kebab_case_flags: bool = True

    GNU: ClassVar[FlagStyle]
    BSD: ClassVar[FlagStyle]

    def with_bsd_style(self, value: bool = True) -> FlagStyle:
        return attrs.evolve(self, bsd_style=value)

    def with_kebab_case_flags(self, value: bool = True) -> FlagStyle:
        return attrs.evolve(self, kebab_case_flags=value)

    def flag(self, key: str) -> str:
        """Build the flag token for ``key``."""
        body = key.replace("_", "-") if self.kebab_case_flags else key
        if self.bsd_style or len(body) == 1:
            return f"-{body}"
        return f"--{body}"


FlagStyle.GNU = FlagStyle()
FlagStyle.BSD = FlagStyle(bsd_style=True)


def _is_scalar(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float, PathLike))


def _expand(key: str, value: ArgValue, style: FlagStyle) -> list[str]:
    if value is None:
        return [key]
    if value is False:
        return []

    flag = style.flag(key)
    if value is True:
        return [flag]

    if isinstance(value, Mapping):
        args: list[str] = []
        for k, v in value.items():
            if not _is_scalar(v):
                raise InvalidValueKind(key, v)
            args.extend((flag, f"{k}={v}"))
        return args

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        args = []
        for v in value:
            if not _is_scalar(v):
                raise InvalidValueKind(key, v)
            args.extend((flag, str(v)))
        return args

    if not _is_scalar(value):
        raise InvalidValueKind(key, value)
    return [flag, str(value)]


def build_argv(config: ArgConfig, style: FlagStyle | None = None) -> list[str]:
    """Flatten ``config`` into an argument vector, preserving key order."""
    style = style or FlagStyle()
    argv: list[str] = []
    for key, value in config.items():
        argv.extend(_expand(str(key), value, style))
    return argv


def to_argv(config: ArgConfig, style: FlagStyle | None = None) -> list[str]:
    return build_argv(config, style)


def to_argv_bsd(config: ArgConfig, style: FlagStyle | None = None) -> list[str]:
    return build_argv(config, (style or FlagStyle()).with_bsd_style())


@define
class ArgvBuilder:
    """Fluent wrapper around :func:`build_argv`.

    >>> ArgvBuilder({"cargo": None, "b": None, "r": True}).with_bsd_style(False).build()
    ['cargo', 'b', '-r']
    """

    config: ArgConfig
    style: FlagStyle = attrs.field(factory=FlagStyle)

    def with_bsd_style(self, value: bool = True) -> Self:
        self.style = self.style.with_bsd_style(value)
        return self

    def with_kebab_case_flags(self, value: bool = True) -> Self:
        self.style = self.style.with_kebab_case_flags(value)
        return self

    def build(self) -> list[str]:
        return build_argv(self.config, self.style)
