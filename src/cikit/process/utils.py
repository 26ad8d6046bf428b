from __future__ import annotations

from collections.abc import Mapping, Sequence


def format_command(tokens: Sequence[str]) -> str:
    return " ".join(str(t) for t in tokens)


def normalize_env(env: Mapping[object, object] | None) -> dict[str, str] | None:
    """Stringify an environment override.

    ``None`` or an empty mapping means "inherit the parent environment". A
    non-empty mapping replaces the child environment entirely.
    """
    if not env:
        return None
    return {str(k): str(v) for k, v in env.items()}


def coerce_data(data: str | bytes, *, binary: bool) -> str | bytes:
    if binary:
        return data.encode() if isinstance(data, str) else data
    return data.decode() if isinstance(data, (bytes, bytearray)) else data


def decode_output(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")
