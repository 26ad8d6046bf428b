from __future__ import annotations

from .platform import is_linux, is_macos, is_windows
from .which import capture_stdout, which

__all__ = [
    "capture_stdout",
    "is_linux",
    "is_macos",
    "is_windows",
    "which",
]
