from __future__ import annotations

import sys


def is_windows() -> bool:
    return sys.platform.startswith(("win32", "cygwin", "msys"))


def is_macos() -> bool:
    return sys.platform == "darwin"


def is_linux() -> bool:
    return sys.platform.startswith("linux")
