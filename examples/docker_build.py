from __future__ import annotations

import sys

from cikit import CommandSpec, FlagStyle
from cikit.logging import setup_logging


def build_image(repo: str, tag: str, platform: str, context: str = ".") -> None:
    spec = CommandSpec(
        config={
            "docker": None,
            "buildx": None,
            "build": None,
            "platform": platform,
            "tag": [f"{repo}:{tag}", f"{repo}:latest"],
            "build_arg": {"VERSION": tag},
            "file": "Dockerfile",
            "push": True,
        },
        style=FlagStyle.GNU,
        extra_args=[context],
    )
    spec.run_cmd()


def main() -> None:
    setup_logging("DEBUG")
    repo, tag, platform = sys.argv[1:4]
    build_image(repo, tag, platform)


if __name__ == "__main__":
    main()
