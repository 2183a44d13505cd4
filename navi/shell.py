"""Shell detection and the error raised when a shell cannot be started."""

from __future__ import annotations

import os


def is_fish() -> bool:
    """Whether the user's login shell is fish."""
    return "fish" in os.environ.get("SHELL", "")


class BashSpawnError(Exception):
    """Starting a child process to run a command failed."""

    def __init__(self, command: str, source: BaseException) -> None:
        super().__init__(f"Failed to spawn child process `bash` to execute `{command}`")
        self.command = command
        self.source = source
        self.__cause__ = source