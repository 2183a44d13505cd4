"""Error types shared across the package."""

from __future__ import annotations

import os


class FileAnIssue(Exception):
    """Top-level error that asks the user to report the underlying problem."""

    def __init__(self, source: BaseException) -> None:
        super().__init__(
            "\rHey, listen! navi encountered a problem.\n"
            "Do you think this is a bug? File an issue at the project's issue tracker."
        )
        self.source = source
        self.__cause__ = source


class InvalidPath(Exception):
    """A path could not be represented as text."""

    def __init__(self, path: str | os.PathLike) -> None:
        super().__init__(f"Invalid path `{os.fspath(path)!s}`")
        self.path = path


class UnreadableDir(Exception):
    """A directory could not be read."""

    def __init__(self, directory: str | os.PathLike, source: BaseException) -> None:
        super().__init__(f"Unable to read directory `{os.fspath(directory)!s}`")
        self.directory = directory
        self.source = source
        self.__cause__ = source