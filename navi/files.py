"""Filesystem helpers: reading files line by line, directories and the executable path."""

from __future__ import annotations

import os
import shlex
import shutil
import sys
from collections.abc import Iterator
from typing import TextIO


def _iter_lines(handle: TextIO) -> Iterator[str]:
    with handle:
        for line in handle:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def read_lines(filename: str | os.PathLike) -> Iterator[str]:
    """Open ``filename`` now and return an iterator over its lines without terminators."""
    handle = open(filename, encoding="utf-8", newline="\n")
    return _iter_lines(handle)


def exe_string() -> str:
    """Return the command that starts this program, with symlinks resolved."""
    program = sys.argv[0] if sys.argv else ""
    if program.endswith(".py"):
        return shlex.join([sys.executable, "-m", __package__ or "navi"])
    if program and os.path.exists(program):
        return os.path.realpath(program)
    found = shutil.which(program or "navi")
    if found is None:
        raise FileNotFoundError("Unable to acquire executable's path")
    return os.path.realpath(found)


def create_dir(path: str | os.PathLike) -> None:
    """Create ``path`` and any missing parents."""
    os.makedirs(path, exist_ok=True)


def remove_dir(path: str | os.PathLike) -> None:
    """Remove ``path`` and everything below it."""
    shutil.rmtree(path)