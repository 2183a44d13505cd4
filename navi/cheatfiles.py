"""Discovery and loading of ``.cheat`` files from the filesystem."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

import platformdirs

from navi import parser
from navi.cheat import VariableMap
from navi.display import Writer
from navi.files import read_lines

_CHEAT_SUFFIX = ".cheat"


class Fetcher(ABC):
    """A source of cheatsheets."""

    @abstractmethod
    def fetch(self, out: TextIO, writer: Writer, files: list[str]) -> VariableMap | None:
        """Write items to ``out`` and return the variables found, or None if nothing was."""


def _walk(root: str) -> Iterator[str]:
    if not os.path.lexists(root):
        return
    yield root
    seen: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in seen:
            dirnames[:] = []
            continue
        seen.add(real)
        dirnames.sort()
        for name in sorted(dirnames + filenames):
            yield os.path.join(dirpath, name)


def all_cheat_files(path_str: str) -> list[str]:
    """List the ``.cheat`` files below ``path_str``, relative to it."""
    prefix = path_str if path_str.endswith("/") else f"{path_str}/"
    return [
        entry.replace(prefix, "")
        for entry in _walk(path_str)
        if entry.endswith(_CHEAT_SUFFIX)
    ]


def paths_from_path_param(env_var: str) -> list[str]:
    """Split a ``:``-separated list of folders, dropping empty entries."""
    return [folder for folder in env_var.split(":") if folder]


def read_file(
    path: str,
    file_index: int,
    variables: VariableMap,
    visited_lines: set[str],
    writer: Writer,
    out: TextIO,
) -> None:
    """Parse the cheatsheet at ``path``."""
    parser.read_lines(read_lines(path), path, file_index, variables, visited_lines, writer, out)


def default_cheat_path() -> Path:
    """The folder cheatsheets are kept in by default."""
    return Path(platformdirs.user_data_dir("navi", appauthor=False)) / "cheats"


def cheat_paths(path: str | None) -> str:
    """The ``:``-separated folders to search: ``path`` or the default folder."""
    return path if path is not None else str(default_cheat_path())


def read_all(
    path: str | None,
    files: list[str],
    out: TextIO,
    writer: Writer,
) -> VariableMap | None:
    """Parse every cheatsheet in the configured folders.

    Each file found is appended to ``files``. Returns None when no file could be read.
    """
    try:
        paths = cheat_paths(path)
    except (OSError, ValueError):
        return None

    variables = VariableMap()
    visited_lines: set[str] = set()
    found_something = False

    for folder in paths_from_path_param(paths):
        for file in all_cheat_files(folder):
            full_filename = f"{folder}/{file}"
            files.append(full_filename)
            try:
                read_file(full_filename, len(files) - 1, variables, visited_lines, writer, out)
            except (OSError, ValueError):
                continue
            found_something = True

    return variables if found_something else None


def tmp_path_str() -> str:
    """The scratch folder used while importing repositories."""
    return f"{default_cheat_path()}/tmp"


class FilesystemFetcher(Fetcher):
    """Reads cheatsheets from local folders."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path

    def fetch(self, out: TextIO, writer: Writer, files: list[str]) -> VariableMap | None:
        return read_all(self.path, files, out, writer)