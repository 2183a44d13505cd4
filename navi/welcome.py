"""Entries offered when no cheatsheets are available."""

from __future__ import annotations

from typing import TextIO

from navi.display import Item, Writer

_MESSAGES = (
    ("cheatsheets", "Import cheatsheets from a git repository", "navi repo add <repo>"),
    ("cheatsheets", "Browse for cheatsheet repos", "navi repo browse"),
    ("more info", "Read --help message", "navi --help"),
)


def populate_cheatsheet(writer: Writer, out: TextIO) -> None:
    """Write the welcome entries through ``writer`` to ``out``."""
    for tags, comment, snippet in _MESSAGES:
        out.write(writer.write(Item(tags, comment, snippet, 0)))