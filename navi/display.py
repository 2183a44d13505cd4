"""Shared display constants, the item record and the writer interface."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

NEWLINE_ESCAPE_CHAR = "\x15"
LINE_SEPARATOR = " \x15 "
DELIMITER = "  \u2800"

NEWLINE_REGEX = re.compile(r"\\\s+")
VAR_REGEX = re.compile(r"<(\w[\w\d\-_]*)>")


@dataclass(frozen=True)
class Item:
    """One cheatsheet entry ready to be shown."""

    tags: str
    comment: str
    snippet: str
    file_index: int


class Writer(ABC):
    """Turns items into the text a consumer expects."""

    @abstractmethod
    def write(self, item: Item) -> str:
        """Render ``item``."""


def with_new_lines(txt: str) -> str:
    """Replace the internal line separator with real newlines."""
    return txt.replace(LINE_SEPARATOR, "\n")


def fix_newlines(txt: str) -> str:
    """Join continued lines of a multi-line snippet into one display line."""
    if NEWLINE_ESCAPE_CHAR not in txt:
        return txt
    return NEWLINE_REGEX.sub("", txt.replace(LINE_SEPARATOR, "  "))