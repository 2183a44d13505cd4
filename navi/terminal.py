"""Terminal rendering of cheatsheet items and of the preview windows."""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from typing import TypeVar

from navi import terminal_width
from navi.display import DELIMITER, VAR_REGEX, Item, Writer, fix_newlines
from navi.finder import get_column

PREVIEW_INITIAL_SNIPPET = "NAVI_PREVIEW_INITIAL_SNIPPET"
PREVIEW_TAGS = "NAVI_PREVIEW_TAGS"
PREVIEW_COMMENT = "NAVI_PREVIEW_COMMENT"
PREVIEW_COLUMN = "NAVI_PREVIEW_COLUMN"
PREVIEW_DELIMITER = "NAVI_PREVIEW_DELIMITER"
PREVIEW_MAP = "NAVI_PREVIEW_MAP"

TAG_COLOR = "NAVI_TAG_COLOR"
COMMENT_COLOR = "NAVI_COMMENT_COLOR"
SNIPPET_COLOR = "NAVI_SNIPPET_COLOR"

TAG_WIDTH = "NAVI_TAG_WIDTH"
COMMENT_WIDTH = "NAVI_COMMENT_WIDTH"

PATH = "NAVI_PATH"
FZF_OVERRIDES = "NAVI_FZF_OVERRIDES"
FZF_OVERRIDES_VAR = "NAVI_FZF_OVERRIDES_VAR"
FINDER = "NAVI_FINDER"

_DEFAULT_TAG_COLOR = 14
_DEFAULT_COMMENT_COLOR = 4
_DEFAULT_SNIPPET_COLOR = 7
_DEFAULT_TAG_WIDTH = 20
_DEFAULT_COMMENT_WIDTH = 40
_MIN_COLUMN_WIDTH = 4

_RESET = "\x1b[39m"
_UNSIGNED = re.compile(r"\+?[0-9]+")

T = TypeVar("T")


def _unsigned(limit: int) -> Callable[[str], int]:
    def cast(raw: str) -> int:
        if _UNSIGNED.fullmatch(raw) and int(raw) <= limit:
            return int(raw)
        raise ValueError(f"invalid unsigned integer: {raw!r}")

    return cast


_u8 = _unsigned(0xFF)
_u16 = _unsigned(0xFFFF)


def parse_env_var(varname: str, cast: Callable[[str], T]) -> T | None:
    """Read ``varname`` from the environment and convert it, or return None."""
    raw = os.environ.get(varname)
    if raw is None:
        return None
    try:
        return cast(raw)
    except (ValueError, TypeError):
        return None


def _env_or(varname: str, cast: Callable[[str], int], default: int) -> int:
    value = parse_env_var(varname, cast)
    return default if value is None else value


def _fg(code: int) -> str:
    return f"\x1b[38;5;{code}m"


def _tag_color() -> str:
    return _fg(_env_or(TAG_COLOR, _u8, _DEFAULT_TAG_COLOR))


def _comment_color() -> str:
    return _fg(_env_or(COMMENT_COLOR, _u8, _DEFAULT_COMMENT_COLOR))


def _snippet_color() -> str:
    return _fg(_env_or(SNIPPET_COLOR, _u8, _DEFAULT_SNIPPET_COLOR))


def preview(comment: str, tags: str, snippet: str) -> None:
    """Print the preview of a snippet."""
    print(
        f"{_comment_color()}{comment} {_tag_color()}[{tags}] \n"
        f"{_snippet_color()}{fix_newlines(snippet)}"
    )


def wrapped_by_map(text: str, map_: str | None) -> str:
    """Mark ``text`` as going through a map function when one is set."""
    return text if map_ is None else f"map({text})"


def _require_env(name: str) -> str:
    try:
        return os.environ[name]
    except KeyError:
        raise RuntimeError(f"{name} not set") from None


def preview_var(selection: str, query: str, variable: str) -> None:
    """Print the preview shown while a value for ``variable`` is chosen."""
    snippet = _require_env(PREVIEW_INITIAL_SNIPPET)
    tags = _require_env(PREVIEW_TAGS)
    comment = _require_env(PREVIEW_COMMENT)
    column = parse_env_var(PREVIEW_COLUMN, _u8)
    delimiter = os.environ.get(PREVIEW_DELIMITER)
    map_ = os.environ.get(PREVIEW_MAP)

    active_color = _tag_color()
    inactive_color = _comment_color()

    current = f"<{variable}>"
    if current in snippet:
        bracketed_names = [match.group(0) for match in VAR_REGEX.finditer(snippet)]
    else:
        bracketed_names = [current]

    colored_snippet = snippet
    variables = ""
    visited: set[str] = set()

    for bracketed in bracketed_names:
        name = bracketed[1:-1]
        if name in visited:
            continue
        visited.add(name)

        is_current = name == variable
        color = active_color if is_current else inactive_color
        if is_current:
            value = selection.strip("'") or query.strip("'")
        else:
            value = os.environ.get(name.replace("-", "_"), "")

        colored_snippet = colored_snippet.replace(bracketed, f"{color}{bracketed}{_RESET}")
        shown = wrapped_by_map(get_column(value, column, delimiter), map_)
        variables = f"{variables}\n{color}{name}{_RESET} = {shown}"

    print(
        f"{inactive_color}{comment} {active_color}[{tags}]{_RESET} \n"
        f"{fix_newlines(colored_snippet)}\n{variables}"
    )


def limit_str(text: str, length: int) -> str:
    """Cut ``text`` to ``length`` with an ellipsis, or pad it to that width."""
    if len(text.encode("utf-8")) > length:
        return text[: length - 1] + "…"
    return text.ljust(length)


def _widths() -> tuple[int, int]:
    width = terminal_width.get()
    tag_pct = _env_or(TAG_WIDTH, _u16, _DEFAULT_TAG_WIDTH)
    comment_pct = _env_or(COMMENT_WIDTH, _u16, _DEFAULT_COMMENT_WIDTH)
    return (
        max(_MIN_COLUMN_WIDTH, width * tag_pct // 100),
        max(_MIN_COLUMN_WIDTH, width * comment_pct // 100),
    )


class TerminalWriter(Writer):
    """Formats items as coloured, delimited lines for the fuzzy finder."""

    def __init__(self, tag_width: int | None = None, comment_width: int | None = None) -> None:
        if tag_width is None or comment_width is None:
            detected_tag, detected_comment = _widths()
            tag_width = detected_tag if tag_width is None else tag_width
            comment_width = detected_comment if comment_width is None else comment_width
        self.tag_width = tag_width
        self.comment_width = comment_width
        self._tag_color = _tag_color()
        self._comment_color = _comment_color()
        self._snippet_color = _snippet_color()

    def write(self, item: Item) -> str:
        fields = [
            f"{self._tag_color}{limit_str(item.tags, self.tag_width)}",
            f"{self._comment_color}{limit_str(item.comment, self.comment_width)}",
            f"{self._snippet_color}{fix_newlines(item.snippet)}",
            item.tags,
            item.comment,
            item.snippet,
            str(item.file_index),
        ]
        return "".join(f"{field}{DELIMITER}" for field in fields) + "\n"