"""Parsing of cheatsheet lines into finder items and variable suggestions."""

from __future__ import annotations

import re
import shlex
from collections.abc import Iterable
from typing import TextIO

from navi.cheat import Suggestion, VariableMap
from navi.display import LINE_SEPARATOR, Item, Writer
from navi.finder_opts import FinderOpts, SuggestionType

VAR_LINE_REGEX = re.compile(r"^\$\s*([^:]+):(.*)")

_U8 = re.compile(r"\+?[0-9]+")
_U8_MAX = 255


def _parse_u8(value: str, flag: str) -> int:
    if _U8.fullmatch(value) and int(value) <= _U8_MAX:
        return int(value)
    raise ValueError(f"Value for `{flag}` is invalid u8")


def _apply_flag(opts: FinderOpts, flag: str, value: str) -> None:
    if flag in ("--headers", "--header-lines"):
        opts.header_lines = _parse_u8(value, "--headers")
    elif flag == "--column":
        opts.column = _parse_u8(value, "--column")
    elif flag == "--map":
        opts.map = value
    elif flag == "--delimiter":
        opts.delimiter = value
    elif flag == "--query":
        opts.query = value
    elif flag == "--filter":
        opts.filter = value
    elif flag == "--preview":
        opts.preview = value
    elif flag == "--preview-window":
        opts.preview_window = value
    elif flag == "--header":
        opts.header = value
    elif flag == "--overrides":
        opts.overrides = value


def parse_opts(text: str) -> FinderOpts:
    """Parse the finder options that follow ``---`` on a variable line."""
    try:
        parts = shlex.split(text)
    except ValueError as error:
        raise ValueError("Given options are missing a closing quote") from error

    switches = {"--multi", "--prevent-extra", "--global"}
    present = {part for part in parts if part in switches}
    pairs = iter(part for part in parts if part not in switches)

    opts = FinderOpts()
    try:
        for flag in pairs:
            value = next(pairs, None)
            if value is None:
                raise ValueError(f"No value provided for the flag `{flag}`")
            _apply_flag(opts, flag, value)
    except ValueError as error:
        raise ValueError(f"Failed to parse finder options: {error}") from error

    if "--multi" in present:
        opts.suggestion_type = SuggestionType.MULTIPLE_SELECTIONS
    elif "--prevent-extra" in present:
        opts.suggestion_type = SuggestionType.SINGLE_SELECTION
    else:
        opts.suggestion_type = SuggestionType.SINGLE_RECOMMENDATION
    opts.is_global = "--global" in present
    return opts


def parse_variable_line(line: str) -> tuple[str, str, FinderOpts | None]:
    """Split a ``$ name: command --- options`` line into its parts."""
    match = VAR_LINE_REGEX.match(line)
    if match is None:
        raise ValueError(f"No variables, command, and options found in the line `{line}`")
    variable = match.group(1).strip()
    command, *rest = match.group(2).split("---")
    options = parse_opts(rest[0]) if rest else None
    return variable, command, options


def _without_prefix(line: str) -> str:
    return line[2:].strip() if len(line) > 2 else ""


def _write_cmd(
    tags: str,
    comment: str,
    snippet: str,
    file_index: int,
    writer: Writer,
    out: TextIO,
) -> bool:
    """Emit one item; return False when the consumer can no longer be written to."""
    if len(snippet.encode("utf-8")) <= 1:
        return True
    try:
        out.write(writer.write(Item(tags, comment, snippet, file_index)))
    except OSError:
        return False
    return True


def read_lines(
    lines: Iterable[str],
    source_id: str,
    file_index: int,
    variables: VariableMap,
    visited_lines: set[str],
    writer: Writer,
    out: TextIO,
) -> None:
    """Parse cheatsheet ``lines``, writing items to ``out`` and collecting suggestions."""
    tags = ""
    comment = ""
    snippet = ""
    should_break = False
    iterator = iter(lines)
    line_nr = 0

    while True:
        try:
            line = next(iterator)
        except StopIteration:
            break
        except (OSError, UnicodeError) as error:
            raise OSError(
                f"Failed to read line number {line_nr} in cheatsheet `{source_id}`"
            ) from error

        if should_break:
            break

        if not line or line.startswith(";"):
            pass
        elif line.startswith("%"):
            should_break = not _write_cmd(tags, comment, snippet, file_index, writer, out)
            snippet = ""
            tags = _without_prefix(line)
        elif line.startswith("@"):
            variables.insert_dependency(tags, _without_prefix(line))
        elif line.startswith("#"):
            should_break = not _write_cmd(tags, comment, snippet, file_index, writer, out)
            snippet = ""
            comment = _without_prefix(line)
        elif line.startswith("$"):
            should_break = not _write_cmd(tags, comment, snippet, file_index, writer, out)
            snippet = ""
            try:
                variable, command, opts = parse_variable_line(line)
            except ValueError as error:
                raise ValueError(
                    "Failed to parse variable line. "
                    f"See line number {line_nr + 1} in cheatsheet `{source_id}`: {error}"
                ) from error
            variables.insert_suggestion(tags, variable, Suggestion(command, opts))
        else:
            key = f"{comment}{line}"
            if key not in visited_lines:
                visited_lines.add(key)
                snippet = f"{snippet}{LINE_SEPARATOR}{line}" if snippet else line

        line_nr += 1

    if not should_break:
        _write_cmd(tags, comment, snippet, file_index, writer, out)