"""The main flow: choose a snippet, fill in its variables and act on it."""

from __future__ import annotations

import dataclasses
import os
import re
import shlex
import subprocess
from pathlib import Path
from typing import TextIO

from navi import terminal
from navi.cheat import Suggestion, VariableMap
from navi.cheatfiles import Fetcher, FilesystemFetcher
from navi.config import ActionKind, Config, Source, SourceKind
from navi.display import DELIMITER, VAR_REGEX, with_new_lines
from navi.files import exe_string
from navi.finder_opts import FinderOpts, SuggestionType
from navi.remote import CheatshFetcher, TldrFetcher
from navi.shell import BashSpawnError, is_fish
from navi.system import copy
from navi.terminal import TerminalWriter
from navi.welcome import populate_cheatsheet

_HIDDEN_COLUMNS = 3
_INDEX = re.compile(r"\+?[0-9]+")
_DEFAULT_EDITOR = "vi"


def gen_core_finder_opts(config: Config) -> FinderOpts:
    """Finder options for choosing a snippet."""
    query = config.get_query()
    return FinderOpts(
        preview=None if config.no_preview else f"{exe_string()} preview {{}}",
        overrides=config.fzf_overrides,
        suggestion_type=SuggestionType.SNIPPET_SELECTION,
        query=None if config.best_match else query,
        filter=query if config.best_match else None,
    )


def extract_from_selections(
    raw_snippet: str, is_single: bool
) -> tuple[str, str, str, str, int | None]:
    """Split the finder output into key, tags, comment, snippet and file index."""
    lines = iter(raw_snippet.split("\n"))
    key = "enter" if is_single else next(lines)
    line = next(lines, None)
    if line is None:
        raise ValueError("No more parts in `selections`")
    parts = iter(line.split(DELIMITER)[_HIDDEN_COLUMNS:])
    tags = next(parts, "")
    comment = next(parts, "")
    snippet = next(parts, "")
    raw_index = next(parts, "")
    file_index = int(raw_index) if _INDEX.fullmatch(raw_index) else None
    return key, tags, comment, snippet, file_index


def _run_bash(command: str) -> str:
    try:
        result = subprocess.run(["bash", "-c", command], stdout=subprocess.PIPE, check=False)
    except OSError as error:
        raise BashSpawnError(command, error) from error
    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as error:
        raise ValueError("Suggestions are invalid utf8") from error


def _variable_preview(variable_name: str, extra: str) -> str:
    prefix, suffix = ("bash -c '", "'") if is_fish() else ("", "")
    return (
        f'{prefix}navi preview-var "$(cat <<NAVIEOF\n{{}}\nNAVIEOF\n)" '
        f'"$(cat <<NAVIEOF\n{{q}}\nNAVIEOF\n)" "{variable_name}"; {extra}{suffix}'
    )


def prompt_finder(
    variable_name: str,
    config: Config,
    suggestion: Suggestion | None,
    variable_count: int,
) -> str:
    """Ask the user for a value of ``variable_name``, offering the suggestion's output."""
    for name in (terminal.PREVIEW_COLUMN, terminal.PREVIEW_DELIMITER, terminal.PREVIEW_MAP):
        os.environ.pop(name, None)

    extra_preview: str | None = None
    base_opts: FinderOpts | None = None

    if suggestion is not None:
        base_opts = suggestion.opts
        if base_opts is not None:
            if base_opts.column is not None:
                os.environ[terminal.PREVIEW_COLUMN] = str(base_opts.column)
            if base_opts.delimiter is not None:
                os.environ[terminal.PREVIEW_DELIMITER] = base_opts.delimiter
            if base_opts.map is not None:
                os.environ[terminal.PREVIEW_MAP] = base_opts.map
            if base_opts.preview is not None:
                extra_preview = f";echo;{base_opts.preview}"
        suggestions = _run_bash(suggestion.command)
    else:
        suggestions = "\n"

    opts = dataclasses.replace(
        base_opts if base_opts is not None else FinderOpts(),
        overrides=config.fzf_overrides_var,
        preview=_variable_preview(variable_name, extra_preview or ""),
    )
    opts.query = os.environ.get(f"{variable_name}__query")

    best = os.environ.get(f"{variable_name}__best")
    if best is not None:
        opts.filter = best
        opts.suggestion_type = SuggestionType.SINGLE_SELECTION

    if opts.preview_window is None:
        opts.preview_window = (
            f"up:{variable_count + 3}" if extra_preview is None else "right:50%"
        )

    if suggestion is None:
        opts.suggestion_type = SuggestionType.DISABLED

    def feed(out: TextIO, _files: list[str]) -> None:
        out.write(suggestions)
        return None

    output, _ = config.finder.call(opts, [], feed)
    return output


def unique_result_count(results: list[str]) -> int:
    """Number of distinct entries in ``results``."""
    return len(set(results))


def replace_variables_from_snippet(
    snippet: str, tags: str, variables: VariableMap, config: Config
) -> str:
    """Fill every ``<variable>`` of ``snippet`` from the environment or the user."""
    found = [match.group(0) for match in VAR_REGEX.finditer(snippet)]
    variable_count = unique_result_count(found)
    interpolated = snippet

    for bracketed in found:
        name = bracketed[1:-1]
        env_name = name.replace("-", "_")
        value = os.environ.get(env_name)

        if value is None:
            suggestion = variables.get_suggestion(tags, name)
            if suggestion is not None:
                command = replace_variables_from_snippet(
                    suggestion.command, tags, variables.copy(), config
                )
                value = prompt_finder(
                    name, config, Suggestion(command, suggestion.opts), variable_count
                )
            else:
                value = prompt_finder(name, config, None, variable_count)

        os.environ[env_name] = value
        interpolated = interpolated.replace(bracketed, "" if value == "\n" else value, 1)

    return interpolated


def _fetcher_for(source: Source) -> Fetcher:
    if source.kind is SourceKind.CHEATSH:
        return CheatshFetcher(source.value or "")
    if source.kind is SourceKind.TLDR:
        return TldrFetcher(source.value or "")
    return FilesystemFetcher(source.value)


def _edit_file(path: str) -> None:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or _DEFAULT_EDITOR
    subprocess.run([*shlex.split(editor), path], check=True)


def _run_snippet(snippet: str) -> None:
    try:
        subprocess.run(["bash", "-c", snippet], check=False)
    except OSError as error:
        raise BashSpawnError(snippet, error) from error


def main(config: Config) -> None:
    """Let the user pick a snippet, fill it in and print, save or run it."""
    opts = gen_core_finder_opts(config)

    def feed(out: TextIO, files: list[str]) -> VariableMap:
        writer = TerminalWriter()
        variables = _fetcher_for(config.source()).fetch(out, writer, files)
        if variables is None:
            populate_cheatsheet(writer, out)
            return VariableMap()
        return variables

    while True:
        files: list[str] = []
        raw_selection, variables = config.finder.call(opts, files, feed)
        try:
            key, tags, comment, snippet, file_index = extract_from_selections(
                raw_selection, config.best_match
            )
        except ValueError:
            continue
        break

    if key == "ctrl-o":
        if file_index is None:
            raise RuntimeError("No files found")
        _edit_file(files[file_index])
        return

    os.environ[terminal.PREVIEW_INITIAL_SNIPPET] = snippet
    os.environ[terminal.PREVIEW_TAGS] = tags
    os.environ[terminal.PREVIEW_COMMENT] = comment

    if variables is None:
        raise RuntimeError("No variables received from finder")

    interpolated = with_new_lines(
        replace_variables_from_snippet(snippet, tags, variables, config)
    )

    action = config.action()
    if action.kind is ActionKind.PRINT:
        print(interpolated)
    elif action.kind is ActionKind.SAVE:
        Path(action.filepath or "").write_text(interpolated, encoding="utf-8")
    elif key == "ctrl-y":
        copy(interpolated)
    else:
        _run_snippet(interpolated)