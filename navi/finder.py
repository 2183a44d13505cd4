"""Driving the external fuzzy finder and interpreting what it returns."""

from __future__ import annotations

import enum
import re
import subprocess
import sys
from collections.abc import Callable, Iterator
from typing import TextIO

from navi.cheat import VariableMap
from navi.display import DELIMITER
from navi.finder_opts import FinderOpts, SuggestionType

StdinFn = Callable[[TextIO, list], "VariableMap | None"]

_DEFAULT_COLUMN_DELIMITER = r"\s\s+"
_ACCEPTED_EXIT_CODES = (0, 1, 2)
_INTERRUPTED_EXIT_CODE = 130
_MISSING_FINDER_EXIT_CODE = 33


def _text_lines(text: str) -> list[str]:
    """Split on newlines, dropping one trailing empty line and trailing carriage returns."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _split(pattern: re.Pattern[str], text: str) -> Iterator[str]:
    """Split ``text`` on matches of ``pattern`` without emitting captured groups."""
    start = 0
    for match in pattern.finditer(text):
        yield text[start:match.start()]
        start = match.end()
    yield text[start:]


def apply_map(text: str, map_fn: str | None) -> str:
    """Pass ``text`` through the shell function ``map_fn``, if any."""
    if map_fn is None:
        return text
    result = subprocess.run(
        ["bash", "-c", map_fn, text],
        stdout=subprocess.PIPE,
        check=False,
    )
    return result.stdout.decode("utf-8")


def get_column(text: str, column: int | None, delimiter: str | None) -> str:
    """Keep only the ``column``-th field (1-based) of every non-empty line."""
    if column is None:
        return text
    if column < 1:
        raise ValueError(f"Column must be at least 1, got {column}")
    pattern = re.compile(delimiter if delimiter is not None else _DEFAULT_COLUMN_DELIMITER)
    picked = []
    for line in text.split("\n"):
        if not line:
            continue
        fields = list(_split(pattern, line))
        picked.append(fields[column - 1] if column <= len(fields) else "")
    return "\n".join(picked)


def parse_output_single(text: str, suggestion_type: SuggestionType) -> str:
    """Extract the selection from the raw finder output."""
    if suggestion_type is SuggestionType.SINGLE_SELECTION:
        lines = _text_lines(text)
        if not lines:
            raise ValueError("Not sufficient data for single selection")
        return lines[0]

    if suggestion_type is SuggestionType.SINGLE_RECOMMENDATION:
        lines = _text_lines(text)
        if len(lines) < 2:
            return ""
        first, termination = lines[0], lines[1]
        if termination in ("enter", ""):
            if len(lines) >= 3:
                return lines[2] or first
            return first
        if termination == "tab":
            return first
        return ""

    return text[:-1] if len(text) > 1 else text


class FinderChoice(enum.Enum):
    """The fuzzy finder program to use."""

    FZF = "fzf"
    SKIM = "skim"

    @property
    def executable(self) -> str:
        return "sk" if self is FinderChoice.SKIM else "fzf"

    @property
    def _preview_height(self) -> int:
        return 3 if self is FinderChoice.SKIM else 2

    def _build_args(self, opts: FinderOpts) -> list[str]:
        bindings = (
            ",ctrl-r:toggle-all"
            if opts.suggestion_type is SuggestionType.MULTIPLE_SELECTIONS
            else ""
        )
        args = [
            self.executable,
            "--preview",
            "",
            "--preview-window",
            f"up:{self._preview_height}:nohidden",
            "--with-nth",
            "1,2,3",
            "--delimiter",
            DELIMITER,
            "--ansi",
            "--bind",
            f"ctrl-j:down,ctrl-k:up{bindings}",
            "--exact",
        ]
        is_fzf = self is FinderChoice.FZF
        if is_fzf:
            args.append("--select-1")

        kind = opts.suggestion_type
        if kind is SuggestionType.MULTIPLE_SELECTIONS:
            args.append("--multi")
        elif kind is SuggestionType.DISABLED:
            if is_fzf:
                args += ["--print-query", "--no-select-1"]
        elif kind is SuggestionType.SNIPPET_SELECTION:
            args += ["--expect", "ctrl-y,ctrl-o,enter"]
        elif kind is SuggestionType.SINGLE_RECOMMENDATION:
            args += ["--print-query", "--expect", "tab,enter"]

        optional = (
            ("--preview", opts.preview),
            ("--query", opts.query),
            ("--filter", opts.filter),
            ("--header", opts.header),
            ("--prompt", opts.prompt),
            ("--preview-window", opts.preview_window),
        )
        for flag, value in optional:
            if value is not None:
                args += [flag, value]

        if opts.header_lines > 0:
            args += ["--header-lines", str(opts.header_lines)]

        if opts.overrides is not None:
            args += [part for part in opts.overrides.split(" ") if part]

        return args

    def call(
        self,
        opts: FinderOpts,
        files: list[str],
        stdin_fn: StdinFn,
    ) -> tuple[str, VariableMap | None]:
        """Run the finder, feed it through ``stdin_fn`` and return the selection."""
        args = self._build_args(opts)
        try:
            process = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
            )
        except OSError:
            print(
                f"navi was unable to call {self.executable}.\n"
                "Please make sure it's correctly installed.\n"
                f"Refer to the {self.executable} documentation for more info.",
                file=sys.stderr,
            )
            sys.exit(_MISSING_FINDER_EXIT_CODE)

        try:
            result_map = stdin_fn(process.stdin, files)
        except BaseException:
            process.kill()
            process.wait()
            raise

        stdout, _ = process.communicate()
        code = process.returncode

        if code == _INTERRUPTED_EXIT_CODE:
            sys.exit(_INTERRUPTED_EXIT_CODE)
        if code not in _ACCEPTED_EXIT_CODES:
            raise RuntimeError(f"External command failed with exit code {code}")

        output = parse_output_single(stdout or "", opts.suggestion_type)
        output = get_column(output, opts.column, opts.delimiter)
        output = apply_map(output, opts.map)
        return output, result_map