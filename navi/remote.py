"""Cheatsheets fetched on demand from cheat.sh and from a tldr client."""

from __future__ import annotations

import re
import subprocess
import sys
from typing import TextIO

from navi import parser
from navi.cheat import VariableMap
from navi.cheatfiles import Fetcher
from navi.display import Writer

UNKNOWN_TOPIC_REGEX = re.compile(r"^Unknown topic\.")
VAR_TLDR_REGEX = re.compile(r"\{\{(.*?)\}\}")
NON_VAR_CHARS_REGEX = re.compile(r"[^\da-zA-Z_]")

_ANSI_ESCAPE = re.compile(
    rb"\x1b\[[0-?]*[ -/]*[@-~]"
    rb"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    rb"|\x1b[@-Z\\-_]"
)

_MISSING_PROGRAM_EXIT_CODE = 34
_FAILED_CALL_EXIT_CODE = 35

VERSION_DISCLAIMER = (
    "The tldr client written in C (the default one in Homebrew) doesn't support "
    "markdown files, so navi can't use it.\n"
    "The client written in Rust is recommended. The one available in npm works, too."
)


def _split_lines(text: str) -> list[str]:
    """Split into lines, dropping a final empty line and trailing carriage returns."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _decode_or(data: bytes | None, fallback: str) -> str:
    try:
        return (data or b"").decode("utf-8")
    except UnicodeDecodeError:
        return fallback


def cheatsh_lines(query: str, markdown: str) -> list[str]:
    """Turn a cheat.sh answer into cheatsheet lines under a ``% query, cheat.sh`` header."""
    return [
        line.strip().rstrip(":")
        for line in _split_lines(f"% {query}, cheat.sh\n{markdown}")
    ]


def fetch_cheatsh(query: str) -> str:
    """Download the cheat.sh page for ``query`` with ANSI escapes removed."""
    args = ["-qO-", f"cheat.sh/{query}"]
    try:
        result = subprocess.run(
            ["wget", *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            check=False,
        )
    except OSError:
        print(
            "navi was unable to call wget.\nMake sure wget is correctly installed.",
            file=sys.stderr,
        )
        sys.exit(_MISSING_PROGRAM_EXIT_CODE)

    if result.returncode != 0:
        print(
            f"Failed to call:\nwget {' '.join(args)}\n\n"
            f"Output:\n{_decode_or(result.stdout, 'Unable to get output message')}\n\n"
            f"Error:\n{_decode_or(result.stderr, 'Unable to get error message')}\n",
            file=sys.stderr,
        )
        sys.exit(_FAILED_CALL_EXIT_CODE)

    plain = _ANSI_ESCAPE.sub(b"", result.stdout or b"")
    try:
        return plain.decode("utf-8")
    except UnicodeDecodeError as error:
        raise ValueError("Output is invalid utf8") from error


def _read_cheatsh(query: str, cheat: str, out: TextIO, writer: Writer) -> VariableMap:
    if UNKNOWN_TOPIC_REGEX.match(cheat):
        print(f"`{query}` not found in cheatsh.\n\nOutput:\n{cheat}\n", file=sys.stderr)
        sys.exit(_FAILED_CALL_EXIT_CODE)
    variables = VariableMap()
    parser.read_lines(cheatsh_lines(query, cheat), "cheat.sh", 0, variables, set(), writer, out)
    return variables


def convert_tldr_vars(line: str) -> str:
    """Rewrite tldr ``{{placeholders}}`` as ``<variables>``."""
    new_line = line
    for match in VAR_TLDR_REGEX.finditer(line):
        braced = match.group(0)
        name = NON_VAR_CHARS_REGEX.sub("_", braced[2:-2])
        if name and name[0] in "0123456789":
            name = f"example_{name}"
        new_line = new_line.replace(braced, f"<{name}>")
    return new_line


def convert_tldr(line: str) -> str:
    """Convert one line of tldr markdown into a cheatsheet line."""
    line = line.strip()
    if line.startswith("-"):
        return f"# {line[2:-1]}"
    if line.startswith("`"):
        return convert_tldr_vars(line[1:-1])
    if line.startswith("%"):
        return line
    return ""


def tldr_lines(query: str, markdown: str) -> list[str]:
    """Turn a tldr page into cheatsheet lines under a ``% query, tldr`` header."""
    return [convert_tldr(line) for line in _split_lines(f"% {query}, tldr\n {markdown}")]


def fetch_tldr(query: str) -> str:
    """Return the tldr page for ``query`` as markdown."""
    args = [query, "--markdown"]
    try:
        result = subprocess.run(
            ["tldr", *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError:
        print(
            "navi was unable to call tldr.\nMake sure tldr is correctly installed.\n\n"
            f"Note:\n{VERSION_DISCLAIMER}\n",
            file=sys.stderr,
        )
        sys.exit(_MISSING_PROGRAM_EXIT_CODE)

    if result.returncode != 0:
        print(
            f"Failed to call: \ntldr {' '.join(args)}\n \n"
            f"Output:\n{_decode_or(result.stdout, 'Unable to get output message')}\n\n"
            f"Error:\n{_decode_or(result.stderr, 'Unable to get error message')}\n\n"
            "Note:\nPlease make sure you're using a version that supports the --markdown flag.\n"
            "If you are already using a supported version you can ignore this message. \n"
            f"{VERSION_DISCLAIMER}\n",
            file=sys.stderr,
        )
        sys.exit(_FAILED_CALL_EXIT_CODE)

    try:
        return (result.stdout or b"").decode("utf-8")
    except UnicodeDecodeError as error:
        raise ValueError("Output is invalid utf8") from error


def _read_tldr(query: str, markdown: str, out: TextIO, writer: Writer) -> VariableMap:
    variables = VariableMap()
    parser.read_lines(tldr_lines(query, markdown), "markdown", 0, variables, set(), writer, out)
    return variables


class CheatshFetcher(Fetcher):
    """Cheatsheets for a query from cheat.sh."""

    def __init__(self, query: str) -> None:
        self.query = query

    def fetch(self, out: TextIO, writer: Writer, files: list[str]) -> VariableMap | None:
        return _read_cheatsh(self.query, fetch_cheatsh(self.query), out, writer)


class TldrFetcher(Fetcher):
    """Cheatsheets for a query from the local tldr client."""

    def __init__(self, query: str) -> None:
        self.query = query

    def fetch(self, out: TextIO, writer: Writer, files: list[str]) -> VariableMap | None:
        return _read_tldr(self.query, fetch_tldr(self.query), out, writer)