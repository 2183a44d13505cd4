"""Commands used by the Alfred launcher integration."""

from __future__ import annotations

import io
import os
import subprocess
import sys

from navi.alfred_display import AlfredWriter, print_items_end, print_items_start
from navi.cheat import Suggestion
from navi.cheatfiles import FilesystemFetcher
from navi.config import Config
from navi.display import VAR_REGEX
from navi.shell import BashSpawnError


def _require_env(name: str) -> str:
    try:
        return os.environ[name]
    except KeyError:
        raise RuntimeError(f'The env var "{name}" isn\'t set') from None


def main(config: Config) -> None:
    """Print every cheatsheet entry as an Alfred items document."""
    writer = AlfredWriter()
    print_items_start(None)
    FilesystemFetcher(config.path).fetch(sys.stdout, writer, [])
    sys.stdout.flush()
    print_items_end()


def prompt_finder(suggestion: Suggestion) -> str:
    """Run the suggestion's command and return what it printed."""
    command = suggestion.command
    try:
        result = subprocess.run(["bash", "-c", command], stdout=subprocess.PIPE, check=False)
    except OSError as error:
        raise BashSpawnError(command, error) from error
    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as error:
        raise ValueError("Suggestions are invalid utf8") from error


def suggestions(config: Config, dry_run: bool) -> None:
    """Print the suggestions for the first variable of the snippet in ``$snippet``.

    With ``dry_run`` only the variable name is printed, and only when it has no suggestion.
    """
    writer = AlfredWriter()
    variables = FilesystemFetcher(config.path).fetch(io.StringIO(), writer, [])
    if variables is None:
        raise RuntimeError("Empty variable map")

    tags = _require_env("tags")
    snippet = _require_env("snippet")

    match = VAR_REGEX.search(snippet)
    if match is None:
        raise ValueError("Invalid capture")
    varname = match.group(0)[1:-1]
    command = variables.get_suggestion(tags, varname)

    if dry_run:
        if command is None:
            print(varname)
        return

    print_items_start(varname)
    if command is None:
        raise ValueError("Invalid command")
    lines = prompt_finder(command)

    writer.reset()
    for line in lines.split("\n"):
        writer.write_suggestion(snippet, varname, line)

    print_items_end()


def transform() -> None:
    """Print ``$snippet`` with ``<$varname>`` replaced by the chosen or free value."""
    snippet = _require_env("snippet")
    varname = _require_env("varname")
    value = os.environ.get(varname)
    if value is None:
        value = os.environ.get("free")
        if value is None:
            raise RuntimeError("The env var for varname isn't set")
    print(snippet.replace(f"<{varname}>", value))