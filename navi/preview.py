"""Entry points for the finder's preview windows."""

from __future__ import annotations

import sys

from navi import terminal
from navi.display import DELIMITER

_HIDDEN_COLUMNS = 3


def extract_elements(argstr: str) -> tuple[str, str, str]:
    """Return the tags, comment and snippet stored in a finder line."""
    parts = iter(argstr.split(DELIMITER)[_HIDDEN_COLUMNS:])
    elements = []
    for name in ("tags", "comment", "snippet"):
        value = next(parts, None)
        if value is None:
            raise ValueError(f"No `{name}` element provided.")
        elements.append(value)
    tags, comment, snippet = elements
    return tags, comment, snippet


def main(line: str) -> None:
    """Print the preview of the snippet in ``line`` and exit."""
    tags, comment, snippet = extract_elements(line)
    terminal.preview(comment, tags, snippet)
    sys.exit(0)


def main_var(selection: str, query: str, variable: str) -> None:
    """Print the preview for choosing ``variable`` and exit."""
    terminal.preview_var(selection, query, variable)
    sys.exit(0)