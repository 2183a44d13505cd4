"""Rendering of items as JSON fragments for the Alfred launcher."""

from __future__ import annotations

from navi.display import NEWLINE_ESCAPE_CHAR, Item, Writer


def escape_for_json(txt: str) -> str:
    """Make ``txt`` safe to embed in a JSON string literal."""
    return txt.replace("\\", "\\\\").replace('"', "“").replace(NEWLINE_ESCAPE_CHAR, " ")


def print_items_start(varname: str | None = None) -> None:
    """Print the opening of the Alfred items document."""
    head = "{"
    if varname is not None:
        head += f'"variables": {{"varname": "{varname}"}},'
    print(f'{head}"items": [')


def print_items_end() -> None:
    """Print the closing of the Alfred items document."""
    print("]}")


class AlfredWriter(Writer):
    """Writes comma-separated Alfred item objects."""

    def __init__(self) -> None:
        self.is_first = True

    def _prefix(self) -> str:
        if self.is_first:
            self.is_first = False
            return ""
        return ","

    def write(self, item: Item) -> str:
        prefix = self._prefix()
        tags = escape_for_json(item.tags)
        comment = escape_for_json(item.comment)
        snippet = escape_for_json(item.snippet)
        return (
            f'{prefix}{{"type":"file","title":"{comment}",'
            f'"match":"{comment} {tags} {snippet}",'
            f'"subtitle":"{tags} :: {snippet}",'
            f'"variables":{{"tags":"{tags}","comment":"{comment}","snippet":"{snippet}"}},'
            f'"icon":{{"path":"icon.png"}}}}'
        )

    def reset(self) -> None:
        """Start a new list: the next item gets no leading comma."""
        self.is_first = True

    def write_suggestion(self, snippet: str, varname: str, line: str) -> None:
        """Print one suggested value for ``varname``; lines under three bytes are skipped."""
        if len(line.encode("utf-8")) < 3:
            return
        prefix = self._prefix()
        print(
            f'{prefix}{{"title":"{line}","subtitle":"{snippet}",'
            f'"variables":{{"{varname}":"{line}"}},"icon":{{"path":"icon.png"}}}}'
        )