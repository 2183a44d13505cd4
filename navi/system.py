"""Desktop integration: copying to the clipboard and opening URLs."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence

from navi.shell import BashSpawnError

NO_TOOL_EXIT_CODE = 55

_CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("xclip", "-selection", "clipboard"),
    ("clip.exe",),
)

_WHITESPACE = " \t\n"


def copy(text: str) -> int:
    """Put ``text`` on the system clipboard using the first tool available.

    Returns the tool's exit status, or ``NO_TOOL_EXIT_CODE`` when none is installed.
    """
    command = next((cmd for cmd in _CLIPBOARD_COMMANDS if shutil.which(cmd[0])), None)
    if command is None:
        return NO_TOOL_EXIT_CODE
    try:
        result = subprocess.run(
            list(command), input=text.strip(_WHITESPACE), text=True, check=False
        )
    except OSError as error:
        raise BashSpawnError(" ".join(command), error) from error
    return result.returncode


def open_url(args: Sequence[str]) -> int:
    """Open the first of ``args`` in the desktop's default handler.

    Returns the opener's exit status, or ``NO_TOOL_EXIT_CODE`` when none is installed.
    """
    if not args:
        raise ValueError("No URL specified")
    url = args[0].strip(_WHITESPACE)

    if shutil.which("xdg-open"):
        command = ["xdg-open", url]
        try:
            subprocess.Popen(command, start_new_session=True)
        except OSError as error:
            raise BashSpawnError(" ".join(command), error) from error
        return 0

    if shutil.which("open"):
        command = ["open", url]
        try:
            result = subprocess.run(command, check=False)
        except OSError as error:
            raise BashSpawnError(" ".join(command), error) from error
        return result.returncode

    return NO_TOOL_EXIT_CODE