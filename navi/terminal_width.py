"""Best-effort detection of the terminal width."""

from __future__ import annotations

import os
import subprocess
import sys

FALLBACK_WIDTH = 80


def _width_with_shell_out() -> int:
    if sys.platform == "darwin":
        args = ["stty", "-f", "/dev/stderr", "size"]
    else:
        args = ["stty", "size", "-F", "/dev/stderr"]
    result = subprocess.run(args, stdout=subprocess.PIPE, check=False)
    if result.returncode != 0:
        return FALLBACK_WIDTH
    fields = result.stdout.decode("utf-8").split()
    if len(fields) < 2:
        raise ValueError("Not enough data from stty")
    return int(fields[1], 10)


def _width_with_tty() -> int:
    try:
        fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError:
        return _width_with_shell_out()
    try:
        return os.get_terminal_size(fd).columns
    except OSError:
        return _width_with_shell_out()
    finally:
        os.close(fd)


def get() -> int:
    """Return the terminal width in columns."""
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError, AttributeError):
        return _width_with_tty()