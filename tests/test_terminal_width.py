import os
import subprocess
from unittest import mock

from navi import terminal_width


@mock.patch("os.get_terminal_size", return_value=os.terminal_size((123, 40)))
def test_width_from_terminal(size):
    assert terminal_width.get() == 123


@mock.patch("subprocess.run", return_value=subprocess.CompletedProcess([], 1, b"", b""))
@mock.patch("os.get_terminal_size", side_effect=OSError("no tty"))
def test_fallback_when_stty_fails(size, run):
    assert terminal_width.get() == terminal_width.FALLBACK_WIDTH == 80


@mock.patch("subprocess.run", return_value=subprocess.CompletedProcess([], 0, b"24 132\n", b""))
@mock.patch("os.get_terminal_size", side_effect=OSError("no tty"))
def test_width_from_stty(size, run):
    assert terminal_width.get() == 132
    assert run.call_args.args[0][0] == "stty"