import os
import sys

import pytest

from navi.files import create_dir, exe_string, read_lines, remove_dir


def test_read_lines_strips_terminators(tmp_path):
    path = tmp_path / "a.cheat"
    path.write_bytes(b"% git\r\n# commit\ngit commit\n")
    assert list(read_lines(path)) == ["% git", "# commit", "git commit"]


def test_read_lines_keeps_last_line_without_newline(tmp_path):
    path = tmp_path / "b.cheat"
    path.write_text("one\ntwo", encoding="utf-8")
    assert list(read_lines(path)) == ["one", "two"]


def test_read_lines_missing_file_fails_immediately(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_lines(tmp_path / "missing.cheat")


def test_create_dir_nested_and_idempotent(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    create_dir(target)
    create_dir(target)
    assert target.is_dir()


def test_remove_dir(tmp_path):
    target = tmp_path / "x"
    create_dir(target / "y")
    (target / "y" / "f.txt").write_text("data", encoding="utf-8")
    remove_dir(target)
    assert not target.exists()


def test_remove_missing_dir_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        remove_dir(tmp_path / "nothing")


def test_exe_string_follows_symlink(tmp_path, monkeypatch):
    real = tmp_path / "real-exe"
    real.write_text("#!/bin/sh\n", encoding="utf-8")
    link = tmp_path / "link-exe"
    link.symlink_to(real)
    monkeypatch.setattr(sys, "argv", [str(link)])
    assert exe_string() == os.path.realpath(real)


def test_exe_string_for_module_run(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["/somewhere/__main__.py"])
    result = exe_string()
    assert result.endswith("-m navi")