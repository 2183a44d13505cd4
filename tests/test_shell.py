from navi.shell import BashSpawnError, is_fish


def test_is_fish_true(monkeypatch):
    monkeypatch.setenv("SHELL", "/usr/bin/fish")
    assert is_fish() is True


def test_is_fish_false_for_bash(monkeypatch):
    monkeypatch.setenv("SHELL", "/bin/bash")
    assert is_fish() is False


def test_is_fish_false_when_unset(monkeypatch):
    monkeypatch.delenv("SHELL", raising=False)
    assert is_fish() is False


def test_bash_spawn_error():
    cause = FileNotFoundError("bash")
    error = BashSpawnError("echo hi", cause)
    assert str(error) == "Failed to spawn child process `bash` to execute `echo hi`"
    assert error.command == "echo hi"
    assert error.__cause__ is cause