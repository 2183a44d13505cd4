import io

import platformdirs
import pytest

from navi import handler, terminal
from navi.config import Command, Config, Info
from navi.display import DELIMITER


class FakeFinder:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def call(self, opts, files, stdin_fn):
        buffer = io.StringIO()
        result = stdin_fn(buffer, files)
        written = buffer.getvalue()
        self.calls.append((opts, written))
        return f"enter\n{written.splitlines()[0]}", result


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    data = tmp_path / "data"
    monkeypatch.setattr(platformdirs, "user_data_dir", lambda *args, **kwargs: str(data))
    return data


@pytest.fixture
def preview_env(monkeypatch):
    for name in (
        terminal.PREVIEW_INITIAL_SNIPPET,
        terminal.PREVIEW_TAGS,
        terminal.PREVIEW_COMMENT,
    ):
        monkeypatch.setenv(name, "")
    return monkeypatch


def test_show_info_prints_cheats_path(data_dir, capsys):
    handler.show_info(Info.CHEATS_PATH)
    assert capsys.readouterr().out == f"{data_dir / 'cheats'}\n"


def test_main_info_command(data_dir, capsys, monkeypatch):
    monkeypatch.delenv("NAVI_FINDER", raising=False)
    assert handler.main(["info", "cheats-path"]) == 0
    assert capsys.readouterr().out == f"{data_dir / 'cheats'}\n"


def test_main_reports_failures(capsys, monkeypatch):
    monkeypatch.delenv("NAVI_FINDER", raising=False)
    assert handler.main(["fn", "url::open"]) == 1
    err = capsys.readouterr().err
    assert "Hey, listen!" in err
    assert "Failed to execute function `url::open`" in err
    assert "No URL specified" in err


def test_preview_command_prints_and_exits(capsys):
    line = DELIMITER.join(["a", "b", "c", "git", "show status", "git status", "0", ""])
    with pytest.raises(SystemExit) as exit_info:
        handler.handle_config(Config(cmd=Command("preview", line=line)))
    assert exit_info.value.code == 0
    out = capsys.readouterr().out
    assert "show status" in out
    assert "[git]" in out


def test_alfred_transform_command(monkeypatch, capsys):
    monkeypatch.setenv("snippet", "ping <host>")
    monkeypatch.setenv("varname", "host")
    monkeypatch.setenv("host", "localhost")
    handler.handle_config(Config(cmd=Command("alfred", subcommand="transform")))
    assert capsys.readouterr().out == "ping localhost\n"


def test_alfred_failure_is_wrapped(monkeypatch):
    monkeypatch.delenv("snippet", raising=False)
    with pytest.raises(RuntimeError, match="Alfred transform"):
        handler.handle_config(Config(cmd=Command("alfred", subcommand="transform")))


@pytest.mark.parametrize("cmd", [None, Command("query", query="up")])
def test_default_runs_core(tmp_path, preview_env, capsys, cmd):
    (tmp_path / "a.cheat").write_text("% sys\n# load\nuptime\n")
    finder = FakeFinder()
    config = Config(
        path=str(tmp_path), print_snippet=True, no_preview=True, finder=finder, cmd=cmd
    )
    handler.handle_config(config)
    assert capsys.readouterr().out == "uptime\n"
    assert len(finder.calls) == 1