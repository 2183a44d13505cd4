import io
import subprocess
from pathlib import Path

import platformdirs
import pytest

from navi import repo
from navi.finder_opts import SuggestionType


class FakeFinder:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def call(self, opts, files, stdin_fn):
        buffer = io.StringIO()
        result = stdin_fn(buffer, files)
        self.calls.append((opts, buffer.getvalue()))
        return self.responses.pop(0), result


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    data = tmp_path / "data"
    monkeypatch.setattr(platformdirs, "user_data_dir", lambda *args, **kwargs: str(data))
    return data


@pytest.fixture
def fake_git(monkeypatch):
    calls = []
    completed = subprocess.CompletedProcess

    def run(args, **kwargs):
        calls.append(list(args))
        target = Path(args[3])
        if target.name == "featured":
            (target / "featured_repos.txt").write_text(
                "https://example.com/alice/tools.git  handy tools\n"
            )
        else:
            (target / "sub").mkdir(parents=True, exist_ok=True)
            (target / "a.cheat").write_text("% a\n")
            (target / "sub" / "b.cheat").write_text("% b\n")
            (target / "readme.md").write_text("x")
        return completed(args, 0)

    monkeypatch.setattr(subprocess, "run", run)
    return calls


def test_ask_yes():
    finder = FakeFinder("Yes")
    assert repo.ask_if_should_import_all(finder) is True
    opts, written = finder.calls[0]
    assert written == "Yes\nNo"
    assert opts.header == "Do you want to import all files from this repo?"


def test_ask_no():
    assert repo.ask_if_should_import_all(FakeFinder("No")) is False


def test_add_imports_all(data_dir, fake_git):
    result = repo.add("https://example.com/alice/tools.git", FakeFinder("Yes"))
    assert result is None
    target = data_dir / "cheats" / "alice__tools"
    assert sorted(p.name for p in target.iterdir()) == ["a.cheat", "sub__b.cheat"]
    assert (target / "sub__b.cheat").read_text() == "% b\n"
    assert not (data_dir / "cheats" / "tmp").exists()
    assert fake_git[0][:3] == ["git", "clone", "https://example.com/alice/tools.git"]
    assert fake_git[0][-2:] == ["--depth", "1"]


def test_add_imports_selection(data_dir, fake_git):
    finder = FakeFinder("No", "sub/b.cheat")
    repo.add("https://example.com/alice/tools.git", finder)
    target = data_dir / "cheats" / "alice__tools"
    assert [p.name for p in target.iterdir()] == ["sub__b.cheat"]
    opts, written = finder.calls[1]
    assert opts.suggestion_type is SuggestionType.MULTIPLE_SELECTIONS
    assert written == "a.cheat\nsub/b.cheat"


def test_browse_imports_chosen_repo(data_dir, fake_git, monkeypatch):
    monkeypatch.setenv(repo.FEATURED_REPO_ENV, "alice/featured")
    finder = FakeFinder("https://example.com/alice/tools.git", "Yes")
    repo.browse(finder)
    opts, written = finder.calls[0]
    assert opts.column == 1
    assert opts.suggestion_type is SuggestionType.SINGLE_SELECTION
    assert "https://example.com/alice/tools.git" in written
    assert (data_dir / "cheats" / "alice__tools" / "a.cheat").exists()


def test_browse_requires_featured_repo(data_dir, monkeypatch):
    monkeypatch.delenv(repo.FEATURED_REPO_ENV, raising=False)
    with pytest.raises(RuntimeError):
        repo.browse(FakeFinder())