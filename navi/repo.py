"""Importing cheatsheets from git repositories."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import TextIO

from navi import git
from navi.cheatfiles import all_cheat_files, default_cheat_path, tmp_path_str
from navi.files import create_dir, remove_dir
from navi.finder import FinderChoice
from navi.finder_opts import FinderOpts, SuggestionType

FEATURED_REPO_ENV = "NAVI_FEATURED_REPO"
_FEATURED_LIST = "featured_repos.txt"


def _writer_of(text: str):
    def feed(out: TextIO, _files: list[str]) -> None:
        out.write(text)
        return None

    return feed


def _remove_quietly(path: str) -> None:
    try:
        remove_dir(path)
    except OSError:
        pass


def browse(finder: FinderChoice) -> None:
    """Let the user pick one of the featured repositories and import it."""
    featured = os.environ.get(FEATURED_REPO_ENV)
    if not featured:
        raise RuntimeError(f"No featured repository configured; set {FEATURED_REPO_ENV}")

    repo_path = f"{tmp_path_str()}/featured"
    _remove_quietly(repo_path)
    create_dir(repo_path)

    repo_url, _, _ = git.meta(featured)
    try:
        git.shallow_clone(repo_url, repo_path)
    except OSError as error:
        raise RuntimeError(f"Failed to clone `{repo_url}`") from error

    try:
        repos = Path(repo_path, _FEATURED_LIST).read_text(encoding="utf-8")
    except OSError as error:
        raise RuntimeError("Unable to fetch featured repositories") from error

    opts = FinderOpts(column=1, suggestion_type=SuggestionType.SINGLE_SELECTION)
    repo, _ = finder.call(opts, [], _writer_of(repos))

    remove_dir(repo_path)
    add(repo, finder)


def ask_if_should_import_all(finder: FinderChoice) -> bool:
    """Ask whether every cheatsheet of the repository should be imported."""
    opts = FinderOpts(column=1, header="Do you want to import all files from this repo?")
    response, _ = finder.call(opts, [], _writer_of("Yes\nNo"))
    return response.lower().startswith("y")


def add(uri: str, finder: FinderChoice) -> None:
    """Clone ``uri`` and copy the chosen ``.cheat`` files into the cheatsheet folder."""
    try:
        should_import_all = ask_if_should_import_all(finder)
    except Exception:
        should_import_all = False

    actual_uri, user, repo = git.meta(uri)
    cheat_path = str(default_cheat_path())
    tmp_path = tmp_path_str()

    _remove_quietly(tmp_path)
    create_dir(tmp_path)

    print(f"Cloning {actual_uri} into {tmp_path}...\n", file=sys.stderr)

    try:
        git.shallow_clone(actual_uri, tmp_path)
    except OSError as error:
        raise RuntimeError(f"Failed to clone `{actual_uri}`") from error

    all_files = "\n".join(all_cheat_files(tmp_path))

    if should_import_all:
        files = all_files
    else:
        opts = FinderOpts(
            suggestion_type=SuggestionType.MULTIPLE_SELECTIONS,
            preview=f"cat '{tmp_path}/{{}}'",
            header=(
                "Select the cheatsheets you want to import with <TAB> then hit <Enter>\n"
                "Use Ctrl-R for (de)selecting all"
            ),
            preview_window="right:30%",
        )
        files, _ = finder.call(opts, [], _writer_of(all_files))

    to_folder = f"{cheat_path}/{user}__{repo}".replace("./", "")

    for name in files.split("\n"):
        source = f"{tmp_path}/{name}".replace("./", "")
        filename = name.replace("./", "").replace("/", "__")
        target = f"{to_folder}/{filename}"
        os.makedirs(to_folder, exist_ok=True)
        try:
            shutil.copyfile(source, target)
        except OSError as error:
            raise OSError(f"Failed to copy `{source}` to `{target}`") from error

    remove_dir(tmp_path)

    print(
        f"The following .cheat files were imported successfully:\n{files}\n\n"
        f"They are now located at {cheat_path}/{to_folder}",
        file=sys.stderr,
    )