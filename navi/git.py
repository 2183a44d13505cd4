"""Minimal git helpers: shallow clones and repository URI parsing."""

from __future__ import annotations

import subprocess

from navi.shell import BashSpawnError

_DEFAULT_HOST = "https://github.com/"


def shallow_clone(uri: str, target: str) -> None:
    """Clone ``uri`` into ``target`` with a depth of one commit."""
    try:
        subprocess.run(["git", "clone", uri, target, "--depth", "1"], check=False)
    except OSError as error:
        raise BashSpawnError("git clone", error) from error


def meta(uri: str) -> tuple[str, str, str]:
    """Return the full URI, the user and the repository name for ``uri``.

    A bare ``user/repo`` is taken to live on the default host.
    """
    actual_uri = uri if "://" in uri or "@" in uri else f"{_DEFAULT_HOST}{uri}"
    parts = actual_uri.replace(":", "/").split("/")
    user = parts[-2]
    repo = parts[-1].replace(".git", "")
    return actual_uri, user, repo