"""Dispatching a parsed configuration to the command it asks for."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from navi import alfred, core, preview, repo
from navi.cheatfiles import default_cheat_path
from navi.config import Config, Func, Info, config_from_env, config_from_iter
from navi.errors import FileAnIssue
from navi.system import open_url

_WIDGET_DIR = Path(__file__).resolve().parent / "shell"


def run_func(func: Func, args: Sequence[str]) -> None:
    """Run one of the ad-hoc helper functions."""
    if func is Func.URL_OPEN:
        open_url(list(args))
    elif func is Func.WELCOME:
        handle_config(config_from_iter("navi --path /tmp/navi/irrelevant".split(" ")))


def show_info(info: Info) -> None:
    """Print the requested piece of information."""
    if info is Info.CHEATS_PATH:
        print(default_cheat_path())


def _print_widget(shell: str) -> None:
    path = _WIDGET_DIR / f"navi.plugin.{shell}"
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as error:
        raise RuntimeError("Failed to print shell widget code") from error
    print(content)


def _with_context(message: str, action, *args) -> None:
    try:
        action(*args)
    except Exception as error:
        raise RuntimeError(message) from error


def handle_config(config: Config) -> None:
    """Run the command selected by ``config``."""
    cmd = config.cmd
    if cmd is None:
        core.main(config)
        return

    name = cmd.name
    if name == "preview":
        preview.main(cmd.line or "")
    elif name == "preview-var":
        preview.main_var(cmd.selection or "", cmd.query or "", cmd.variable or "")
    elif name == "widget":
        _print_widget(cmd.shell or "bash")
    elif name == "fn":
        func = cmd.func
        label = func.value if func is not None else ""
        _with_context(f"Failed to execute function `{label}`", run_func, func, list(cmd.args))
    elif name == "info":
        info = cmd.info
        label = info.value if info is not None else ""
        _with_context(f"Failed to fetch info `{label}`", show_info, info)
    elif name == "repo":
        if cmd.subcommand == "add":
            _with_context(
                f"Failed to import cheatsheets from `{cmd.uri}`", repo.add, cmd.uri, config.finder
            )
        else:
            _with_context("Failed to browse featured cheatsheets", repo.browse, config.finder)
        core.main(config)
    elif name == "alfred":
        sub = cmd.subcommand
        if sub == "start":
            _with_context("Failed to call Alfred starting function", alfred.main, config)
        elif sub == "suggestions":
            _with_context(
                "Failed to call Alfred suggestion function", alfred.suggestions, config, False
            )
        elif sub == "check":
            _with_context("Failed to call Alfred check function", alfred.suggestions, config, True)
        elif sub == "transform":
            _with_context("Failed to call Alfred transform function", alfred.transform)
    else:
        core.main(config)


def _describe(issue: FileAnIssue) -> str:
    lines = [f"Error: {issue}", "", "Caused by:"]
    cause = issue.__cause__
    seen: set[int] = set()
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"    {cause}")
        cause = cause.__cause__
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line, run it and return the exit status."""
    config = config_from_env() if argv is None else config_from_iter(["navi", *argv])
    try:
        handle_config(config)
    except Exception as error:
        print(_describe(FileAnIssue(error)), file=sys.stderr)
        return 1
    return 0