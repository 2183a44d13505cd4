"""Command-line configuration."""

from __future__ import annotations

import argparse
import enum
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from importlib import metadata

from navi.finder import FinderChoice

PATH_ENV = "NAVI_PATH"
FZF_OVERRIDES_ENV = "NAVI_FZF_OVERRIDES"
FZF_OVERRIDES_VAR_ENV = "NAVI_FZF_OVERRIDES_VAR"
FINDER_ENV = "NAVI_FINDER"

_EPILOG = """EXAMPLES:
    navi                                             # default behavior
    navi --print                                     # doesn't execute the snippet
    navi --tldr docker                               # search for docker cheatsheets using tldr
    navi --cheatsh docker                            # search for docker cheatsheets using cheatsh
    navi --path '/some/dir:/other/dir'               # use .cheat files from custom paths
    navi --query git                                 # filter results by "git"
    navi --query 'create db' --best-match            # autoselect the snippet that best matches a query
    name=mydb navi --query 'create db' --best-match  # same, but set the value for the <name> variable
    navi repo add user/repo                          # import cheats from a git repository
    eval "$(navi widget zsh)"                        # load the zsh widget
    navi --finder 'skim'                             # set skim as finder, instead of fzf
    navi --fzf-overrides '--with-nth 1,2'            # show only the comment and tag columns
    navi --fzf-overrides '--no-select-1'             # prevent autoselection in case of single line
    navi --fzf-overrides-var '--no-select-1'         # same, but for variable selection
    navi --fzf-overrides '--nth 1,2'                 # only consider the first two columns for search
    navi --fzf-overrides '--no-exact'                # use looser search algorithm"""

_VALUE_OPTIONS = {
    "-p": "--path",
    "--path": "--path",
    "-s": "--save",
    "--save": "--save",
    "--tldr": "--tldr",
    "--cheatsh": "--cheatsh",
    "-q": "--query",
    "--query": "--query",
    "--fzf-overrides": "--fzf-overrides",
    "--fzf-overrides-var": "--fzf-overrides-var",
    "--finder": "--finder",
}

_SHELLS = ("bash", "zsh", "fish")
_REPO_COMMANDS = ("add", "browse")
_ALFRED_COMMANDS = ("start", "suggestions", "transform", "check")


class Func(enum.Enum):
    """Ad-hoc helper functions."""

    URL_OPEN = "url::open"
    WELCOME = "welcome"


class Info(enum.Enum):
    """Pieces of information that can be printed."""

    CHEATS_PATH = "cheats-path"


@dataclass(frozen=True)
class Command:
    """A subcommand and its arguments; fields not used by ``name`` stay unset."""

    name: str
    subcommand: str | None = None
    query: str | None = None
    args: tuple[str, ...] = ()
    func: Func | None = None
    info: Info | None = None
    line: str | None = None
    selection: str | None = None
    variable: str | None = None
    shell: str | None = None
    uri: str | None = None


class SourceKind(enum.Enum):
    FILESYSTEM = "filesystem"
    TLDR = "tldr"
    CHEATSH = "cheatsh"


@dataclass(frozen=True)
class Source:
    """Where cheatsheets come from: folders (``value`` is a path list) or a query."""

    kind: SourceKind
    value: str | None = None


class ActionKind(enum.Enum):
    SAVE = "save"
    PRINT = "print"
    EXECUTE = "execute"


@dataclass(frozen=True)
class Action:
    """What to do with the chosen snippet."""

    kind: ActionKind
    filepath: str | None = None


@dataclass
class Config:
    """Options given on the command line or through the environment."""

    path: str | None = None
    save: str | None = None
    print_snippet: bool = False
    no_preview: bool = False
    best_match: bool = False
    tldr: str | None = None
    cheatsh: str | None = None
    query: str | None = None
    fzf_overrides: str | None = None
    fzf_overrides_var: str | None = None
    finder: FinderChoice = FinderChoice.FZF
    cmd: Command | None = None

    def source(self) -> Source:
        """The cheatsheet source selected by the options."""
        if self.tldr is not None:
            return Source(SourceKind.TLDR, self.tldr)
        if self.cheatsh is not None:
            return Source(SourceKind.CHEATSH, self.cheatsh)
        return Source(SourceKind.FILESYSTEM, self.path)

    def action(self) -> Action:
        """The action selected by the options."""
        if self.save is not None:
            return Action(ActionKind.SAVE, self.save)
        if self.print_snippet:
            return Action(ActionKind.PRINT)
        return Action(ActionKind.EXECUTE)

    def get_query(self) -> str | None:
        """The query to start the finder with."""
        if self.query is not None:
            return self.query
        if not self.best_match:
            return None
        source = self.source()
        if source.kind is SourceKind.FILESYSTEM:
            return ""
        return source.value


def parse_finder_choice(value: str) -> FinderChoice:
    """Turn ``fzf`` or ``skim`` into a finder choice."""
    for choice in FinderChoice:
        if choice.value == value:
            return choice
    raise ValueError("no match")


def _version() -> str:
    try:
        return metadata.version("navi")
    except metadata.PackageNotFoundError:
        return "unknown"


def _build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        usage=f"{prog} [OPTIONS] [SUBCOMMAND]",
    )
    env = os.environ
    parser.add_argument("-V", "--version", action="version", version=f"{prog} {_version()}")
    parser.add_argument("-p", "--path", default=env.get(PATH_ENV),
                        help="List of :-separated paths containing .cheat files")
    parser.add_argument("-s", "--save",
                        help="[Experimental] Instead of executing a snippet, saves it to a file")
    parser.add_argument("--print", dest="print_snippet", action="store_true",
                        help="Instead of executing a snippet, prints it to stdout")
    parser.add_argument("--no-preview", action="store_true", help="Hides preview window")
    parser.add_argument("--best-match", action="store_true", help="Returns the best match")
    parser.add_argument("--tldr",
                        help="Search for cheatsheets using the tldr-pages repository")
    parser.add_argument("--cheatsh", help="Search for cheatsheets using the cheat.sh repository")
    parser.add_argument("-q", "--query", help="Query")
    parser.add_argument("--fzf-overrides", default=env.get(FZF_OVERRIDES_ENV),
                        help="finder overrides for cheat selection")
    parser.add_argument("--fzf-overrides-var", default=env.get(FZF_OVERRIDES_VAR_ENV),
                        help="finder overrides for variable selection")
    parser.add_argument("--finder", default=env.get(FINDER_ENV, "fzf"),
                        help="which finder application to use [possible values: fzf, skim]")
    return parser


def _split_args(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate top-level options from the subcommand and its arguments."""
    top: list[str] = []
    tokens = iter(args)
    for token in tokens:
        if token in _VALUE_OPTIONS:
            value = next(tokens, None)
            if value is None:
                top.append(token)
                break
            top.append(f"{_VALUE_OPTIONS[token]}={value}")
        elif token.startswith("-") and token != "-":
            top.append(token)
        else:
            return top, [token, *tokens]
    return top, []


def _expect(parser: argparse.ArgumentParser, name: str, rest: list[str],
            minimum: int, maximum: int | None) -> None:
    if len(rest) < minimum:
        parser.error(f"missing arguments for subcommand `{name}`")
    if maximum is not None and len(rest) > maximum:
        parser.error(f"unexpected arguments for subcommand `{name}`: {' '.join(rest[maximum:])}")


def _parse_command(parser: argparse.ArgumentParser, tokens: list[str]) -> Command | None:
    if not tokens:
        return None
    name, *rest = tokens

    if name == "query":
        _expect(parser, name, rest, 1, 1)
        return Command(name, query=rest[0])
    if name == "best":
        _expect(parser, name, rest, 1, None)
        return Command(name, query=rest[0], args=tuple(rest[1:]))
    if name == "fn":
        _expect(parser, name, rest, 1, None)
        try:
            func = Func(rest[0])
        except ValueError:
            parser.error(f"invalid function `{rest[0]}`")
        return Command(name, func=func, args=tuple(rest[1:]))
    if name == "repo":
        _expect(parser, name, rest, 1, None)
        sub, *sub_rest = rest
        if sub not in _REPO_COMMANDS:
            parser.error(f"invalid repo subcommand `{sub}`")
        if sub == "add":
            _expect(parser, "repo add", sub_rest, 1, 1)
            return Command(name, subcommand=sub, uri=sub_rest[0])
        _expect(parser, "repo browse", sub_rest, 0, 0)
        return Command(name, subcommand=sub)
    if name == "preview":
        _expect(parser, name, rest, 1, 1)
        return Command(name, line=rest[0])
    if name == "preview-var":
        _expect(parser, name, rest, 3, 3)
        return Command(name, selection=rest[0], query=rest[1], variable=rest[2])
    if name == "widget":
        _expect(parser, name, rest, 0, 1)
        shell = rest[0] if rest else "bash"
        if shell not in _SHELLS:
            parser.error(f"invalid shell `{shell}`")
        return Command(name, shell=shell)
    if name == "info":
        _expect(parser, name, rest, 1, 1)
        try:
            info = Info(rest[0])
        except ValueError:
            parser.error(f"invalid info `{rest[0]}`")
        return Command(name, info=info)
    if name == "alfred":
        _expect(parser, name, rest, 1, 1)
        if rest[0] not in _ALFRED_COMMANDS:
            parser.error(f"invalid alfred subcommand `{rest[0]}`")
        return Command(name, subcommand=rest[0])
    parser.error(f"unrecognized subcommand `{name}`")
    return None


def config_from_iter(args: Sequence[str]) -> Config:
    """Build the configuration from ``args``, whose first item is the program name."""
    args = list(args)
    prog = os.path.basename(args[0]) if args else "navi"
    parser = _build_parser(prog)
    top, sub = _split_args(args[1:])
    namespace = parser.parse_args(top)
    try:
        finder = parse_finder_choice(namespace.finder)
    except ValueError:
        parser.error(f"invalid finder `{namespace.finder}` [possible values: fzf, skim]")
    return Config(
        path=namespace.path,
        save=namespace.save,
        print_snippet=namespace.print_snippet,
        no_preview=namespace.no_preview,
        best_match=namespace.best_match,
        tldr=namespace.tldr,
        cheatsh=namespace.cheatsh,
        query=namespace.query,
        fzf_overrides=namespace.fzf_overrides,
        fzf_overrides_var=namespace.fzf_overrides_var,
        finder=finder,
        cmd=_parse_command(parser, sub),
    )


def config_from_env() -> Config:
    """Build the configuration from the process arguments."""
    return config_from_iter(sys.argv or ["navi"])