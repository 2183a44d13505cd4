# navi

An interactive cheatsheet tool for the command line. It lists snippets from
`.cheat` files in a fuzzy finder (fzf or skim), asks you for the values of the
variables in the snippet you pick, and then runs, prints or saves the result.

## Requirements

- `bash`
- `fzf` (default) or `sk` (skim) on your `PATH`
- `git` to import cheatsheet repositories
- optionally `tldr` (with `--markdown` support) and `wget` for the online sources
- optionally `pbcopy`, `xclip` or `clip.exe` for copying to the clipboard

## Installation

```sh
pip install .
```

This installs the `navi` command.

## Usage

```sh
navi                                   # browse snippets and run the one you pick
navi --print                           # print the snippet instead of running it
navi --save out.sh                     # write the snippet to a file
navi --path '/some/dir:/other/dir'     # read .cheat files from these folders
navi --query git                       # start with "git" as the query
navi --query 'create db' --best-match  # pick the best match without asking
navi --no-preview                      # hide the preview window
navi --tldr docker                     # use tldr pages as the source
navi --cheatsh docker                  # use cheat.sh as the source
navi --finder skim                     # use skim instead of fzf
navi --fzf-overrides '--no-exact'      # extra options for the snippet finder
navi --fzf-overrides-var '--no-select-1'  # extra options for variable prompts
navi repo add user/repo                # import .cheat files from a git repository
navi repo browse                       # pick from a list of featured repositories
navi info cheats-path                  # show the default cheatsheet folder
navi fn url::open https://example.com  # open a URL with xdg-open or open
navi --version
```

In the snippet list, `Enter` runs the snippet with `bash`, `Ctrl-Y` copies it
to the clipboard and `Ctrl-O` opens its `.cheat` file in `$VISUAL`, `$EDITOR`
or `vi`.

A variable's value can be set in advance through the environment, with any
`-` in its name written as `_`:

```sh
name=mydb navi --query 'create db' --best-match
```

For a variable `<name>`, the environment variable `name__query` sets the
initial query of its prompt, and `name__best` selects the best match for the
given text without asking.

`navi repo add` accepts `user/repo` (taken to be on GitHub) or a full git URI.
It asks whether to import every `.cheat` file or lets you pick some, then
copies them into `<cheats folder>/<user>__<repo>/`. `navi repo browse` clones
the repository named in `NAVI_FEATURED_REPO`, offers the entries of its
`featured_repos.txt` and imports the one you choose.

The `alfred` subcommands (`start`, `suggestions`, `check`, `transform`) print
JSON for an Alfred workflow; they read the `tags`, `snippet` and `varname`
environment variables that the workflow sets.

## Cheatsheet format

```
% git, code

# Change branch
git checkout <branch>

$ branch: git branch | awk '{print $NF}'
```

- `% tags` starts a group of snippets sharing the given tags
- `# comment` describes the snippet that follows
- `$ name: command` gives suggestions for the `<name>` variable; finder
  options go after `---`, for example
  `--- --column 1 --delimiter '\s' --multi --prevent-extra --header-lines 1`.
  Also accepted: `--headers`, `--map`, `--query`, `--filter`, `--preview`,
  `--preview-window`, `--header`, `--overrides` and `--global`
- `@ tags` lets this group use variables defined under other tags
- `; text` is a comment that is never shown

By default cheatsheets are read recursively from the `cheats` folder inside
the user data directory for `navi` (see `navi info cheats-path`).

## Environment variables

| Variable | Meaning |
| --- | --- |
| `NAVI_PATH` | `:`-separated folders with `.cheat` files |
| `NAVI_FINDER` | `fzf` or `skim` |
| `NAVI_FZF_OVERRIDES` | extra finder options for snippet selection |
| `NAVI_FZF_OVERRIDES_VAR` | extra finder options for variable selection |
| `NAVI_TAG_COLOR`, `NAVI_COMMENT_COLOR`, `NAVI_SNIPPET_COLOR` | 256-colour ANSI numbers |
| `NAVI_TAG_WIDTH`, `NAVI_COMMENT_WIDTH` | column widths in percent of the terminal |
| `NAVI_FEATURED_REPO` | repository used by `navi repo browse` |

## Library use

```python
from navi.cheat import VariableMap
from navi.parser import parse_variable_line

variable, command, opts = parse_variable_line("$ user: whoami --- --prevent-extra")
# variable == "user", command == " whoami ", opts.suggestion_type is SINGLE_SELECTION
```

## What is not included

The package does not ship shell widget scripts. `navi widget bash|zsh|fish`
looks for a `navi.plugin.<shell>` file in a `shell` folder next to the
package's modules; none is installed, so the command fails unless you put
such a file there yourself.