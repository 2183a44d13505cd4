"""Interactive cheatsheet tool: browse .cheat snippets in fzf or skim, fill in variables, then run, print or save them."""

__version__ = "2.12.0"