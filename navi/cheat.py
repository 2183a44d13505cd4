"""Variable suggestions collected from cheatsheets."""

from __future__ import annotations

import copy
from typing import NamedTuple

from navi.finder_opts import FinderOpts


class Suggestion(NamedTuple):
    """A shell command producing values for a variable, with optional finder options."""

    command: str
    opts: FinderOpts | None = None


class VariableMap:
    """Suggestions keyed by cheatsheet tags and variable name, with tag dependencies."""

    def __init__(self) -> None:
        self._variables: dict[str, dict[str, Suggestion]] = {}
        self._dependencies: dict[str, list[str]] = {}

    def insert_dependency(self, tags: str, tags_dependency: str) -> None:
        """Make the variables of ``tags_dependency`` visible from ``tags``."""
        self._dependencies.setdefault(tags, []).append(tags_dependency)

    def insert_suggestion(self, tags: str, variable: str, value: Suggestion) -> None:
        """Register (or replace) the suggestion for ``variable`` under ``tags``."""
        self._variables.setdefault(tags, {})[variable] = value

    def get_suggestion(self, tags: str, variable: str) -> Suggestion | None:
        """Find the suggestion for ``variable``, looking in ``tags`` and then its dependencies."""
        own = self._variables.get(tags, {})
        if variable in own:
            return own[variable]
        for dependency in self._dependencies.get(tags, []):
            found = self._variables.get(dependency, {}).get(variable)
            if found is not None:
                return found
        return None

    def copy(self) -> VariableMap:
        """Return an independent deep copy."""
        return copy.deepcopy(self)