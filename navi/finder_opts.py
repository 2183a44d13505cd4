"""Options passed to the fuzzy finder and the kinds of selection it supports."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SuggestionType(enum.Enum):
    """How the finder treats the suggestions it is given."""

    DISABLED = "disabled"
    """The finder prints no suggestions."""
    SINGLE_SELECTION = "single_selection"
    """The finder selects exactly one of the suggestions."""
    MULTIPLE_SELECTIONS = "multiple_selections"
    """The finder may select several suggestions."""
    SINGLE_RECOMMENDATION = "single_recommendation"
    """The finder selects one suggestion or falls back to the typed query."""
    SNIPPET_SELECTION = "snippet_selection"
    """The initial snippet selection."""


@dataclass
class FinderOpts:
    """Settings for one finder invocation."""

    query: str | None = None
    filter: str | None = None
    prompt: str | None = None
    preview: str | None = None
    preview_window: str | None = None
    overrides: str | None = None
    is_global: bool = False
    header_lines: int = 0
    header: str | None = None
    suggestion_type: SuggestionType = SuggestionType.SINGLE_RECOMMENDATION
    delimiter: str | None = None
    column: int | None = None
    map: str | None = None