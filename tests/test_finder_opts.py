from dataclasses import replace

from navi.finder_opts import FinderOpts, SuggestionType


def test_default_suggestion_type_is_single_recommendation():
    assert FinderOpts().suggestion_type is SuggestionType.SINGLE_RECOMMENDATION


def test_defaults_are_empty():
    opts = FinderOpts()
    assert opts.header_lines == 0
    assert opts.is_global is False
    assert opts.column is None
    assert opts.delimiter is None
    assert opts.map is None
    assert opts.query is None


def test_equality_depends_on_fields():
    base = FinderOpts(column=1)
    assert base == FinderOpts(column=1)
    assert (base == FinderOpts(column=2)) is False


def test_replace_keeps_other_fields():
    opts = FinderOpts(header="pick one", column=1)
    changed = replace(opts, suggestion_type=SuggestionType.MULTIPLE_SELECTIONS)
    assert changed.header == "pick one"
    assert changed.column == 1
    assert changed.suggestion_type is SuggestionType.MULTIPLE_SELECTIONS
    assert opts.suggestion_type is SuggestionType.SINGLE_RECOMMENDATION


def test_every_suggestion_type_is_kept_by_opts():
    stored = [FinderOpts(suggestion_type=kind).suggestion_type for kind in SuggestionType]
    assert stored == list(SuggestionType)
    assert len(set(stored)) == 5