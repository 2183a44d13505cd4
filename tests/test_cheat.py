from navi.cheat import Suggestion, VariableMap
from navi.finder_opts import FinderOpts, SuggestionType


def test_get_missing_returns_none():
    assert VariableMap().get_suggestion("git", "branch") is None


def test_insert_and_get():
    variables = VariableMap()
    suggestion = Suggestion("git branch", None)
    variables.insert_suggestion("git", "branch", suggestion)
    assert variables.get_suggestion("git", "branch") == suggestion
    assert variables.get_suggestion("docker", "branch") is None


def test_insert_replaces_existing():
    variables = VariableMap()
    variables.insert_suggestion("git", "branch", Suggestion("first"))
    variables.insert_suggestion("git", "branch", Suggestion("second"))
    assert variables.get_suggestion("git", "branch").command == "second"


def test_dependency_lookup():
    variables = VariableMap()
    opts = FinderOpts(suggestion_type=SuggestionType.SINGLE_SELECTION)
    variables.insert_suggestion("common", "user", Suggestion("whoami", opts))
    variables.insert_dependency("ssh", "common")
    found = variables.get_suggestion("ssh", "user")
    assert found == Suggestion("whoami", opts)


def test_own_suggestion_wins_over_dependency():
    variables = VariableMap()
    variables.insert_suggestion("common", "user", Suggestion("dep"))
    variables.insert_suggestion("ssh", "user", Suggestion("own"))
    variables.insert_dependency("ssh", "common")
    assert variables.get_suggestion("ssh", "user").command == "own"


def test_dependencies_searched_in_insertion_order():
    variables = VariableMap()
    variables.insert_suggestion("a", "x", Suggestion("from a"))
    variables.insert_suggestion("b", "x", Suggestion("from b"))
    variables.insert_dependency("t", "b")
    variables.insert_dependency("t", "a")
    assert variables.get_suggestion("t", "x").command == "from b"


def test_copy_is_independent():
    variables = VariableMap()
    variables.insert_suggestion("git", "branch", Suggestion("git branch"))
    clone = variables.copy()
    clone.insert_suggestion("git", "remote", Suggestion("git remote"))
    assert variables.get_suggestion("git", "remote") is None
    assert clone.get_suggestion("git", "branch").command == "git branch"