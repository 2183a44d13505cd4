import pytest

from navi.display import (
    DELIMITER,
    LINE_SEPARATOR,
    VAR_REGEX,
    Item,
    Writer,
    fix_newlines,
    with_new_lines,
)


class _PipeWriter(Writer):
    def write(self, item):
        return "|".join([item.tags, item.comment, item.snippet, str(item.file_index)])


def test_with_new_lines():
    assert with_new_lines("a" + LINE_SEPARATOR + "b") == "a\nb"


def test_with_new_lines_roundtrip():
    lines = ["first", "second", "third"]
    assert with_new_lines(LINE_SEPARATOR.join(lines)).split("\n") == lines


def test_fix_newlines_without_escape_is_identity():
    text = "echo \\ done"
    assert fix_newlines(text) == text


def test_fix_newlines_joins_continuations():
    assert fix_newlines("foo \\" + LINE_SEPARATOR + "bar") == "foo bar"


def test_var_regex_finds_names():
    assert VAR_REGEX.findall("ssh <user>@<server>") == ["user", "server"]


def test_var_regex_accepts_dashes():
    match = VAR_REGEX.search("run <my-var>")
    assert match.group(1) == "my-var"


def test_delimiter_has_no_newline():
    assert "\n" not in DELIMITER
    assert DELIMITER.startswith("  ")


def test_writer_is_abstract():
    with pytest.raises(TypeError):
        Writer()


def test_writer_subclass_renders_item():
    item = Item(tags="git", comment="commit", snippet="git commit", file_index=2)
    assert _PipeWriter().write(item) == "git|commit|git commit|2"


def test_item_is_immutable():
    item = Item(tags="git", comment="c", snippet="s", file_index=0)
    with pytest.raises(AttributeError):
        item.tags = "other"
    assert item.tags == "git"