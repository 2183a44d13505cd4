from navi.errors import FileAnIssue, InvalidPath, UnreadableDir


def test_invalid_path_message():
    assert str(InvalidPath("/some/where")) == "Invalid path `/some/where`"


def test_unreadable_dir_message_and_cause():
    cause = PermissionError("denied")
    error = UnreadableDir("/cheats", cause)
    assert str(error) == "Unable to read directory `/cheats`"
    assert error.__cause__ is cause
    assert error.source is cause


def test_file_an_issue_wraps_source():
    cause = ValueError("boom")
    error = FileAnIssue(cause)
    assert error.source is cause
    assert error.__cause__ is cause
    assert "navi encountered a problem" in str(error)


def test_file_an_issue_keeps_source_message():
    error = FileAnIssue(RuntimeError("inner"))
    assert str(error.source) == "inner"
    assert error.source.args == ("inner",)