import io

from navi.display import Item, Writer
from navi.welcome import populate_cheatsheet


class RecordingWriter(Writer):
    def __init__(self):
        self.items = []

    def write(self, item: Item) -> str:
        self.items.append(item)
        return f"{item.snippet}\n"


def test_populate_writes_three_entries():
    writer = RecordingWriter()
    out = io.StringIO()
    populate_cheatsheet(writer, out)
    assert len(writer.items) == 3
    assert [item.tags for item in writer.items[:2]] == ["cheatsheets", "cheatsheets"]
    assert all(item.file_index == 0 for item in writer.items)


def test_populate_output_matches_writer():
    writer = RecordingWriter()
    out = io.StringIO()
    populate_cheatsheet(writer, out)
    assert out.getvalue() == "".join(f"{item.snippet}\n" for item in writer.items)
    assert "navi repo browse" in out.getvalue()
    assert "navi --help" in out.getvalue()