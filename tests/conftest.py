"""
conftest.py
-----------
Shared pytest fixtures for notemark tests.

Provides fixtures for:
- Sample note texts (shorthand, HTML, mixed)
- Diary entry files on disk
- Markup configuration files
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Sample Note Fixtures -----

@pytest.fixture
def shorthand_note():
    """The canonical shorthand example: nested TODO then a plain line."""
    return "- - TODO buy milk\nsome note"


@pytest.fixture
def mixed_note():
    """Note mixing headings, shorthand tasks, canonical tasks and HTML."""
    return """# Monday

TODO call the bank
- groceries
- - DONE buy milk
- - [ ] buy eggs

> quoted **thought**

<ul><li>html item</li></ul>

- [x] finished report
"""


@pytest.fixture
def entries_dir(tmp_dir):
    """Journal directory with three dated entries and one undated note."""
    journal = tmp_dir / "journal"
    journal.mkdir()
    (journal / "2024-01-14.md").write_text("TODO water plants\nDONE pay rent\n", encoding="utf-8")
    (journal / "2024-01-15.md").write_text("- [ ] book flights\n- [x] pack\n", encoding="utf-8")
    (journal / "2024-01-13.md").write_text("nothing to do today\n", encoding="utf-8")
    (journal / "ideas.md").write_text("- TODO write blog post\n", encoding="utf-8")
    return journal


@pytest.fixture
def note_file(tmp_dir, shorthand_note):
    """A single entry file holding the shorthand example."""
    path = tmp_dir / "2024-01-15.md"
    path.write_text(shorthand_note, encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_dir):
    """Markup configuration overriding class names and indent unit."""
    path = tmp_dir / "notemark.yaml"
    path.write_text(
        "indent_unit: 4\nsearch_class: hit\nselection_class: sel\n",
        encoding="utf-8",
    )
    return path
