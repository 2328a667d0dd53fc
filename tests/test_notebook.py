"""Tests for the Notebook facade."""

import pytest

from jotter.config import get_default_config
from jotter.errors import (
    CapacityExceeded,
    CorruptFile,
    IndexOutOfRange,
    InvalidPattern,
    UnknownCategory,
    ValidationError,
)
from jotter.models import Category
from jotter.notebook import Notebook, NoteField, Result


@pytest.fixture
def notebook(data_file, clock):
    notebook = Notebook(path=data_file)
    notebook.create_note("Team Meeting", "Agenda for Monday", Category.WORK)
    notebook.create_note("Lunch", "Sandwich", "personal")
    return notebook


def test_result_unwrap():
    assert Result(value=3).unwrap() == 3
    with pytest.raises(ValidationError):
        Result(error=ValidationError("bad")).unwrap()


def test_default_path_comes_from_config(data_file):
    assert Notebook().path == data_file


def test_create_note_returns_number(notebook):
    result = notebook.create_note("Idea", "Flying cars", "IDEAS")

    assert result.ok
    assert result.value == 3
    assert notebook.get_note_detail(3).value.category is Category.IDEAS


def test_create_note_validation_error(notebook):
    result = notebook.create_note("   ", "Body", Category.WORK)

    assert not result.ok
    assert isinstance(result.error, ValidationError)
    assert notebook.count == 2


def test_create_note_unknown_category(notebook):
    result = notebook.create_note("Title", "Body", "chores")

    assert isinstance(result.error, UnknownCategory)
    assert notebook.count == 2


def test_create_note_when_full(data_file, clock):
    config = get_default_config()
    config["notes"]["max_notes"] = 1
    notebook = Notebook(path=data_file, config=config)

    assert notebook.create_note("One", "1", Category.WORK).ok
    result = notebook.create_note("Two", "2", Category.WORK)

    assert isinstance(result.error, CapacityExceeded)
    assert [n.title for n in notebook.list_notes()] == ["One"]


def test_get_note_detail_out_of_range(notebook):
    result = notebook.get_note_detail(9)

    assert isinstance(result.error, IndexOutOfRange)


@pytest.mark.parametrize(
    "field, value, attribute, expected",
    [
        ("title", "Retro", "title", "Retro"),
        (NoteField.CONTENT, "New agenda", "content", "New agenda"),
        ("Category", "school", "category", Category.SCHOOL),
        ("category", Category.IDEAS, "category", Category.IDEAS),
    ],
)
def test_edit_note(notebook, clock, field, value, attribute, expected):
    later = clock.advance(minutes=10)

    result = notebook.edit_note(1, field, value)

    assert result.ok
    stored = notebook.get_note_detail(1).value
    assert getattr(stored, attribute) == expected
    assert stored.modified_at == later


def test_edit_unknown_field(notebook):
    result = notebook.edit_note(1, "colour", "blue")

    assert isinstance(result.error, ValidationError)


def test_edit_blank_value_keeps_note(notebook):
    result = notebook.edit_note(1, "title", "")

    assert isinstance(result.error, ValidationError)
    assert notebook.get_note_detail(1).value.title == "Team Meeting"


def test_delete_note(notebook):
    result = notebook.delete_note(1)

    assert result.value.title == "Team Meeting"
    assert [n.title for n in notebook.list_notes()] == ["Lunch"]


def test_delete_out_of_range(notebook):
    assert isinstance(notebook.delete_note(0).error, IndexOutOfRange)
    assert notebook.count == 2


def test_search_notes(notebook):
    result = notebook.search_notes("Meet")

    assert [(n, note.title) for n, note in result.value] == [(1, "Team Meeting")]


def test_search_empty_keyword(notebook):
    assert isinstance(notebook.search_notes("  ").error, ValidationError)


def test_search_invalid_pattern(notebook):
    assert isinstance(notebook.search_notes("[abc").error, InvalidPattern)


def test_search_literal_override(notebook):
    result = notebook.search_notes("[abc", literal=True)

    assert result.ok
    assert result.value == []


def test_search_literal_fallback_from_config(data_file):
    config = get_default_config()
    config["search"]["literal_fallback"] = True
    notebook = Notebook(path=data_file, config=config)

    assert notebook.search_notes("(").ok


def test_filter_notes(notebook):
    assert [n for n, _ in notebook.filter_notes("work").value] == [1]
    assert notebook.filter_notes(Category.REMINDERS).value == []
    assert isinstance(notebook.filter_notes("chores").error, UnknownCategory)


def test_save_and_reopen(notebook, data_file):
    assert notebook.save_to_file().value == 2

    reopened, result = Notebook.open(path=data_file)

    assert result.ok
    assert [n.title for n in reopened.list_notes()] == ["Team Meeting", "Lunch"]


def test_load_missing_file(data_file):
    notebook, result = Notebook.open(path=data_file)

    assert result.ok
    assert notebook.count == 0


def test_failed_load_keeps_notes(notebook, data_file):
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text("not a number\n", encoding="utf-8")

    result = notebook.load_from_file()

    assert isinstance(result.error, CorruptFile)
    assert notebook.count == 2


def test_load_reports_skipped(data_file):
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text(
        "2\nshort|line|WORK\nOk|fine|IDEAS|2024-01-01 10:00:00|2024-01-01 10:00:00\n",
        encoding="utf-8",
    )

    notebook, result = Notebook.open(path=data_file)

    assert notebook.count == 1
    assert [s.line_number for s in result.value.skipped] == [2]


def test_stats(notebook):
    stats = notebook.stats()

    assert stats["total_notes"] == 2
    assert stats["capacity"] == 100
    assert stats["by_category"]["Work"] == 1
    assert stats["by_category"]["Reminders"] == 0
