"""Tests for the interactive menu, driven with scripted input."""

import pytest

from jotter.menu import Menu
from jotter.models import Category
from jotter.notebook import Notebook


class Console:
    """Feeds scripted answers to Menu and records everything printed."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.lines = []

    def input(self, prompt=""):
        self.lines.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def output(self, text=""):
        self.lines.append(text)

    @property
    def text(self):
        return "\n".join(self.lines)


def run_menu(data_file, answers):
    console = Console(answers)
    notebook = Notebook(path=data_file)
    menu = Menu(notebook, input_fn=console.input, output=console.output, pause=False)
    menu.run()
    return notebook, console


def test_create_view_and_exit_saves(data_file, clock):
    notebook, console = run_menu(data_file, [
        "1", "Team Meeting", "Agenda", "budget", "END", "2",
        "2",
        "9",
    ])

    assert "Note created successfully!" in console.text
    assert "[Work] Team Meeting - Created: 2024-03-15 09:30" in console.text
    note = notebook.get_note_detail(1).value
    assert note.content == "Agenda\nbudget\n"
    assert data_file.read_text(encoding="utf-8").startswith("1\nTeam Meeting|Agenda\\nbudget\\n|WORK|")


def test_invalid_category_defaults_to_personal(data_file, clock):
    notebook, console = run_menu(data_file, ["1", "Title", "Body", "END", "42", "9"])

    assert "Defaulting to Personal" in console.text
    assert notebook.get_note_detail(1).value.category is Category.PERSONAL


def test_non_numeric_choice_reprompts(data_file):
    _, console = run_menu(data_file, ["abc", "9"])

    assert "Invalid input! Please enter a number." in console.text
    assert "Thank you for using Jotter!" in console.text


def test_unknown_menu_choice(data_file):
    _, console = run_menu(data_file, ["12", "9"])

    assert "Invalid choice! Please try again." in console.text


def test_empty_title_rejected(data_file):
    notebook, console = run_menu(data_file, ["1", "   ", "9"])

    assert "Title cannot be empty!" in console.text
    assert notebook.count == 0


@pytest.fixture
def saved_notes(data_file, clock):
    notebook = Notebook(path=data_file)
    notebook.create_note("Team Meeting", "Agenda\n", Category.WORK)
    notebook.create_note("Lunch", "Sandwich\n", Category.PERSONAL)
    notebook.save_to_file()
    return data_file


def test_loads_existing_notes(saved_notes):
    _, console = run_menu(saved_notes, ["9"])

    assert "Loaded 2 note(s) from file." in console.text


def test_view_details(saved_notes):
    _, console = run_menu(saved_notes, ["3", "2", "9"])

    assert "Title: Lunch" in console.text
    assert "Category: Personal" in console.text
    assert "Sandwich" in console.text


def test_view_details_bad_number(saved_notes):
    _, console = run_menu(saved_notes, ["3", "7", "9"])

    assert "Invalid note number!" in console.text


def test_edit_title(saved_notes, clock):
    clock.advance(minutes=1)
    notebook, console = run_menu(saved_notes, ["4", "1", "1", "Retro", "9"])

    assert "Title updated successfully!" in console.text
    assert notebook.get_note_detail(1).value.title == "Retro"


def test_edit_category(saved_notes, clock):
    notebook, _ = run_menu(saved_notes, ["4", "2", "3", "4", "9"])

    assert notebook.get_note_detail(2).value.category is Category.IDEAS


def test_edit_blank_title_ignored(saved_notes):
    notebook, console = run_menu(saved_notes, ["4", "1", "1", "  ", "9"])

    assert "updated successfully" not in console.text
    assert notebook.get_note_detail(1).value.title == "Team Meeting"


def test_delete_requires_yes(saved_notes):
    notebook, console = run_menu(saved_notes, ["5", "1", "no", "9"])

    assert "Deletion cancelled." in console.text
    assert notebook.count == 2


def test_delete_confirmed(saved_notes):
    notebook, console = run_menu(saved_notes, ["5", "1", "YES", "9"])

    assert "Note deleted successfully!" in console.text
    assert [n.title for n in notebook.list_notes()] == ["Lunch"]
    assert data_file_count(saved_notes) == 1


def data_file_count(path):
    return int(path.read_text(encoding="utf-8").splitlines()[0])


def test_search(saved_notes):
    _, console = run_menu(saved_notes, ["6", "meet", "6", "zebra", "6", "(", "9"])

    assert "1. [Work] Team Meeting" in console.text
    assert "No notes found matching 'zebra'" in console.text
    assert "Invalid search pattern" in console.text


def test_filter(saved_notes):
    _, console = run_menu(saved_notes, ["7", "5", "7", "1", "9"])

    assert "No notes in this category." in console.text
    assert "2. [Personal] Lunch" in console.text


def test_actions_on_empty_notebook(data_file):
    _, console = run_menu(data_file, ["3", "6", "7", "9"])

    assert console.text.count("No notes available.") == 3


def test_end_of_input_saves(data_file, clock):
    notebook, console = run_menu(data_file, ["1", "Title", "Body", "END", "1"])

    assert "Thank you for using Jotter!" in console.text
    assert data_file_count(data_file) == 1


def test_corrupt_file_reported(data_file):
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text("oops\n", encoding="utf-8")

    _, console = run_menu(data_file, [])

    assert "Error loading notes" in console.text
    assert data_file.read_text(encoding="utf-8") == "oops\n"


def test_exit_after_failed_load_keeps_file(data_file, clock):
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text("oops\n", encoding="utf-8")

    _, console = run_menu(data_file, ["1", "Title", "Body", "END", "1", "9"])

    assert "Exit will not save automatically" in console.text
    assert "left unchanged" in console.text
    assert data_file.read_text(encoding="utf-8") == "oops\n"


def test_explicit_save_after_failed_load(data_file, clock):
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text("oops\n", encoding="utf-8")

    _, console = run_menu(data_file, ["8", "1", "Title", "Body", "END", "1"])

    assert "Notes saved successfully!" in console.text
    assert data_file_count(data_file) == 1
