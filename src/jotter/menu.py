"""
Interactive text menu for Jotter.

Numbered main menu over a Notebook. All prompting, confirmation and
screen handling lives here; every change goes through the Notebook.
"""

import logging
import sys
from typing import Callable

from jotter.display import (
    banner,
    failure,
    format_categories,
    format_note_detail,
    format_note_list,
    success,
)
from jotter.models import Category
from jotter.notebook import Notebook, NoteField

logger = logging.getLogger(__name__)

CONTENT_TERMINATOR = "END"
CLEAR_SEQUENCE = "\033[H\033[2J"

MAIN_MENU = [
    "Create New Note",
    "View All Notes",
    "View Note Details",
    "Edit Note",
    "Delete Note",
    "Search Notes",
    "Filter by Category",
    "Save Notes",
    "Exit",
]

EDIT_MENU = ["Edit Title", "Edit Content", "Edit Category", "Cancel"]


class Menu:
    """Console menu loop. Input and output are injectable for tests."""

    def __init__(
        self,
        notebook: Notebook,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        clear_screen: bool = False,
        pause: bool = True,
    ):
        self.notebook = notebook
        self.input = input_fn
        self.output = output
        self.clear_screen = clear_screen
        self.pause = pause
        self.running = False
        self.load_failed = False

    # Console helpers

    def clear(self) -> None:
        if self.clear_screen:
            sys.stdout.write(CLEAR_SEQUENCE)
            sys.stdout.flush()

    def wait(self) -> None:
        if self.pause:
            self.input("\nPress Enter to continue...")

    def read_int(self, prompt: str) -> int:
        """Prompt until the answer is a whole number."""
        while True:
            answer = self.input(prompt).strip()
            try:
                return int(answer)
            except ValueError:
                self.output(failure("Invalid input! Please enter a number."))

    def read_content(self) -> str:
        """Read lines until END; each kept line ends with a newline."""
        lines = []
        while (line := self.input("")) != CONTENT_TERMINATOR:
            lines.append(line + "\n")
        return "".join(lines)

    def choose_category(self) -> Category | None:
        self.output(format_categories())
        choice = self.read_int("Enter category number: ")
        categories = list(Category)
        if 1 <= choice <= len(categories):
            return categories[choice - 1]
        return None

    # Main loop

    def run(self) -> int:
        self.clear()
        self.output(banner("WELCOME TO JOTTER"))

        result = self.notebook.load_from_file()
        if result.ok:
            loaded = result.value
            if loaded.loaded:
                self.output(success(f"Loaded {loaded.loaded} note(s) from file."))
            for skipped in loaded.skipped:
                self.output(failure(f"Skipped line {skipped.line_number}: {skipped.reason}"))
        else:
            self.load_failed = True
            self.output(failure(f"Error loading notes: {result.error}"))
            self.output(failure("Exit will not save automatically; choose Save Notes to overwrite the file."))
        self.wait()

        self.running = True
        try:
            while self.running:
                self.clear()
                self.show_main_menu()
                choice = self.read_int("Enter your choice: ")
                self.clear()
                self.dispatch(choice)
        except (EOFError, KeyboardInterrupt):
            self.output("")
            self.exit()

        return 0

    def show_main_menu(self) -> None:
        self.output("\n" + banner("MAIN MENU"))
        for number, label in enumerate(MAIN_MENU, start=1):
            self.output(f"  {number}. {label}")
        self.output("=" * 50)
        self.output(f"Total Notes: {self.notebook.count}")
        self.output("=" * 50)

    def dispatch(self, choice: int) -> None:
        actions = {
            1: self.create_note,
            2: self.view_all,
            3: self.view_details,
            4: self.edit_note,
            5: self.delete_note,
            6: self.search_notes,
            7: self.filter_notes,
            8: self.save,
        }
        if choice == 9:
            self.exit()
            return

        action = actions.get(choice)
        if action is None:
            self.output(failure("Invalid choice! Please try again."))
        else:
            action()
        self.wait()

    # Actions

    def create_note(self) -> None:
        self.output("\n" + banner("CREATE NEW NOTE"))
        if self.notebook.store.is_full():
            self.output(failure("Note storage is full! Cannot create more notes."))
            return

        title = self.input("Enter note title: ")
        if not title.strip():
            self.output(failure("Title cannot be empty!"))
            return

        self.output(f"\nEnter note content (type '{CONTENT_TERMINATOR}' on a new line to finish):")
        content = self.read_content()
        if not content.strip():
            self.output(failure("Content cannot be empty!"))
            return

        self.output("\nSelect Category:")
        category = self.choose_category()
        if category is None:
            self.output(failure("Invalid category! Defaulting to Personal."))
            category = Category.PERSONAL

        result = self.notebook.create_note(title, content, category)
        if not result.ok:
            self.output(failure(str(result.error)))
            return

        self.output("\n" + success("Note created successfully!"))
        self.output(f"  Title: {title}")
        self.output(f"  Category: {category.display_name}")

    def view_all(self) -> None:
        notes = self.notebook.list_notes()
        self.output("\n" + format_note_list(enumerate(notes, start=1)))

    def _select(self, verb: str) -> int | None:
        """Show all notes and ask for a valid note number."""
        if self.notebook.count == 0:
            self.output("\n" + failure("No notes available."))
            return None

        self.view_all()
        number = self.read_int(f"\nEnter note number to {verb}: ")
        if not 1 <= number <= self.notebook.count:
            self.output(failure("Invalid note number!"))
            return None
        return number

    def view_details(self) -> None:
        number = self._select("view")
        if number is None:
            return
        result = self.notebook.get_note_detail(number)
        if result.ok:
            self.output("\n" + format_note_detail(result.value))
        else:
            self.output(failure(str(result.error)))

    def edit_note(self) -> None:
        number = self._select("edit")
        if number is None:
            return

        self.output("\n" + banner("EDIT NOTE"))
        for option, label in enumerate(EDIT_MENU, start=1):
            self.output(f"  {option}. {label}")
        self.output("=" * 50)
        choice = self.read_int("Enter your choice: ")

        if choice == 1:
            value = self.input("Enter new title: ")
            field = NoteField.TITLE
        elif choice == 2:
            self.output(f"Enter new content (type '{CONTENT_TERMINATOR}' on a new line to finish):")
            value = self.read_content()
            field = NoteField.CONTENT
        elif choice == 3:
            self.output("Select new category:")
            value = self.choose_category()
            field = NoteField.CATEGORY
        elif choice == 4:
            self.output("Edit cancelled.")
            return
        else:
            self.output(failure("Invalid choice!"))
            return

        # Blank answers leave the note as it was
        if value is None or (isinstance(value, str) and not value.strip()):
            return

        result = self.notebook.edit_note(number, field, value)
        if result.ok:
            self.output(success(f"{field.value.capitalize()} updated successfully!"))
        else:
            self.output(failure(str(result.error)))

    def delete_note(self) -> None:
        number = self._select("delete")
        if number is None:
            return

        confirm = self.input("Are you sure you want to delete this note? (yes/no): ")
        if confirm.strip().lower() != "yes":
            self.output("Deletion cancelled.")
            return

        result = self.notebook.delete_note(number)
        if result.ok:
            self.output(success("Note deleted successfully!"))
        else:
            self.output(failure(str(result.error)))

    def search_notes(self) -> None:
        if self.notebook.count == 0:
            self.output("\n" + failure("No notes available."))
            return

        keyword = self.input("\nEnter search keyword: ")
        result = self.notebook.search_notes(keyword)
        if not result.ok:
            self.output(failure(str(result.error)))
            return

        self.output("\n" + format_note_list(
            result.value,
            header="SEARCH RESULTS",
            empty_message=f"No notes found matching '{keyword}'",
        ))

    def filter_notes(self) -> None:
        if self.notebook.count == 0:
            self.output("\n" + failure("No notes available."))
            return

        self.output("\n" + banner("FILTER BY CATEGORY"))
        category = self.choose_category()
        if category is None:
            self.output(failure("Invalid category!"))
            return

        result = self.notebook.filter_notes(category)
        self.output("\n" + format_note_list(
            result.value or [],
            header=f"Notes in category: {category.display_name}",
            empty_message="No notes in this category.",
        ))

    def save(self) -> bool:
        result = self.notebook.save_to_file()
        if result.ok:
            self.output("\n" + success("Notes saved successfully!"))
            self.load_failed = False
            return True
        self.output(failure(str(result.error)))
        return False

    def exit(self) -> None:
        self.clear()
        if self.load_failed:
            # Keep the unreadable file for the user to repair
            self.output(failure(f"Notes not saved; {self.notebook.path} left unchanged."))
        else:
            self.save()
        self.output("\n" + success("Thank you for using Jotter!"))
        self.running = False
