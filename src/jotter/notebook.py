"""
Notebook facade for Jotter.

The single entry point used by the menu, the CLI and the MCP server.
Operations never raise NoteError: each returns a Result holding either
a value or the error, so callers can report and retry with the
notebook unchanged.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

from jotter.codec import LoadResult, load_from_file, save_to_file
from jotter.config import DEFAULT_MAX_NOTES, get_data_file_path, load_config
from jotter.errors import CapacityExceeded, NoteError, ValidationError
from jotter.models import Category, Note
from jotter.store import NoteStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a notebook operation."""

    value: T | None = None
    error: NoteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class NoteField(str, Enum):
    """Editable note fields."""

    TITLE = "title"
    CONTENT = "content"
    CATEGORY = "category"

    @classmethod
    def parse(cls, text: "str | NoteField") -> "NoteField":
        if isinstance(text, cls):
            return text
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValidationError(f"Unknown field {text!r} (expected one of: {choices})") from None


def _attempt(operation: Callable[[], T]) -> Result[T]:
    try:
        return Result(value=operation())
    except NoteError as e:
        logger.debug("Operation failed: %s", e)
        return Result(error=e)


class Notebook:
    """Owns one NoteStore and the file it is persisted to."""

    def __init__(
        self,
        path: Path | None = None,
        config: dict[str, Any] | None = None,
        store: NoteStore | None = None,
    ):
        self.config = config or load_config()
        self.path = path or get_data_file_path(self.config)
        self.capacity = int(self.config.get("notes", {}).get("max_notes", DEFAULT_MAX_NOTES))
        self.literal_fallback = bool(
            self.config.get("search", {}).get("literal_fallback", False)
        )
        self.store = store if store is not None else NoteStore(capacity=self.capacity)

    @classmethod
    def open(
        cls, path: Path | None = None, config: dict[str, Any] | None = None
    ) -> tuple["Notebook", Result[LoadResult]]:
        """Create a notebook and load its data file."""
        notebook = cls(path=path, config=config)
        return notebook, notebook.load_from_file()

    @property
    def count(self) -> int:
        return len(self.store)

    def create_note(self, title: str, content: str, category: Category | str) -> Result[int]:
        """Create and append a note. Value is its 1-based number."""

        def create() -> int:
            if self.store.is_full():
                raise CapacityExceeded(self.store.capacity)
            note = Note.create(title, content, Category.parse(category))
            number = self.store.add(note)
            logger.info("Created note %d: %s", number, note.title)
            return number

        return _attempt(create)

    def list_notes(self) -> list[Note]:
        return self.store.list_all()

    def get_note_detail(self, index: int) -> Result[Note]:
        return _attempt(lambda: self.store.get(index))

    def edit_note(self, index: int, field: NoteField | str, value: Any) -> Result[Note]:
        """Change one field of the note at index."""

        def edit() -> Note:
            target = NoteField.parse(field)
            if target is NoteField.CATEGORY:
                new_value = Category.parse(value)
            else:
                new_value = value

            def mutate(note: Note) -> None:
                getattr(note, f"set_{target.value}")(new_value)

            note = self.store.update(index, mutate)
            logger.info("Edited %s of note %d", target.value, index)
            return note

        return _attempt(edit)

    def delete_note(self, index: int) -> Result[Note]:
        """Remove the note at index. Callers confirm before calling."""

        def delete() -> Note:
            note = self.store.remove(index)
            logger.info("Deleted note %d: %s", index, note.title)
            return note

        return _attempt(delete)

    def search_notes(
        self, keyword: str, literal: bool | None = None
    ) -> Result[list[tuple[int, Note]]]:
        """Regex search over titles and contents."""

        def search() -> list[tuple[int, Note]]:
            if not keyword or not keyword.strip():
                raise ValidationError("Search keyword cannot be empty!")
            fallback = self.literal_fallback if literal is None else literal
            return self.store.search(keyword, literal_fallback=fallback)

        return _attempt(search)

    def filter_notes(self, category: Category | str) -> Result[list[tuple[int, Note]]]:
        return _attempt(lambda: self.store.filter_by_category(Category.parse(category)))

    def save_to_file(self, path: Path | None = None) -> Result[int]:
        """Overwrite the data file. Value is the number of notes written."""
        return _attempt(lambda: save_to_file(self.store, path or self.path))

    def load_from_file(self, path: Path | None = None) -> Result[LoadResult]:
        """
        Replace the in-memory notes with the file contents.

        On failure the current notes are kept.
        """

        def load() -> LoadResult:
            result = load_from_file(path or self.path, capacity=self.capacity)
            self.store = result.store
            return result

        return _attempt(load)

    def stats(self) -> dict[str, Any]:
        by_category = self.store.count_by_category()
        return {
            "total_notes": len(self.store),
            "capacity": self.store.capacity,
            "by_category": {c.display_name: n for c, n in by_category.items()},
            "data_file": str(self.path),
        }
