"""
In-memory note store for Jotter.

Ordered, bounded collection of notes. Numbering is 1-based and follows
insertion order; removing a note shifts later notes down by one.
"""

import logging
import re
from typing import Callable, Iterable

from jotter.errors import CapacityExceeded, IndexOutOfRange, InvalidPattern
from jotter.models import Category, Note

logger = logging.getLogger(__name__)

MAX_NOTES = 100


class NoteStore:
    """Bounded, ordered collection of notes with 1-based access."""

    def __init__(self, notes: Iterable[Note] = (), capacity: int = MAX_NOTES):
        if capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._notes: list[Note] = []
        for note in notes:
            self.add(note)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return len(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def is_full(self) -> bool:
        return len(self._notes) >= self._capacity

    def _check_index(self, index: int) -> int:
        """Validate a 1-based index and return the list position."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRange(index, len(self._notes))
        if index < 1 or index > len(self._notes):
            raise IndexOutOfRange(index, len(self._notes))
        return index - 1

    def add(self, note: Note) -> int:
        """Append a note. Returns the new count (= the note's number)."""
        if self.is_full():
            raise CapacityExceeded(self._capacity)
        self._notes.append(note.model_copy(deep=True))
        return len(self._notes)

    def get(self, index: int) -> Note:
        """Return a copy of the note at a 1-based index."""
        return self._notes[self._check_index(index)].model_copy(deep=True)

    def update(self, index: int, mutator: Callable[[Note], None]) -> Note:
        """
        Apply mutator to the note at index.

        The mutator works on a copy; the stored note is replaced only if
        it returns without raising.
        """
        position = self._check_index(index)
        draft = self._notes[position].model_copy(deep=True)
        mutator(draft)
        self._notes[position] = draft
        return draft.model_copy(deep=True)

    def remove(self, index: int) -> Note:
        """Remove and return the note at index, compacting the sequence."""
        position = self._check_index(index)
        return self._notes.pop(position)

    def list_all(self) -> list[Note]:
        """All notes in insertion order (copies)."""
        return [note.model_copy(deep=True) for note in self._notes]

    def search(self, keyword: str, literal_fallback: bool = False) -> list[tuple[int, Note]]:
        """
        Find notes whose title or content matches keyword.

        The keyword is a case-insensitive regular expression. A malformed
        pattern raises InvalidPattern unless literal_fallback is set, in
        which case it is matched as a plain substring.
        """
        try:
            pattern = re.compile(keyword, re.IGNORECASE)
        except re.error as e:
            if not literal_fallback:
                raise InvalidPattern(keyword, str(e)) from e
            logger.debug("Treating malformed pattern %r as literal text", keyword)
            pattern = re.compile(re.escape(keyword), re.IGNORECASE)

        return [
            (number, note.model_copy(deep=True))
            for number, note in enumerate(self._notes, start=1)
            if pattern.search(note.title) or pattern.search(note.content)
        ]

    def filter_by_category(self, category: Category) -> list[tuple[int, Note]]:
        """Notes in exactly this category, in insertion order."""
        return [
            (number, note.model_copy(deep=True))
            for number, note in enumerate(self._notes, start=1)
            if note.category == category
        ]

    def count_by_category(self) -> dict[Category, int]:
        """Number of notes per category (every category present)."""
        counts = {category: 0 for category in Category}
        for note in self._notes:
            counts[note.category] += 1
        return counts
