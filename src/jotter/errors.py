"""
Error taxonomy for Jotter.

Every failure the core can signal is a NoteError. The Notebook facade
catches these and hands them back as Result values.
"""


class NoteError(Exception):
    """Base class for all recoverable note errors."""


class ValidationError(NoteError, ValueError):
    """A title, content, field name or keyword was rejected."""


class IndexOutOfRange(NoteError, IndexError):
    """A 1-based note number outside [1, count]."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        if count == 0:
            message = f"Invalid note number {index}: no notes available"
        else:
            message = f"Invalid note number {index}: expected 1-{count}"
        super().__init__(message)


class CapacityExceeded(NoteError):
    """The store already holds its maximum number of notes."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Note storage is full ({capacity} notes)")


class InvalidPattern(NoteError):
    """A search keyword is not a well-formed regular expression."""

    def __init__(self, keyword: str, reason: str):
        self.keyword = keyword
        super().__init__(f"Invalid search pattern {keyword!r}: {reason}")


class UnknownCategory(NoteError):
    """A category name outside the closed set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown category: {name!r}")


class MalformedTimestamp(NoteError):
    """A persisted timestamp that does not parse or breaks ordering."""


class CorruptFile(NoteError):
    """The data file header is missing or is not a note count."""


class StorageError(NoteError):
    """Reading or writing the data file failed."""
