"""
Flat-file persistence for Jotter.

Format (plain text, one record per line):

    <count>
    <title>|<content, newlines as \\n>|<CATEGORY>|<created>|<modified>

Timestamps use yyyy-mm-dd HH:MM:SS. Records that cannot be decoded are
skipped and reported; the rest of the file still loads.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from jotter.errors import (
    CorruptFile,
    MalformedTimestamp,
    NoteError,
    StorageError,
)
from jotter.models import FIELD_DELIMITER, Category, Note
from jotter.store import MAX_NOTES, NoteStore

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FIELD_COUNT = 5


@dataclass
class SkippedRecord:
    """A data file line that was not loaded."""

    line_number: int
    reason: str
    raw: str


@dataclass
class LoadResult:
    """Notes decoded from a data file plus any records that were dropped."""

    store: NoteStore
    skipped: list[SkippedRecord] = field(default_factory=list)
    declared_count: int = 0

    @property
    def loaded(self) -> int:
        return len(self.store)


def escape_content(content: str) -> str:
    return content.replace("\n", "\\n")


def unescape_content(content: str) -> str:
    return content.replace("\\n", "\n")


def parse_timestamp(value: str) -> datetime:
    try:
        return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedTimestamp(f"Bad timestamp {value!r}: {e}") from e


def encode_note(note: Note) -> str:
    """Encode one note as a single data file line (no trailing newline)."""
    return FIELD_DELIMITER.join([
        note.title,
        escape_content(note.content),
        note.category.machine_name,
        note.created_at.strftime(TIMESTAMP_FORMAT),
        note.modified_at.strftime(TIMESTAMP_FORMAT),
    ])


def decode_note(line: str) -> Note | None:
    """
    Decode one data file line.

    Returns None when the line has fewer than five fields. Extra fields
    beyond the fifth are ignored.
    """
    parts = line.split(FIELD_DELIMITER)
    if len(parts) < FIELD_COUNT:
        return None

    title, content, category_name, created, modified = parts[:FIELD_COUNT]
    category = Category.from_machine_name(category_name.strip())
    created_at = parse_timestamp(created)
    modified_at = parse_timestamp(modified)

    if modified_at < created_at:
        raise MalformedTimestamp(
            f"Modified time {modified.strip()} is before created time {created.strip()}"
        )

    return Note(
        title=title,
        content=unescape_content(content),
        category=category,
        created_at=created_at,
        modified_at=modified_at,
    )


def serialize(store: NoteStore) -> str:
    """Render the whole store in the data file format."""
    lines = [str(len(store))]
    lines.extend(encode_note(note) for note in store.list_all())
    return "\n".join(lines) + "\n"


def deserialize(text: str, capacity: int = MAX_NOTES) -> LoadResult:
    """
    Parse data file text into a fresh store.

    Raises CorruptFile if the count line is not a non-negative integer.
    Individual bad records are skipped and listed on the result.
    """
    lines = [line.rstrip("\r") for line in text.split("\n")]

    if not lines or not lines[0].strip():
        return LoadResult(store=NoteStore(capacity=capacity))

    header = lines[0].strip()
    try:
        declared = int(header)
    except ValueError:
        raise CorruptFile(f"Expected note count on first line, got {header!r}") from None
    if declared < 0:
        raise CorruptFile(f"Negative note count: {declared}")

    result = LoadResult(store=NoteStore(capacity=capacity), declared_count=declared)

    records = lines[1:]
    if records and records[-1] == "":
        records.pop()  # final newline

    for line_number, raw in enumerate(records[:declared], start=2):
        try:
            note = decode_note(raw)
            if note is None:
                reason = f"expected {FIELD_COUNT} fields, found {len(raw.split(FIELD_DELIMITER))}"
            else:
                result.store.add(note)
                continue
        except NoteError as e:
            reason = str(e)
        except PydanticValidationError as e:
            reason = f"invalid note: {e.errors()[0]['msg']}"

        logger.warning("Skipping record on line %d: %s", line_number, reason)
        result.skipped.append(SkippedRecord(line_number=line_number, reason=reason, raw=raw))

    if len(records) < declared:
        logger.warning(
            "Data file declares %d notes but holds only %d records", declared, len(records)
        )

    return result


def save_to_file(store: NoteStore, path: Path) -> int:
    """
    Overwrite path with the store contents. Returns notes written.

    Not atomic: a crash mid-write can leave a truncated file.
    """
    text = serialize(store)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps a \r inside content from turning into a line break
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise StorageError(f"Error saving notes to {path}: {e}") from e

    logger.info("Saved %d note(s) to %s", len(store), path)
    return len(store)


def load_from_file(path: Path, capacity: int = MAX_NOTES) -> LoadResult:
    """Load notes from path. A missing file yields an empty store."""
    if not path.exists():
        logger.info("No data file at %s, starting empty", path)
        return LoadResult(store=NoteStore(capacity=capacity))

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Error loading notes from {path}: {e}") from e

    result = deserialize(text, capacity=capacity)
    logger.info(
        "Loaded %d note(s) from %s (%d skipped)", result.loaded, path, len(result.skipped)
    )
    return result
