"""
Note entity and category set for Jotter.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from jotter.errors import UnknownCategory, ValidationError

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M"
DETAIL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Reserved by the data file format
FIELD_DELIMITER = "|"


def _now() -> datetime:
    """Current local time (naive, like the data file)."""
    return datetime.now()


class Category(str, Enum):
    """Closed set of note categories. Value is the display label."""

    PERSONAL = "Personal"
    WORK = "Work"
    SCHOOL = "School"
    IDEAS = "Ideas"
    REMINDERS = "Reminders"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def machine_name(self) -> str:
        """Stable name used in the data file."""
        return self.name

    @classmethod
    def from_machine_name(cls, name: str) -> "Category":
        """Exact lookup by machine name, as stored on disk."""
        try:
            return cls[name]
        except KeyError:
            raise UnknownCategory(name) from None

    @classmethod
    def parse(cls, text: "str | Category") -> "Category":
        """Lenient lookup by machine or display name, case-insensitive."""
        if isinstance(text, cls):
            return text
        wanted = str(text).strip().lower()
        for category in cls:
            if wanted in (category.name.lower(), category.value.lower()):
                return category
        raise UnknownCategory(str(text))


def _require_text(field: str, value: str) -> str:
    """Reject blank values and values the data file cannot hold."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field.capitalize()} cannot be empty!")
    if FIELD_DELIMITER in value:
        raise ValidationError(f"{field.capitalize()} cannot contain '{FIELD_DELIMITER}'")
    if field == "title" and ("\n" in value or "\r" in value):
        raise ValidationError("Title must be a single line")
    return value


class Note(BaseModel):
    """A titled, categorised, timestamped text record."""

    title: str = Field(description="Single-line title")
    content: str = Field(description="Multi-line body")
    category: Category = Field(default=Category.PERSONAL)
    created_at: datetime
    modified_at: datetime

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        return _require_text("title", value)

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str) -> str:
        return _require_text("content", value)

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Note":
        if self.modified_at < self.created_at:
            raise ValueError("modified_at is earlier than created_at")
        return self

    @classmethod
    def create(cls, title: str, content: str, category: Category) -> "Note":
        """Create a fresh note; created_at == modified_at."""
        _require_text("title", title)
        _require_text("content", content)
        now = _now()
        return cls(
            title=title,
            content=content,
            category=Category.parse(category),
            created_at=now,
            modified_at=now,
        )

    def set_title(self, text: str) -> None:
        self.title = _require_text("title", text)
        self._touch()

    def set_content(self, text: str) -> None:
        self.content = _require_text("content", text)
        self._touch()

    def set_category(self, category: Category) -> None:
        self.category = Category.parse(category)
        self._touch()

    def _touch(self) -> None:
        # Never let a clock step backwards break modified_at >= created_at
        self.modified_at = max(_now(), self.created_at)

    def render(self) -> str:
        """One-line summary: [Category] title - Created: yyyy-mm-dd HH:MM."""
        created = self.created_at.strftime(DISPLAY_TIME_FORMAT)
        return f"[{self.category.display_name}] {self.title} - Created: {created}"

    def __str__(self) -> str:
        return self.render()
