"""
Display helpers for Jotter.

Terminal renderings of note lists, note details and statistics.
"""

import os
from typing import Any, Iterable

from jotter.models import DETAIL_TIME_FORMAT, Category, Note

RULE_WIDTH = 50


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"

    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_MAGENTA = "\033[95m"
    BRIGHT_CYAN = "\033[96m"
    BRIGHT_GREEN = "\033[92m"

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        # Disable if NO_COLOR is set
        if os.environ.get("NO_COLOR"):
            return False
        return True


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


CATEGORY_COLORS = {
    Category.PERSONAL: Colors.BRIGHT_CYAN,
    Category.WORK: Colors.BRIGHT_YELLOW,
    Category.SCHOOL: Colors.BRIGHT_BLUE,
    Category.IDEAS: Colors.BRIGHT_MAGENTA,
    Category.REMINDERS: Colors.BRIGHT_GREEN,
}


def success(message: str) -> str:
    return c(f"✓ {message}", Colors.GREEN)


def failure(message: str) -> str:
    return c(f"✗ {message}", Colors.RED)


def banner(title: str) -> str:
    """Centered heading between two rules."""
    rule = "=" * RULE_WIDTH
    return "\n".join([rule, title.center(RULE_WIDTH).rstrip(), rule])


def format_note_line(number: int, note: Note) -> str:
    """'  3. [Work] Title - Created: ...' with the category coloured."""
    seq_str = c(f"{number:>3}.", Colors.BOLD, Colors.WHITE)
    summary = note.render()
    label = f"[{note.category.display_name}]"
    summary = summary.replace(label, c(label, CATEGORY_COLORS[note.category]), 1)
    return f"{seq_str} {summary}"


def format_note_list(
    entries: Iterable[tuple[int, Note]],
    header: str = "ALL NOTES",
    empty_message: str = "No notes available.",
) -> str:
    """Numbered list of notes under a banner."""
    entries = list(entries)
    lines = [c(banner(header), Colors.BOLD, Colors.BLUE)]

    if not entries:
        lines.append(c(f"  {empty_message}", Colors.DIM))
        return "\n".join(lines)

    for number, note in entries:
        lines.append(format_note_line(number, note))

    return "\n".join(lines)


def format_note_detail(note: Note) -> str:
    """Full view of one note, content included."""
    lines = [
        c(banner("NOTE DETAILS"), Colors.BOLD, Colors.BLUE),
        f"Title: {note.title}",
        f"Category: {c(note.category.display_name, CATEGORY_COLORS[note.category])}",
        f"Created: {note.created_at.strftime(DETAIL_TIME_FORMAT)}",
        f"Modified: {note.modified_at.strftime(DETAIL_TIME_FORMAT)}",
        "-" * RULE_WIDTH,
        "Content:",
        note.content.rstrip("\n"),
        "=" * RULE_WIDTH,
    ]
    return "\n".join(lines)


def format_categories() -> str:
    """Numbered category menu, 1-based."""
    return "\n".join(
        f"  {number}. {category.display_name}"
        for number, category in enumerate(Category, start=1)
    )


def format_stats(stats: dict[str, Any]) -> str:
    lines = ["Jotter Statistics", "-" * 30]
    lines.append(f"Total notes: {stats['total_notes']} / {stats['capacity']}")
    lines.append("\nBy category:")
    for name, count in stats.get("by_category", {}).items():
        lines.append(f"  {name}: {count}")
    lines.append(f"\nData file: {stats['data_file']}")
    return "\n".join(lines)
