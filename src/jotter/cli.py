"""
CLI for Jotter.

Minimal CLI using stdlib argument handling for fast startup.
Subcommands are imported lazily to avoid startup overhead.

Usage:
    jotter                          # Interactive menu
    jotter add "Title" "Content"    # Create a note
    jotter --help                   # Show help
"""

import sys


def print_help() -> None:
    """Print help message."""
    print("""jotter - local-first note manager

Usage:
    jotter                        Open the interactive menu

Commands:
    jotter menu                   Open the interactive menu
    jotter list [--category C]    List notes (optionally one category)
    jotter show <n>               Show note number n in full
    jotter add <title> <content>  Create a note (--category C, default personal)
    jotter edit <n> <field> <v>   Change title, content or category of note n
    jotter delete <n> [--yes]     Delete note n (asks unless --yes)
    jotter find <keyword>         Regex search titles and content (--literal)
    jotter categories             Show the available categories
    jotter stats                  Show note statistics
    jotter health                 Check data file and config

Options:
    jotter --help, -h             Show this help
    jotter --version, -v          Show version

Examples:
    jotter add "Team Meeting" "Agenda: budget review" --category work
    jotter list --category work
    jotter find "meet(ing)?"
    jotter edit 1 category ideas
    jotter delete 2 --yes""")


def print_version() -> None:
    """Print version."""
    from jotter import __version__
    print(f"jotter {__version__}")


def pop_option(args: list[str], *names: str, flag: bool = False) -> str | bool | None:
    """
    Remove an option (and its value) from args in place.

    Returns the value, True for a present flag, or None/False if absent.
    """
    for i, arg in enumerate(args):
        if arg in names:
            if flag:
                del args[i]
                return True
            if i + 1 < len(args):
                value = args[i + 1]
                del args[i:i + 2]
                return value
            del args[i]
            return None
    return False if flag else None


def parse_number(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        print(f"Error: '{text}' is not a note number", file=sys.stderr)
        return None


def open_notebook():
    """Load the notebook; reports load problems and returns None on failure."""
    from jotter.notebook import Notebook

    notebook, result = Notebook.open()
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return None
    for skipped in result.value.skipped:
        print(f"Warning: skipped line {skipped.line_number}: {skipped.reason}", file=sys.stderr)
    return notebook


def save(notebook) -> int:
    result = notebook.save_to_file()
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    return 0


def cmd_menu() -> int:
    """Run the interactive menu."""
    from jotter.config import load_config
    from jotter.menu import Menu
    from jotter.notebook import Notebook

    config = load_config()
    clear = bool(config.get("display", {}).get("clear_screen", True)) and sys.stdout.isatty()
    menu = Menu(Notebook(config=config), clear_screen=clear)
    return menu.run()


def cmd_list(args: list[str]) -> int:
    """List notes, optionally filtered by category."""
    from jotter.display import format_note_list

    category = pop_option(args, "--category", "-c")

    notebook = open_notebook()
    if notebook is None:
        return 1

    if category:
        result = notebook.filter_notes(category)
        if not result.ok:
            print(f"Error: {result.error}", file=sys.stderr)
            return 1
        print(format_note_list(
            result.value,
            header=f"Notes in category: {category.title()}",
            empty_message="No notes in this category.",
        ))
        return 0

    print(format_note_list(enumerate(notebook.list_notes(), start=1)))
    return 0


def cmd_show(args: list[str]) -> int:
    """Show one note in full."""
    from jotter.display import format_note_detail

    if not args:
        print("Usage: jotter show <n>", file=sys.stderr)
        return 1

    number = parse_number(args[0])
    if number is None:
        return 1

    notebook = open_notebook()
    if notebook is None:
        return 1

    result = notebook.get_note_detail(number)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print(format_note_detail(result.value))
    return 0


def cmd_add(args: list[str]) -> int:
    """Create a note."""
    category = pop_option(args, "--category", "-c") or "personal"

    if len(args) < 2:
        print("Usage: jotter add <title> <content> [--category C]", file=sys.stderr)
        return 1

    title = args[0]
    content = " ".join(args[1:])

    notebook = open_notebook()
    if notebook is None:
        return 1

    result = notebook.create_note(title, content, category)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if save(notebook):
        return 1
    print(f"Created note {result.value}: {title}")
    return 0


def cmd_edit(args: list[str]) -> int:
    """Change one field of a note."""
    if len(args) < 3:
        print("Usage: jotter edit <n> <title|content|category> <value>", file=sys.stderr)
        return 1

    number = parse_number(args[0])
    if number is None:
        return 1
    field = args[1]
    value = " ".join(args[2:])

    notebook = open_notebook()
    if notebook is None:
        return 1

    result = notebook.edit_note(number, field, value)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if save(notebook):
        return 1
    print(f"Updated note {number}: {result.value.render()}")
    return 0


def cmd_delete(args: list[str]) -> int:
    """Delete a note after confirmation."""
    assume_yes = pop_option(args, "--yes", "-y", flag=True)

    if not args:
        print("Usage: jotter delete <n> [--yes]", file=sys.stderr)
        return 1

    number = parse_number(args[0])
    if number is None:
        return 1

    notebook = open_notebook()
    if notebook is None:
        return 1

    detail = notebook.get_note_detail(number)
    if not detail.ok:
        print(f"Error: {detail.error}", file=sys.stderr)
        return 1

    if not assume_yes:
        print(detail.value.render())
        try:
            confirm = input("Are you sure you want to delete this note? (yes/no): ")
        except EOFError:
            confirm = ""
        if confirm.strip().lower() != "yes":
            print("Deletion cancelled.")
            return 0

    result = notebook.delete_note(number)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if save(notebook):
        return 1
    print(f"Deleted: {result.value.title}")
    return 0


def cmd_find(args: list[str]) -> int:
    """Search notes by keyword."""
    from jotter.display import format_note_list

    literal = pop_option(args, "--literal", "-l", flag=True)

    if not args:
        print("Usage: jotter find <keyword> [--literal]", file=sys.stderr)
        return 1

    keyword = " ".join(args)

    notebook = open_notebook()
    if notebook is None:
        return 1

    result = notebook.search_notes(keyword, literal=True if literal else None)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print(format_note_list(
        result.value,
        header=f"SEARCH: {keyword}",
        empty_message=f"No notes found matching '{keyword}'",
    ))
    return 0


def cmd_categories() -> int:
    """Show the category set."""
    from jotter.models import Category

    for category in Category:
        print(f"  {category.machine_name:10}  {category.display_name}")
    return 0


def cmd_stats() -> int:
    """Show note statistics."""
    from jotter.display import format_stats

    notebook = open_notebook()
    if notebook is None:
        return 1

    print(format_stats(notebook.stats()))
    return 0


def cmd_health() -> int:
    """Show health report."""
    from jotter.health import format_health_report, run_health_check

    checks = run_health_check()
    print(format_health_report(checks))
    return 1 if any(status == "✗" for status, _ in checks.values()) else 0


def main() -> int:
    """Main entry point."""
    args = sys.argv[1:]

    try:
        from jotter.config import setup_logging
        setup_logging()
    except Exception as e:
        print(f"Error: could not read config: {e}", file=sys.stderr)
        return 1

    if not args:
        return cmd_menu()

    # Handle flags and commands
    first_arg = args[0]
    rest = args[1:]

    if first_arg in ("--help", "-h", "help"):
        print_help()
        return 0

    if first_arg in ("--version", "-v", "version"):
        print_version()
        return 0

    commands = {
        "menu": lambda: cmd_menu(),
        "list": lambda: cmd_list(rest),
        "show": lambda: cmd_show(rest),
        "add": lambda: cmd_add(rest),
        "edit": lambda: cmd_edit(rest),
        "delete": lambda: cmd_delete(rest),
        "find": lambda: cmd_find(rest),
        "categories": lambda: cmd_categories(),
        "stats": lambda: cmd_stats(),
        "health": lambda: cmd_health(),
    }

    command = commands.get(first_arg)
    if command is None:
        print(f"Error: Unknown command '{first_arg}'", file=sys.stderr)
        print("Run 'jotter --help' for usage.", file=sys.stderr)
        return 1

    return command()


if __name__ == "__main__":
    sys.exit(main())
