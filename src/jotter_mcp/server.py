"""
MCP Server for Jotter.

Exposes the notebook operations as tools over stdio.
"""

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from jotter.display import format_note_detail
from jotter.models import Category
from jotter.notebook import Notebook

# Create MCP server
server = Server("jotter")

CATEGORY_NAMES = [category.machine_name for category in Category]


def text(message: str) -> list[TextContent]:
    return [TextContent(type="text", text=message)]


def format_entries(entries, empty_message: str) -> str:
    """Plain (uncoloured) numbered note list."""
    if not entries:
        return empty_message
    return "\n".join(f"{number}. {note.render()}" for number, note in entries)


def open_notebook() -> tuple[Notebook | None, str]:
    """Load the notebook; second item is an error message on failure."""
    notebook, result = Notebook.open()
    if not result.ok:
        return None, f"Error: {result.error}"
    return notebook, ""


def save(notebook: Notebook) -> str:
    result = notebook.save_to_file()
    return "" if result.ok else f"Error: {result.error}"


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="jotter_create",
            description="Create a note with a title, content and category.",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Single-line title"},
                    "content": {"type": "string", "description": "Note body"},
                    "category": {
                        "type": "string",
                        "description": "Category (default: PERSONAL)",
                        "enum": CATEGORY_NAMES,
                        "default": "PERSONAL",
                    },
                },
                "required": ["title", "content"],
            },
        ),
        Tool(
            name="jotter_list",
            description="List all notes with their numbers.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="jotter_show",
            description="Show one note in full, including content and timestamps.",
            inputSchema={
                "type": "object",
                "properties": {
                    "number": {"type": "integer", "description": "Note number (1-based)"},
                },
                "required": ["number"],
            },
        ),
        Tool(
            name="jotter_edit",
            description="Change the title, content or category of a note.",
            inputSchema={
                "type": "object",
                "properties": {
                    "number": {"type": "integer", "description": "Note number (1-based)"},
                    "field": {
                        "type": "string",
                        "enum": ["title", "content", "category"],
                    },
                    "value": {"type": "string", "description": "New value"},
                },
                "required": ["number", "field", "value"],
            },
        ),
        Tool(
            name="jotter_delete",
            description="Delete a note. Requires confirm=true.",
            inputSchema={
                "type": "object",
                "properties": {
                    "number": {"type": "integer", "description": "Note number (1-based)"},
                    "confirm": {
                        "type": "boolean",
                        "description": "Must be true to delete",
                        "default": False,
                    },
                },
                "required": ["number", "confirm"],
            },
        ),
        Tool(
            name="jotter_search",
            description="Search note titles and content with a case-insensitive regular expression.",
            inputSchema={
                "type": "object",
                "properties": {
                    "keyword": {"type": "string", "description": "Regex or plain text"},
                    "literal": {
                        "type": "boolean",
                        "description": "Match the keyword as plain text",
                        "default": False,
                    },
                },
                "required": ["keyword"],
            },
        ),
        Tool(
            name="jotter_filter",
            description="List notes in one category.",
            inputSchema={
                "type": "object",
                "properties": {
                    "category": {"type": "string", "enum": CATEGORY_NAMES},
                },
                "required": ["category"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    handlers = {
        "jotter_create": tool_create,
        "jotter_list": tool_list,
        "jotter_show": tool_show,
        "jotter_edit": tool_edit,
        "jotter_delete": tool_delete,
        "jotter_search": tool_search,
        "jotter_filter": tool_filter,
    }
    handler = handlers.get(name)
    if handler is None:
        return text(f"Unknown tool: {name}")

    try:
        return await handler(arguments or {})
    except Exception as e:
        return text(f"Error: {e}")


async def tool_create(args: dict) -> list[TextContent]:
    """Create a note."""
    notebook, error = open_notebook()
    if notebook is None:
        return text(error)

    result = notebook.create_note(
        args.get("title", ""), args.get("content", ""), args.get("category", "PERSONAL")
    )
    if not result.ok:
        return text(f"Error: {result.error}")

    if error := save(notebook):
        return text(error)
    return text(f"Created note {result.value}: {args.get('title')}")


async def tool_list(args: dict) -> list[TextContent]:
    """List notes."""
    notebook, error = open_notebook()
    if notebook is None:
        return text(error)

    entries = list(enumerate(notebook.list_notes(), start=1))
    return text(format_entries(entries, "No notes available."))


async def tool_show(args: dict) -> list[TextContent]:
    """Show one note."""
    notebook, error = open_notebook()
    if notebook is None:
        return text(error)

    result = notebook.get_note_detail(int(args.get("number", 0)))
    if not result.ok:
        return text(f"Error: {result.error}")
    return text(format_note_detail(result.value))


async def tool_edit(args: dict) -> list[TextContent]:
    """Edit one field."""
    notebook, error = open_notebook()
    if notebook is None:
        return text(error)

    number = int(args.get("number", 0))
    result = notebook.edit_note(number, args.get("field", ""), args.get("value", ""))
    if not result.ok:
        return text(f"Error: {result.error}")

    if error := save(notebook):
        return text(error)
    return text(f"Updated note {number}: {result.value.render()}")


async def tool_delete(args: dict) -> list[TextContent]:
    """Delete a note once confirmed."""
    if args.get("confirm") is not True:
        return text("Error: Deletion not confirmed (pass confirm=true)")

    notebook, error = open_notebook()
    if notebook is None:
        return text(error)

    result = notebook.delete_note(int(args.get("number", 0)))
    if not result.ok:
        return text(f"Error: {result.error}")

    if error := save(notebook):
        return text(error)
    return text(f"Deleted: {result.value.title}")


async def tool_search(args: dict) -> list[TextContent]:
    """Search notes."""
    keyword = args.get("keyword", "")

    notebook, error = open_notebook()
    if notebook is None:
        return text(error)

    result = notebook.search_notes(keyword, literal=True if args.get("literal") else None)
    if not result.ok:
        return text(f"Error: {result.error}")
    return text(format_entries(result.value, f"No notes found matching '{keyword}'"))


async def tool_filter(args: dict) -> list[TextContent]:
    """Filter notes by category."""
    notebook, error = open_notebook()
    if notebook is None:
        return text(error)

    result = notebook.filter_notes(args.get("category", ""))
    if not result.ok:
        return text(f"Error: {result.error}")
    return text(format_entries(result.value, "No notes in this category."))


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    """Console script entry point."""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    run()
