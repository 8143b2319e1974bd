"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from smart_todo.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        key = _collection_key(data)
        if key:
            format_dict_table(data[key])
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v.get("text", v)) if isinstance(v, dict) else str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def _collection_key(data: dict) -> str | None:
    for key in ("projects", "todos", "notes", "messages"):
        if key in data and isinstance(data[key], list):
            return key
    return None


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🟢",
}

PRIORITY_COLORS = {
    "high": "bold red",
    "medium": "yellow",
    "low": "green",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}

SOURCE_ICONS = {
    "ai": "✨",
}


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors and icons."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict):
        if "projects" in data:
            format_projects_pretty(data["projects"])
        elif "todos" in data:
            format_todos_pretty(data["todos"], title=data.get("title"))
        elif "notes" in data:
            format_notes_pretty(data["notes"])
        elif "messages" in data:
            format_messages_pretty(data["messages"])
        else:
            format_single_item_pretty(data)
    elif isinstance(data, list):
        for item in data:
            console.print(f"• {item}")
    else:
        console.print(data)


def format_projects_pretty(projects: list[dict]) -> None:
    """Format projects, active first, then archived."""
    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return

    active = [p for p in projects if not p.get("archived", False)]
    archived = [p for p in projects if p.get("archived", False)]

    header = Text()
    header.append("📁 Projects ", style="bold cyan")
    header.append(f"({len(active)} active", style="dim")
    if archived:
        header.append(f", {len(archived)} archived", style="dim")
    header.append(")", style="dim")
    console.print(header)
    console.print()

    if active:
        console.print("📂 ACTIVE PROJECTS", style="bold blue")
        for project in active:
            format_project_item(project, indent="  ")
        console.print()

    if archived:
        console.print(f"🗃️  ARCHIVED ({len(archived)})", style="bold dim")
        for project in archived:
            format_project_item(project, indent="  ")


def format_project_item(project: dict, indent: str = "") -> None:
    """Format a single project item."""
    line = Text()
    line.append(f"{indent}📁 ", style="")
    line.append(project.get("name", "Untitled"), style="dim" if project.get("archived") else "bold")
    line.append(f"  {short_id(project.get('id', ''))}", style="dim")
    console.print(line)

    meta = []
    if project.get("description"):
        meta.append((project["description"], ""))
    if "pending_count" in project:
        meta.append(
            (
                f"{project['pending_count']} pending, "
                f"{project.get('completed_count', 0)} completed",
                "dim",
            )
        )
    if project.get("archived_at"):
        meta.append((f"Archived {format_timestamp(project['archived_at'])}", "dim"))

    for text, style in meta:
        meta_line = Text()
        meta_line.append(f"{indent}   └─ ", style="dim")
        meta_line.append(text, style=style)
        console.print(meta_line)


def format_todos_pretty(todos: list[dict], title: str | None = None) -> None:
    """Format todos in board order with their list position."""
    pending = [t for t in todos if not t.get("completed", False)]
    completed = [t for t in todos if t.get("completed", False)]

    header = Text()
    header.append(f"📋 {title or 'Todos'} ", style="bold cyan")
    header.append(f"({len(pending)} pending", style="dim")
    if completed:
        header.append(f", {len(completed)} completed", style="dim green")
    header.append(")", style="dim")
    console.print(header)

    if not todos:
        console.print("  [dim]No todos yet[/dim]")
        console.print()
        return

    for position, todo in enumerate(pending, start=1):
        format_todo_item(todo, indent="  ", position=position)
    for todo in completed:
        format_todo_item(todo, indent="  ")
    console.print()


def format_todo_item(todo: dict, indent: str = "", position: int | None = None) -> None:
    """Format a single todo item."""
    is_completed = todo.get("completed", False)
    priority = todo.get("priority", "medium")

    line_str = f"{indent}"
    line_str += f"{position:>2}. " if position is not None else "    "
    line_str += STATUS_ICONS["completed" if is_completed else "open"] + " "
    line_str += PRIORITY_ICONS.get(priority, "") + " "

    text = _escape(todo.get("text", ""))
    if is_completed:
        line_str += f"[dim strike]{text}[/dim strike]"
    elif priority == "high":
        line_str += f"[bold]{text}[/bold]"
    else:
        line_str += text

    if todo.get("source") in SOURCE_ICONS:
        line_str += f" {SOURCE_ICONS[todo['source']]}"
    line_str += f" [dim]{short_id(todo.get('id', ''))}[/dim]"

    console.print(Text.from_markup(line_str))


def format_notes_pretty(notes: list[dict]) -> None:
    """Format notes newest first."""
    if not notes:
        console.print("[yellow]No notes found[/yellow]")
        return

    console.print(Text(f"📝 Notes ({len(notes)})", style="bold cyan"))
    console.print()
    for note in notes:
        line = Text()
        line.append(f"  [{format_timestamp(note.get('created_at'))}] ", style="dim")
        line.append(note.get("content", ""))
        console.print(line)


def format_messages_pretty(messages: list[dict]) -> None:
    """Format a conversation, oldest first, with numbered suggestions."""
    if not messages:
        console.print("[yellow]No messages yet[/yellow]")
        return

    for message in messages:
        format_message_item(message)


def format_message_item(message: dict) -> None:
    """Format one chat message and its suggested todos."""
    is_user = message.get("role") == "user"
    header = Text()
    header.append("You" if is_user else "Assistant", style="bold green" if is_user else "bold magenta")
    header.append(f"  {format_timestamp(message.get('timestamp'))}", style="dim")
    if not is_user:
        header.append(f"  {short_id(message.get('id', ''))}", style="dim")
    console.print(header)
    console.print(Text(message.get("content", "")))

    suggestions = message.get("suggested_todos") or []
    if suggestions:
        console.print()
        console.print("💡 Suggested todos", style="bold yellow")
        for number, suggestion in enumerate(suggestions, start=1):
            mark = "✓" if suggestion.get("added") else " "
            line = Text()
            line.append(f"  {number}. [{mark}] ", style="dim")
            line.append(suggestion.get("text", ""), style="dim" if suggestion.get("added") else "")
            console.print(line)
    console.print()


def format_single_item_pretty(item: dict) -> None:
    """Format a single item in pretty format."""
    if "text" in item and "project_id" in item:
        format_todo_item(item)
    elif "name" in item and "archived" in item:
        format_project_item(item)
    elif "role" in item:
        format_message_item(item)
    else:
        for key, value in item.items():
            formatted_key = key.replace("_", " ").title()
            console.print(f"[cyan]{formatted_key}:[/cyan] {_escape(str(value))}")


# ============================================================================
# Helper Functions
# ============================================================================


def short_id(entity_id: str, length: int = 8) -> str:
    """First ``length`` characters of an id, as shown in listings."""
    return entity_id[:length]


def format_timestamp(value: str | datetime | None) -> str:
    """Render an ISO timestamp as local ``YYYY-MM-DD HH:MM``."""
    if not value:
        return "-"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def _escape(text: str) -> str:
    return text.replace("[", "\\[")
