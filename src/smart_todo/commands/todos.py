"""Todo management commands."""

import typer

from smart_todo.exceptions import ValidationError
from smart_todo.services.todo_board import TodoBoard
from smart_todo.utils.typer_helpers import SuggestingGroup
from smart_todo.utils.ui.console import get_console
from smart_todo.utils.ui.formatters import format_info, format_output, format_success
from smart_todo.utils.uuid_utils import resolve_project, resolve_todo

from .decorators import command_wrapper
from .utils import OUTPUT_HELP, get_gateway, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Todo management commands")
console = get_console()

PRIORITIES = ("high", "medium", "low")


@app.command("list")
@command_wrapper
async def list_todos(
    ctx: typer.Context,
    project: str | None = typer.Option(None, "--project", "-p", help="Only this project"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List todos per project: pending in manual order, then completed."""
    output = resolve_output(output)
    gateway = get_gateway(ctx)

    if project:
        projects = [await resolve_project(project, gateway)]
    else:
        projects = await gateway.list_projects()
    todos = await gateway.list_todos()

    boards = [(p, TodoBoard.from_snapshot(p.id, todos)) for p in projects]

    if output == "pretty":
        if not boards:
            format_info("No projects yet. Create one with 'smart-todo projects add <name>'.")
        for p, board in boards:
            format_output(
                {"title": p.name, "todos": [t.model_dump(mode="json") for t in board.items]},
                output,
            )
        return

    rows = [t.model_dump(mode="json") for _, board in boards for t in board.items]
    format_output({"todos": rows}, output)


@app.command("add")
@command_wrapper
async def add_todo(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    text: str = typer.Argument(..., help="What needs doing"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Add a todo to a project."""
    output = resolve_output(output)
    gateway = get_gateway(ctx)

    target = await resolve_project(project, gateway)
    todo = await gateway.add_todo(target.id, text)
    format_success(f"Todo added to {target.name}: {todo.id}")
    format_output(todo.model_dump(mode="json"), output)


@app.command("toggle")
@command_wrapper
async def toggle_todo(
    ctx: typer.Context,
    todo: str = typer.Argument(..., help="Todo ID or ID prefix"),
) -> None:
    """Mark a todo completed, or pending again if it already is."""
    gateway = get_gateway(ctx)

    target = await resolve_todo(todo, gateway)
    updated = await gateway.toggle_todo(target.id, not target.completed)

    if updated.completed:
        format_success(f"Completed: {updated.text}")
        settings = await gateway.get_settings()
        if settings is None or settings.celebration_enabled:
            console.print("🎉 [bold magenta]Nice work![/bold magenta]")
    else:
        format_success(f"Reopened: {updated.text}")


@app.command("priority")
@command_wrapper
async def set_priority(
    ctx: typer.Context,
    todo: str = typer.Argument(..., help="Todo ID or ID prefix"),
    value: str | None = typer.Option(
        None, "--set", "-s", help="high, medium or low (default: next in cycle)"
    ),
) -> None:
    """Cycle a todo's priority (high → medium → low → high) or set it."""
    gateway = get_gateway(ctx)

    target = await resolve_todo(todo, gateway)
    if value is None:
        updated = await gateway.cycle_todo_priority(target.id)
    else:
        if value.lower() not in PRIORITIES:
            raise ValidationError(
                f"Invalid priority: {value}. Choose from: {', '.join(PRIORITIES)}"
            )
        updated = await gateway.update_todo_priority(target.id, value.lower())
    format_success(f"Priority of '{updated.text}' is now {updated.priority}")


@app.command("move")
@command_wrapper
async def move_todo(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    from_position: int = typer.Argument(..., help="Current position (as listed)"),
    to_position: int = typer.Argument(..., help="New position"),
) -> None:
    """Move a pending todo to another position in its project's list."""
    gateway = get_gateway(ctx)

    target = await resolve_project(project, gateway)
    board = TodoBoard.from_snapshot(
        target.id, await gateway.list_todos(target.id), on_reorder=gateway.reorder_todos
    )

    count = len(board.pending)
    for position in (from_position, to_position):
        if not 1 <= position <= count:
            raise ValidationError(
                f"Position {position} is out of range; {target.name} has {count} pending todos"
            )

    if await board.move(from_position - 1, to_position - 1):
        moved = board.pending[to_position - 1]
        format_success(f"Moved '{moved.text}' to position {to_position}")
    else:
        format_info("Nothing to move")


@app.command("delete")
@command_wrapper
async def delete_todo(
    ctx: typer.Context,
    todo: str = typer.Argument(..., help="Todo ID or ID prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a todo."""
    gateway = get_gateway(ctx)

    target = await resolve_todo(todo, gateway)
    if not yes and not typer.confirm(f"Delete todo '{target.text}'?"):
        format_info("Cancelled")
        raise typer.Exit(0)

    await gateway.delete_todo(target.id)
    format_success(f"Todo deleted: {target.text}")
