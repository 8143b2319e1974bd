"""Project note commands."""

import typer

from smart_todo.utils.typer_helpers import SuggestingGroup
from smart_todo.utils.ui.formatters import format_output, format_success
from smart_todo.utils.uuid_utils import resolve_project

from .decorators import command_wrapper
from .utils import OUTPUT_HELP, get_gateway, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Project note commands")


@app.command("list")
@command_wrapper
async def list_notes(
    ctx: typer.Context,
    project: str | None = typer.Option(None, "--project", "-p", help="Only this project"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List notes, newest first."""
    output = resolve_output(output)
    gateway = get_gateway(ctx)

    project_id = (await resolve_project(project, gateway)).id if project else None
    notes = await gateway.list_notes(project_id)
    format_output({"notes": [n.model_dump(mode="json") for n in notes]}, output)


@app.command("add")
@command_wrapper
async def add_note(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    content: str = typer.Argument(..., help="Note text"),
) -> None:
    """Attach a note to a project. Notes cannot be edited afterwards."""
    gateway = get_gateway(ctx)

    target = await resolve_project(project, gateway)
    note = await gateway.add_note(target.id, content)
    format_success(f"Note added to {target.name}: {note.id}")
