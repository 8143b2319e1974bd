"""Project management commands."""

import typer

from smart_todo.utils.typer_helpers import SuggestingGroup
from smart_todo.utils.ui.formatters import format_info, format_output, format_success
from smart_todo.utils.uuid_utils import resolve_project

from .decorators import command_wrapper
from .utils import OUTPUT_HELP, get_gateway, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("list")
@command_wrapper
async def list_projects(
    ctx: typer.Context,
    archived: bool = typer.Option(False, "--archived", help="Show only archived projects"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show active and archived projects"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """List projects, newest first."""
    output = resolve_output(output)
    gateway = get_gateway(ctx)

    if archived:
        projects = await gateway.list_archived_projects()
    else:
        projects = await gateway.list_projects(active_only=not show_all)

    todos = await gateway.list_todos()
    rows = []
    for project in projects:
        row = project.model_dump(mode="json")
        own = [t for t in todos if t.project_id == project.id]
        row["pending_count"] = sum(1 for t in own if not t.completed)
        row["completed_count"] = len(own) - row["pending_count"]
        rows.append(row)

    format_output({"projects": rows}, output)


@app.command("add")
@command_wrapper
async def add_project(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Project description"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Create a new project."""
    output = resolve_output(output)
    gateway = get_gateway(ctx)

    project = await gateway.add_project(name, description)
    format_success(f"Project created: {project.id}")
    format_output(project.model_dump(mode="json"), output)


@app.command("archive")
@command_wrapper
async def archive_project(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
) -> None:
    """Archive a project; its todos and notes are kept."""
    gateway = get_gateway(ctx)

    target = await resolve_project(project, gateway)
    archived = await gateway.archive_project(target.id)
    format_success(f"Project archived: {archived.name}")


@app.command("restore")
@command_wrapper
async def restore_project(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
) -> None:
    """Restore an archived project."""
    gateway = get_gateway(ctx)

    target = await resolve_project(project, gateway)
    restored = await gateway.restore_project(target.id)
    format_success(f"Project restored: {restored.name}")


@app.command("delete")
@command_wrapper
async def delete_project(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Permanently delete a project with its todos and notes."""
    gateway = get_gateway(ctx)

    target = await resolve_project(project, gateway)
    if not yes and not typer.confirm(
        f"Delete project '{target.name}' and all of its todos and notes?"
    ):
        format_info("Cancelled")
        raise typer.Exit(0)

    await gateway.delete_project(target.id)
    format_success(f"Project deleted: {target.name}")
