"""Assistant chat commands."""

import typer

from smart_todo.services.chat_service import get_chat_service
from smart_todo.utils.exit_codes import ERROR_NETWORK
from smart_todo.utils.typer_helpers import SuggestingGroup
from smart_todo.utils.ui.console import get_console
from smart_todo.utils.ui.formatters import (
    format_output,
    format_success,
    short_id,
)
from smart_todo.utils.uuid_utils import resolve_message, resolve_project

from .decorators import command_wrapper
from .utils import OUTPUT_HELP, get_gateway, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Chat with the assistant about your projects")
console = get_console()


@app.command("send")
@command_wrapper
async def send_message(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="What to ask the assistant"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Send a message; suggested todos in the reply can be accepted later."""
    output = resolve_output(output)
    chat = get_chat_service(get_gateway(ctx))

    with console.status("[bold blue]Thinking...", spinner="dots"):
        result = await chat.send(message)

    if result.failed:
        console.print(result.reply.content, style="bold red", markup=False)
        raise typer.Exit(ERROR_NETWORK)

    format_output(result.reply.model_dump(mode="json"), output)
    if output == "pretty" and result.reply.suggested_todos:
        console.print(
            f"[dim]Accept one with: smart-todo chat accept {short_id(result.reply.id)} <number>[/dim]"
        )


@app.command("history")
@command_wrapper
async def show_history(
    ctx: typer.Context,
    limit: int | None = typer.Option(None, "--limit", "-n", help="Show only the last N messages"),
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show the conversation, oldest first."""
    output = resolve_output(output)
    chat = get_chat_service(get_gateway(ctx))

    messages = await chat.history()
    if limit is not None and limit >= 0:
        messages = messages[-limit:] if limit else []
    format_output({"messages": [m.model_dump(mode="json") for m in messages]}, output)


@app.command("accept")
@command_wrapper
async def accept_suggestion(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Assistant message ID or ID prefix"),
    number: int = typer.Argument(..., help="Suggestion number as listed"),
    project: str | None = typer.Option(
        None, "--project", "-p", help="Add to this project instead of the matched one"
    ),
) -> None:
    """Turn a suggested todo into a real one."""
    gateway = get_gateway(ctx)
    chat = get_chat_service(gateway)

    target = await resolve_message(message, gateway)
    project_id = (await resolve_project(project, gateway)).id if project else None
    todo = await chat.accept_suggestion(target.id, number - 1, project_id)
    format_success(f"Todo added: {todo.text}")
