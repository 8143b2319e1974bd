"""Application settings commands (assistant API key, celebration)."""

import typer

from smart_todo.exceptions import ValidationError
from smart_todo.models import Settings
from smart_todo.utils.typer_helpers import SuggestingGroup
from smart_todo.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .utils import OUTPUT_HELP, get_gateway, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Application settings")


def mask_api_key(api_key: str) -> str:
    """Show only the last four characters of a key."""
    if not api_key:
        return "(not set)"
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:3]}...{api_key[-4:]}"


@app.command("show")
@command_wrapper
async def show_settings(
    ctx: typer.Context,
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """Show the saved settings with the API key masked."""
    output = resolve_output(output)
    settings = await get_gateway(ctx).get_settings() or Settings()
    format_output(
        {
            "api_key": mask_api_key(settings.api_key),
            "celebration_enabled": settings.celebration_enabled,
        },
        output,
    )


@app.command("set")
@command_wrapper
async def set_settings(
    ctx: typer.Context,
    api_key: str | None = typer.Option(None, "--api-key", help="Assistant API key"),
    celebration: bool | None = typer.Option(
        None,
        "--celebration/--no-celebration",
        help="Celebrate completed todos",
    ),
) -> None:
    """Update one or more settings."""
    if api_key is None and celebration is None:
        raise ValidationError("No settings specified")

    gateway = get_gateway(ctx)
    settings = await gateway.get_settings() or Settings()

    updates: dict = {}
    if api_key is not None:
        updates["api_key"] = api_key.strip()
    if celebration is not None:
        updates["celebration_enabled"] = celebration

    await gateway.save_settings(settings.model_copy(update=updates))
    format_success("Settings saved")
