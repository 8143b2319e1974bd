"""Configuration management commands."""

import typer

from smart_todo.services.config_service import get_config_service
from smart_todo.utils.logger import log_file_path
from smart_todo.utils.typer_helpers import SuggestingGroup
from smart_todo.utils.ui.console import get_console
from smart_todo.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper
from .utils import OUTPUT_HELP, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def parse_value(value: str) -> str | int | float | bool | None:
    """Convert a command-line string to the type it spells."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", "null"):
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


@app.command("view")
@command_wrapper
def view_config(
    output: str | None = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
) -> None:
    """View the current configuration."""
    output = resolve_output(output)
    config_service = get_config_service()
    data = config_service.config.model_dump(mode="json")
    data["config_path"] = str(config_service.config_path)
    data["database"] = str(config_service.get_database_path())
    data["log_file"] = str(log_file_path())
    format_output(data, output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., assistant.model)"),
) -> None:
    """Get a configuration value."""
    console.print(get_config_service().get(key))


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., assistant.timeout)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    get_config_service().set(key, parsed_value)
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Are you sure you want to reset the configuration?"):
        format_info("Cancelled")
        raise typer.Exit(0)

    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
