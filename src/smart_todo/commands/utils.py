"""Helpers shared by command groups."""

import typer

from smart_todo.exceptions import ValidationError
from smart_todo.services.config_service import get_config_service
from smart_todo.services.gateway import StoreGateway
from smart_todo.utils.ui.formatters import OUTPUT_FORMATS


def get_gateway(ctx: typer.Context) -> StoreGateway:
    """Return the process's store gateway, opening it on first use.

    The gateway lives on the root context's ``obj`` and is closed when the
    root context closes. A gateway passed in as ``obj`` is used as is.
    """
    root = ctx.find_root()
    if root.obj is None:
        gateway = StoreGateway.open(get_config_service().get_database_path())
        root.obj = gateway
        root.call_on_close(gateway.close)
    return root.obj


OUTPUT_HELP = "Output format: pretty, table, json or yaml"


def resolve_output(output: str | None) -> str:
    """Return the requested output format, or the configured default.

    Raises:
        ValidationError: If the format is not one of OUTPUT_FORMATS
    """
    if output is None:
        return get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise ValidationError(
            f"Invalid output format: {output}. Choose from: {', '.join(OUTPUT_FORMATS)}"
        )
    return output
