"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from smart_todo.utils.ui.console import get_console

COMMAND_ALIASES = {
    "ls": "list",
    "new": "add",
    "rm": "delete",
    "done": "toggle",
}


def _print_suggestions(group: str, attempted: str, matches: list[str]) -> None:
    console = get_console()
    console.print(f'[red]Error:[/red] unknown command "{attempted}" for "{group}"')
    console.print()
    if len(matches) == 1:
        console.print("[yellow]Did you mean this?[/yellow]")
    else:
        console.print("[yellow]Did you mean one of these?[/yellow]")
    for match in matches:
        console.print(f"        {match}")


class SuggestingGroup(TyperGroup):
    """Command group that accepts short aliases and answers typos with close matches.

    An alias only resolves when the group has the command it points to, so
    ``todos done`` works but ``projects done`` does not.
    """

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in COMMAND_ALIASES:
            command = super().get_command(ctx, COMMAND_ALIASES[cmd_name])
        return command

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            # Typer may raise its bundled click's UsageError
            attempted = args[0] if args else ""
            matches = get_close_matches(attempted, sorted(self.commands), n=3, cutoff=0.6)
            if not attempted or not matches:
                raise
            _print_suggestions(ctx.info_name, attempted, matches)
            raise typer.Exit(2) from e
