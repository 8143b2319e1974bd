"""Main entry point for the smart-todo CLI."""

import typer

from smart_todo import __version__
from smart_todo.commands import chat, config, notes, projects, settings, todos
from smart_todo.services.config_service import get_config_service
from smart_todo.utils.exit_codes import exit_codes_help
from smart_todo.utils.logger import set_log_level
from smart_todo.utils.typer_helpers import SuggestingGroup
from smart_todo.utils.ui.console import get_console

app = typer.Typer(
    name="smart-todo",
    cls=SuggestingGroup,
    help="Track projects, todos and notes locally, with assistant-suggested todos",
    no_args_is_help=True,
    epilog="Exit codes:\n\n" + exit_codes_help(),
)

console = get_console()

app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(todos.app, name="todos", help="Todo management commands")
app.add_typer(notes.app, name="notes", help="Project note commands")
app.add_typer(chat.app, name="chat", help="Chat with the assistant about your projects")
app.add_typer(settings.app, name="settings", help="Application settings")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    """Apply the configured log level before any command runs."""
    set_log_level(get_config_service().config.log_level)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]smart-todo[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
