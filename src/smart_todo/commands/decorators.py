"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from smart_todo.exceptions import SmartTodoError
from smart_todo.utils.exit_codes import ERROR_GENERAL, get_exit_code_name
from smart_todo.utils.logger import get_logger
from smart_todo.utils.ui.formatters import format_error


def command_wrapper(func: Callable) -> Callable:
    """Run a sync or async command, logging it and mapping errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger("cli")
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except SmartTodoError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                get_exit_code_name(e.exit_code),
                e.message,
            )
            format_error(e.message)
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit:
            # Typer's own exits (--help, explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
