"""Process exit codes.

Each ``SmartTodoError`` subclass carries one of these, so scripts wrapping
``smart-todo`` can tell a bad argument from a missing record or a locked
database. Codes 3 and 6 are unassigned.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_NETWORK = 4
ERROR_NOT_FOUND = 5
ERROR_STORE_UNAVAILABLE = 7

_EXIT_CODES = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or validation error"),
    ERROR_NETWORK: ("ERROR_NETWORK", "Assistant request failed; check the API key and connection"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Project, todo or message not found"),
    ERROR_STORE_UNAVAILABLE: (
        "ERROR_STORE_UNAVAILABLE",
        "Local database unavailable; check that it is not locked or read-only",
    ),
}


def get_exit_code_name(code: int) -> str:
    """Symbolic name of an exit code, for logs."""
    return _EXIT_CODES.get(code, (f"UNKNOWN({code})",))[0]


def get_exit_code_description(code: int) -> str:
    if code not in _EXIT_CODES:
        return "Unknown error"
    return _EXIT_CODES[code][1]


def exit_codes_help() -> str:
    """One line per exit code, for the CLI help epilog."""
    return "\n\n".join(
        f"{code}: {get_exit_code_description(code)}" for code in sorted(_EXIT_CODES)
    )
