"""Process exit codes for Taskflow CLI.

Scripts wrapping the CLI can branch on these instead of parsing output.
"""

SUCCESS = 0
ERROR_GENERAL = 1
# Bad preset name, invalid config value
ERROR_INVALID_ARGS = 2
# Unknown task id or config key
ERROR_NOT_FOUND = 5

_NAMES = {
    SUCCESS: "SUCCESS",
    ERROR_GENERAL: "ERROR_GENERAL",
    ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
}


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    return _NAMES.get(code, f"UNKNOWN({code})")
