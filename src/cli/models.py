"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, file selection, git failures)
    - EDIT_ERROR (2): The editor could not be launched or exited with an error
    - AUTH_ERROR (3): Missing or rejected GitHub credentials
    - NETWORK_ERROR (4): GitHub API unreachable or failing

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    EDIT_ERROR = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
