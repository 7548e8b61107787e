"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError so commands can catch them in one place
and map them to an exit code.
"""

from typing import List, Optional

from src.gist_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when the configuration file is unreadable or invalid."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FileSelectionError(CLIError):
    """Raised when a file name does not select exactly one gist file."""

    def __init__(self, name: str, candidates: Optional[List[str]] = None):
        if candidates:
            message = (
                f"File '{name}' exists in several gists: {', '.join(candidates)} "
                f"(use --id to choose one)"
            )
        else:
            message = f"No gist file named '{name}'"
        super().__init__(message)
        self.name = name
        self.candidates = candidates or []
