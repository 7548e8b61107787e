"""Command-line interface for gist mirroring.

This package provides the `gist` CLI tool that lists the files of the user's
gists through local git mirrors, edits and pushes single files, and creates
new gists.
"""

from .config import ConfigLoader, load_config
from .edit_command import EditCommand
from .errors import CLIError, ConfigError, FileSelectionError
from .list_command import ListCommand
from .models import ExitCode
from .new_command import NewCommand

__all__ = [
    'ConfigLoader',
    'load_config',
    'EditCommand',
    'ListCommand',
    'NewCommand',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'FileSelectionError',
]
