"""New command for CLI.

This module provides the NewCommand class which creates a gist from local
files.
"""

import logging
import os
from typing import Dict, List, Optional

from src.cli.config import load_config
from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.gist_client.auth import Authenticator
from src.gist_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from src.git_integration.gist_index import GistIndex
from src.models.gist_config import GistConfig

logger = logging.getLogger(__name__)


class NewCommand:
    """Creates a gist from local files.

    Example:
        >>> exit_code = NewCommand().run(["notes.md"], description="Notes")
    """

    def __init__(
        self,
        config: Optional[GistConfig] = None,
        config_path: Optional[str] = None,
        authenticator: Optional[Authenticator] = None,
        index: Optional[GistIndex] = None,
        output_handler: Optional[OutputHandler] = None,
    ):
        """Initialize new command with dependencies.

        Args:
            config: Tool configuration (loaded from the environment if not given)
            config_path: Configuration file to read when loading
            authenticator: Authenticator for credentials (optional)
            index: GistIndex used to create the gist (optional)
            output_handler: OutputHandler for terminal output (optional)
        """
        self.config = config
        self.config_path = config_path
        self.authenticator = authenticator
        self.index = index
        self.output_handler = output_handler or OutputHandler()

    def run(
        self,
        paths: List[str],
        description: str = "",
        public: bool = False,
    ) -> ExitCode:
        """Create a gist holding the given files.

        Args:
            paths: Local files to upload (stored under their base name)
            description: Gist description
            public: Whether the gist is public

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            files = self._read_files(paths)

            if self.config is None:
                self.config = load_config(self.authenticator, self.config_path)

            if self.index is None:
                self.index = GistIndex(self.config)

            with self.output_handler.spinner("Creating gist..."):
                page = self.index.create(description, files, public=public)

            self.output_handler.print_created(page)
            return ExitCode.SUCCESS

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.info("Check USER and GITHUB_TOKEN environment variables")
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError, UserNotFoundError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            return ExitCode.NETWORK_ERROR

        except CLIError as e:
            logger.error(f"CLI error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error while creating gist")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    @staticmethod
    def _read_files(paths: List[str]) -> Dict[str, str]:
        """Read local files keyed by base name.

        Raises:
            CLIError: If no file is given, a file cannot be read, or two
                files share a base name
        """
        if not paths:
            raise CLIError("No files given")

        files: Dict[str, str] = {}
        for path in paths:
            name = os.path.basename(path)
            if name in files:
                raise CLIError(f"Duplicate file name '{name}'")
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    files[name] = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise CLIError(f"Cannot read {path}: {e}")
        return files
