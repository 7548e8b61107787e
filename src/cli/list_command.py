"""List command for CLI.

This module provides the ListCommand class which builds the gist index
(cache or remote listing, then mirror synchronization) and prints one line
per mirrored file.
"""

import logging
from typing import Optional

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


class ListCommand:
    """Lists the files of every mirrored gist.

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> exit_code = ListCommand(output_handler=output).run(refresh=False)
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config: Optional[GistConfig] = None,
        config_path: Optional[str] = None,
        authenticator: Optional[Authenticator] = None,
        index: Optional[GistIndex] = None,
        output_handler: Optional[OutputHandler] = None,
    ):
        """Initialize list command with dependencies.

        Args:
            config: Tool configuration (loaded from the environment if not given)
            config_path: Configuration file to read when loading
            authenticator: Authenticator for credentials (optional)
            index: GistIndex to query (optional)
            output_handler: OutputHandler for terminal output (optional)
        """
        self.config = config
        self.config_path = config_path
        self.authenticator = authenticator
        self.index = index
        self.output_handler = output_handler or OutputHandler()

    def run(self, refresh: bool = False) -> ExitCode:
        """List mirrored gist files.

        Args:
            refresh: Ignore the cached listing and fetch it again

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            if self.config is None:
                self.config = load_config(self.authenticator, self.config_path)

            if self.index is None:
                self.index = GistIndex(self.config)

            spinner_message = "Fetching pages..." if refresh else "Checking pages..."
            with self.output_handler.spinner(spinner_message):
                pages = self.index.build_pages(refresh=refresh)

            if self.index.last_sync is not None:
                self.output_handler.print_sync_failures(self.index.last_sync.failures)

            files = self.index.files(pages)
            logger.info(f"Listing {len(files)} files from {len(pages)} gists")
            self.output_handler.print_files(files)
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
            logger.exception("Unexpected error while listing gists")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
