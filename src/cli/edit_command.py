"""Edit command for CLI.

This module provides the EditCommand class which selects one gist file by
name, opens it in the configured editor and pushes the change, if any.
"""

import logging
from typing import Optional

from src.cli.config import load_config
from src.cli.errors import CLIError, FileSelectionError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.gist_client.auth import Authenticator
from src.gist_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from src.git_integration.errors import EditorError, GitRepositoryError
from src.git_integration.gist_index import GistIndex
from src.git_integration.publisher import FilePublisher
from src.models.gist_config import GistConfig
from src.models.gist_page import File

logger = logging.getLogger(__name__)


class EditCommand:
    """Edits a single gist file and publishes it.

    The workflow:
        1. Build the gist index (cache or remote listing, mirror sync)
        2. Select the file by name (and gist id when the name is ambiguous)
        3. Run the edit/publish flow on it

    Example:
        >>> exit_code = EditCommand(output_handler=output).run("notes.md")
    """

    def __init__(
        self,
        config: Optional[GistConfig] = None,
        config_path: Optional[str] = None,
        authenticator: Optional[Authenticator] = None,
        index: Optional[GistIndex] = None,
        publisher: Optional[FilePublisher] = None,
        output_handler: Optional[OutputHandler] = None,
    ):
        """Initialize edit command with dependencies.

        Args:
            config: Tool configuration (loaded from the environment if not given)
            config_path: Configuration file to read when loading
            authenticator: Authenticator for credentials (optional)
            index: GistIndex used to find the file (optional)
            publisher: FilePublisher running the edit session (optional)
            output_handler: OutputHandler for terminal output (optional)
        """
        self.config = config
        self.config_path = config_path
        self.authenticator = authenticator
        self.index = index
        self.publisher = publisher
        self.output_handler = output_handler or OutputHandler()

    def run(
        self,
        name: str,
        page_id: Optional[str] = None,
        refresh: bool = False,
    ) -> ExitCode:
        """Edit a gist file and push the change.

        Args:
            name: File name to edit
            page_id: Gist id, required when several gists hold the name
            refresh: Ignore the cached listing and fetch it again

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            if self.config is None:
                self.config = load_config(self.authenticator, self.config_path)

            if self.index is None:
                self.index = GistIndex(self.config)

            if self.publisher is None:
                self.publisher = FilePublisher(
                    self.config,
                    cache=self.index.cache,
                    status=self.output_handler.spinner,
                )

            with self.output_handler.spinner("Checking pages..."):
                self.index.build_pages(refresh=refresh)

            file = self._select(name, page_id)
            self.output_handler.info(f"Editing {file.name} (gist {file.page.id})")

            result = self.publisher.edit(file)

            if result.pushed:
                self.output_handler.success("Pushed")
            else:
                self.output_handler.print("No changes")
            return ExitCode.SUCCESS

        except EditorError as e:
            logger.error(f"Editor failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.EDIT_ERROR

        except GitRepositoryError as e:
            logger.error(f"Git error: {e}")
            self.output_handler.error(f"Git error: {e}")
            return ExitCode.GENERAL_ERROR

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
            logger.exception("Unexpected error while editing")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _select(self, name: str, page_id: Optional[str]) -> File:
        """Pick exactly one file from the index.

        Raises:
            FileSelectionError: If no file or several files match
        """
        matches = self.index.find_files(name, page_id)
        if not matches:
            raise FileSelectionError(name)
        if len(matches) > 1:
            raise FileSelectionError(name, [file.page.id for file in matches])
        return matches[0]
