"""Editor integration for editing gist files.

This module provides the Editor class for launching an external, interactive
text editor (vim, nano, VS Code, ...) against a file and waiting for it to
exit.
"""

import logging
import shlex
import subprocess
from typing import List

from src.git_integration.errors import EditorError

logger = logging.getLogger(__name__)


class Editor:
    """Launches an external editor on a single file.

    The editor command may carry arguments (e.g. "code --wait"); the file
    path is appended as the last argument. The editor inherits the terminal,
    so no output is captured and no timeout applies.

    Example:
        >>> editor = Editor("vim")
        >>> editor.launch("/home/me/.gist/octocat/aa5a315d/hello.py")
    """

    def __init__(self, command: str = "vim"):
        """Initialize editor.

        Args:
            command: Editor command line

        Raises:
            EditorError: If the command is empty or cannot be parsed
        """
        self.command = command
        self._argv = self._parse(command)

    @staticmethod
    def _parse(command: str) -> List[str]:
        try:
            argv = shlex.split(command)
        except ValueError as e:
            raise EditorError(editor=command, error=f"Invalid editor command: {e}")
        if not argv:
            raise EditorError(editor=command, error="Editor command is empty")
        return argv

    def launch(self, path: str) -> None:
        """Open the editor on a file and block until it exits.

        Args:
            path: File to edit

        Raises:
            EditorError: If the editor cannot be launched or exits non-zero
        """
        argv = self._argv + [path]
        logger.info(f"Launching editor: {' '.join(argv)}")

        try:
            result = subprocess.run(argv)
        except FileNotFoundError as e:
            raise EditorError(editor=self.command, error=f"Editor executable not found: {e}")
        except OSError as e:
            raise EditorError(editor=self.command, error=f"Failed to launch: {e}")

        if result.returncode != 0:
            raise EditorError(
                editor=self.command,
                error=f"Editor exited with code {result.returncode}",
            )

        logger.debug(f"Editor '{self.command}' exited successfully")
