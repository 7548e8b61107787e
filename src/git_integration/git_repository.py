"""Git mirror management for gist working copies.

This module provides the GitMirror class for managing the local clone of a
single gist. It uses subprocess to execute git commands and translates every
failure into a GitRepositoryError.
"""

import base64
import logging
import os
import subprocess
from typing import List, Optional

from src.git_integration.errors import GitRepositoryError

logger = logging.getLogger(__name__)

# Git command timeout in seconds
GIT_TIMEOUT = 10

# Timeout for commands talking to the remote (clone, push)
GIT_NETWORK_TIMEOUT = 120


class GitMirror:
    """Manages the local git working copy of one gist.

    File structure:
        ~/.gist/octocat/aa5a315d61ae9438b18d/
          .git/                  # Git internals
          hello.py               # Gist files

    Authentication is passed per command as an HTTP header so the token is
    never written to .git/config.

    Example:
        >>> mirror = GitMirror(page.url, "/home/me/.gist/octocat/aa5a315d", "octocat", token)
        >>> mirror.clone_or_open()
        >>> if not mirror.is_clean():
        ...     mirror.add("hello.py")
        ...     mirror.commit("update")
        ...     mirror.push()
    """

    def __init__(self, url: str, work_dir: str, username: str, token: str = ""):
        """Initialize git mirror manager.

        Args:
            url: Gist remote URL
            work_dir: Path of the local working copy
            username: GitHub user name for HTTPS authentication
            token: GitHub token for HTTPS authentication
        """
        self.url = url
        self.repo_path = work_dir
        self.username = username
        self.token = token
        self._ensure_absolute_path()

    def _ensure_absolute_path(self) -> None:
        """Convert repo_path to absolute path if relative."""
        if not os.path.isabs(self.repo_path):
            self.repo_path = os.path.abspath(self.repo_path)

    def _auth_args(self) -> List[str]:
        """Build git config arguments carrying the HTTPS credentials."""
        if not self.token or not self.url.startswith("https://"):
            return []
        credentials = base64.b64encode(
            f"{self.username}:{self.token}".encode("utf-8")
        ).decode("ascii")
        return ["-c", f"http.extraHeader=Authorization: Basic {credentials}"]

    def _run(
        self,
        args: List[str],
        operation: str,
        cwd: Optional[str] = None,
        timeout: int = GIT_TIMEOUT,
        authenticated: bool = False,
    ) -> subprocess.CompletedProcess:
        """Run a git command and raise GitRepositoryError on failure.

        Args:
            args: Git arguments (without the leading "git")
            operation: Short description used in error messages
            cwd: Working directory (defaults to the mirror directory)
            timeout: Timeout in seconds
            authenticated: Whether to pass the HTTPS credentials

        Returns:
            The completed process

        Raises:
            GitRepositoryError: If git is missing, times out or exits non-zero
        """
        command = ["git"]
        if authenticated:
            command += self._auth_args()
        command += args

        # Never block on an interactive credential prompt
        env = dict(os.environ, GIT_TERMINAL_PROMPT="0")

        logger.debug(f"Running git {' '.join(args)} in {cwd or self.repo_path}")
        try:
            result = subprocess.run(
                command,
                cwd=cwd or self.repo_path,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=env,
            )
        except subprocess.TimeoutExpired:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"Git {operation} timed out after {timeout} seconds",
            )
        except FileNotFoundError:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message="Git command not found. Please install git.",
            )

        if result.returncode != 0:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"Failed to {operation}",
                git_output=result.stderr or result.stdout,
            )
        return result

    def clone_or_open(self) -> None:
        """Clone the gist if the mirror directory is absent, open it otherwise.

        An existing mirror is reused as is: nothing is fetched or pulled.

        Raises:
            GitRepositoryError: If clone or open fails
        """
        if os.path.exists(self.repo_path):
            self.open()
        else:
            self.clone()

    def clone(self) -> None:
        """Clone the gist into the mirror directory.

        Raises:
            GitRepositoryError: If the parent directory cannot be created or clone fails
        """
        parent = os.path.dirname(self.repo_path)
        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as e:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"Failed to create directory: {e}",
            )

        self._run(
            ["clone", "--quiet", self.url, self.repo_path],
            operation=f"clone {self.url}",
            cwd=parent,
            timeout=GIT_NETWORK_TIMEOUT,
            authenticated=True,
        )
        logger.info(f"Cloned {self.url} into {self.repo_path}")

    def open(self) -> None:
        """Check that the mirror directory is the root of a git working copy.

        Raises:
            GitRepositoryError: If the directory is missing or not a git repository
        """
        if not os.path.isdir(self.repo_path):
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message="Mirror directory does not exist",
            )

        result = self._run(
            ["rev-parse", "--show-toplevel"],
            operation="open repository",
        )
        toplevel = result.stdout.strip()
        if os.path.realpath(toplevel) != os.path.realpath(self.repo_path):
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"Not a git repository root (toplevel is {toplevel})",
            )
        logger.debug(f"Opened git repository at {self.repo_path}")

    def is_clean(self) -> bool:
        """Check whether the working copy has no changes against HEAD.

        Returns:
            True if nothing is modified, staged or untracked

        Raises:
            GitRepositoryError: If git status fails
        """
        result = self._run(["status", "--porcelain"], operation="get status")
        return result.stdout.strip() == ""

    def add(self, filename: str) -> None:
        """Stage a single file.

        Args:
            filename: File name relative to the mirror root

        Raises:
            GitRepositoryError: If git add fails
        """
        self._run(["add", "--", filename], operation=f"add file {filename}")
        logger.debug(f"Staged {filename}")

    def commit(self, message: str) -> str:
        """Commit staged changes.

        Args:
            message: Commit message

        Returns:
            Commit SHA

        Raises:
            GitRepositoryError: If commit fails (including an empty index)
        """
        self._run(["commit", "-m", message], operation="commit")

        sha = self._get_head_sha()
        logger.info(f"Committed {self.repo_path}: {sha[:8]}")
        return sha

    def push(self) -> None:
        """Push the current branch to origin.

        Raises:
            GitRepositoryError: If push fails
        """
        self._run(
            ["push", "--quiet", "origin", "HEAD"],
            operation="push",
            timeout=GIT_NETWORK_TIMEOUT,
            authenticated=True,
        )
        logger.info(f"Pushed {self.repo_path}")

    def _get_head_sha(self) -> str:
        """Get current HEAD commit SHA.

        Returns:
            Full commit SHA

        Raises:
            GitRepositoryError: If git command fails
        """
        result = self._run(["rev-parse", "HEAD"], operation="get HEAD SHA")
        return result.stdout.strip()
