"""Typed exception hierarchy for git integration errors.

This module defines all custom exceptions used by the git integration module.
All exceptions inherit from the SyncError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from src.gist_client.errors import SyncError


class GitRepositoryError(SyncError):
    """Raised when git mirror operations fail.

    Attributes:
        repo_path: Path to the mirror working copy
        message: Error description
        git_output: Git command stderr output
    """

    def __init__(self, repo_path: str, message: str, git_output: str = ""):
        super().__init__(f"Git repository error at {repo_path}: {message}")
        self.repo_path = repo_path
        self.message = message
        self.git_output = git_output


class EditorError(SyncError):
    """Raised when the editor fails to launch or exits with an error.

    Attributes:
        editor: Editor command
        error: Error description
    """

    def __init__(self, editor: str, error: str):
        super().__init__(f"Editor '{editor}' failed: {error}")
        self.editor = editor
        self.error = error


class CacheError(SyncError):
    """Raised when cache operations fail.

    Attributes:
        cache_path: Path to cache file
        message: Error description
    """

    def __init__(self, cache_path: str, message: str):
        super().__init__(f"Cache error at {cache_path}: {message}")
        self.cache_path = cache_path
        self.message = message
