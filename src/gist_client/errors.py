"""Typed exception hierarchy for gist-related errors.

This module defines all custom exceptions used by the gist client library.
All exceptions inherit from the SyncError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all gist-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class GistClientError(SyncError):
    """Base exception for all GitHub gist API errors."""
    pass


class InvalidCredentialsError(GistClientError):
    """Raised when credentials are missing or authentication fails."""

    def __init__(self, user: str, endpoint: str, reason: Optional[str] = None):
        message = f"GitHub credentials are invalid (user: {user}, endpoint: {endpoint})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.user = user
        self.endpoint = endpoint
        self.reason = reason


class UserNotFoundError(GistClientError):
    """Raised when the gist owner does not exist on GitHub."""

    def __init__(self, user: str):
        super().__init__(f"GitHub user {user} not found")
        self.user = user


class APIUnreachableError(GistClientError):
    """Raised when the GitHub API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(GistClientError):
    """Raised when API access fails after retries or due to access restrictions."""

    def __init__(self, message: str = "GitHub API failure (after 3 retries)"):
        super().__init__(message)
