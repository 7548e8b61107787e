"""GitHub gist client library for gist-sync.

This package provides Python abstractions over the GitHub gist REST API,
used to list and create the gists mirrored locally.
"""

from .errors import (
    SyncError,
    GistClientError,
    InvalidCredentialsError,
    UserNotFoundError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "SyncError",
    "GistClientError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
]
