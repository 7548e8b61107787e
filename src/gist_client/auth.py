"""Authentication module for loading GitHub credentials.

This module handles loading the local user name and GitHub token from
environment variables using python-dotenv. It validates that all required
credentials are present and raises appropriate errors if any are missing.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """GitHub credentials for the local user."""
    user: str
    token: str


class Authenticator:
    """Loads and validates GitHub credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged to prevent security risks.

    Required environment variables:
        GIST_USER or USER: GitHub user name owning the gists
        GITHUB_TOKEN: GitHub personal access token with the gist scope

    Raises:
        InvalidCredentialsError: If any required credential is missing

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Syncing gists of {creds.user}")
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get GitHub credentials from environment variables.

        Returns:
            Credentials: A named tuple containing user and token

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        user = os.getenv('GIST_USER') or os.getenv('USER')
        token = os.getenv('GITHUB_TOKEN')

        missing = []
        if not user:
            missing.append('USER')
        if not token:
            missing.append('GITHUB_TOKEN')

        if missing:
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint="environment",
                reason=f"missing {', '.join(missing)}",
            )

        return Credentials(user=user, token=token)  # type: ignore[arg-type]
