"""API wrapper for the GitHub gist REST API.

This module talks to the GitHub REST API with requests and provides
error translation from HTTP exceptions to our typed exception hierarchy.
It integrates with the retry logic for handling rate limits.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import requests
from requests.exceptions import ConnectionError, HTTPError, Timeout

from src.models.gist_config import GistConfig
from src.models.gist_page import Page, parse_timestamp

from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from .retry_logic import retry_on_rate_limit

logger = logging.getLogger(__name__)

# Request timeout in seconds
API_TIMEOUT = 30

# Maximum page size accepted by the gists listing endpoint
PER_PAGE = 100


class GistAPI:
    """Thin client for the GitHub gist endpoints with error translation.

    This class:
    1. Authenticates every request with the configured token
    2. Follows pagination of the gist listing
    3. Translates HTTP errors to typed exceptions
    4. Integrates retry logic for rate limits

    Example:
        >>> api = GistAPI(config)
        >>> pages = api.list_gists("octocat")
    """

    def __init__(self, config: GistConfig, session: Optional[requests.Session] = None):
        """Initialize the API client.

        Args:
            config: Tool configuration (token and API base URL)
            session: Optional requests session (created if not given)
        """
        self.config = config
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {self.config.token}",
        }

    def _sanitize_credentials(self, text: str) -> str:
        """Sanitize error messages to prevent token leakage.

        Args:
            text: The error message or log text to sanitize

        Returns:
            str: Sanitized text with credentials masked

        Example:
            >>> api._sanitize_credentials("Authorization: token ghp_abc123")
            "Authorization: ***REDACTED***"
        """
        if not text:
            return text

        sanitized = re.sub(r'://([\w.-]+):([\w.-]+)@', r'://***:***@', text)
        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE,
        )
        # GitHub token prefixes (ghp_, gho_, ghu_, ghs_, ghr_, github_pat_)
        sanitized = re.sub(
            r'\b(gh[pousr]_[A-Za-z0-9]{8,}|github_pat_[A-Za-z0-9_]{8,})\b',
            '***REDACTED***',
            sanitized,
        )
        if self.config.token:
            sanitized = sanitized.replace(self.config.token, '***REDACTED***')
        return sanitized

    def _translate_error(
        self,
        exception: Exception,
        operation: str,
        user: Optional[str] = None,
    ) -> Exception:
        """Translate HTTP exceptions to typed gist client exceptions.

        Args:
            exception: The original exception from requests
            operation: Description of the operation that failed (for logging)
            user: Listed user, if the operation targets one (maps 404)

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (Timeout, ConnectionError)):
            return APIUnreachableError(endpoint=self.config.api_url)

        status_code = None
        if isinstance(exception, HTTPError) and exception.response is not None:
            status_code = exception.response.status_code

        if status_code == 401:
            return InvalidCredentialsError(
                user=self.config.user,
                endpoint=self.config.api_url,
            )

        if status_code == 404 and user is not None:
            return UserNotFoundError(user=user)

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        if status_code is not None:
            return APIAccessError(
                f"GitHub API failure during {operation} (HTTP {status_code})"
            )
        return APIAccessError(f"GitHub API failure during {operation}")

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        user: Optional[str] = None,
        **kwargs: Any,
    ) -> requests.Response:
        url = f"{self.config.api_url.rstrip('/')}{path}"

        def _send() -> requests.Response:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                timeout=API_TIMEOUT,
                **kwargs,
            )
            response.raise_for_status()
            return response

        try:
            return retry_on_rate_limit(_send)
        except APIAccessError:
            raise
        except Exception as e:
            raise self._translate_error(e, operation, user=user) from e

    def list_gists(self, user: str) -> List[Page]:
        """Fetch every gist owned by a user.

        Args:
            user: GitHub login

        Returns:
            List of Page in API order

        Raises:
            InvalidCredentialsError: If the token is rejected
            UserNotFoundError: If the user does not exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If API access fails after retries
        """
        pages: List[Page] = []
        page_num = 1

        while True:
            response = self._request(
                "GET",
                f"/users/{user}/gists",
                operation=f"list_gists({user})",
                user=user,
                params={"per_page": PER_PAGE, "page": page_num},
            )
            batch = response.json()
            if not isinstance(batch, list):
                raise APIAccessError(
                    f"Unexpected gist listing payload: {type(batch).__name__}"
                )

            pages.extend(self._to_page(item, user) for item in batch)
            logger.debug(f"Fetched {len(batch)} gists from listing page {page_num}")

            if not batch or "next" not in response.links:
                break
            page_num += 1

        logger.info(f"Listed {len(pages)} gists for {user}")
        return pages

    def create_gist(
        self,
        description: str,
        files: Dict[str, str],
        public: bool = False,
    ) -> Page:
        """Create a new gist.

        Args:
            description: Gist description
            files: Mapping of file name to content
            public: Whether the gist is public

        Returns:
            The created Page

        Raises:
            ValueError: If no files are given
            InvalidCredentialsError: If the token is rejected
            APIUnreachableError: If the API is unreachable
            APIAccessError: If API access fails after retries
        """
        if not files:
            raise ValueError("A gist needs at least one file")

        payload = {
            "description": description,
            "public": public,
            "files": {name: {"content": content} for name, content in files.items()},
        }
        response = self._request(
            "POST",
            "/gists",
            operation=f"create_gist({', '.join(files)})",
            json=payload,
        )
        page = self._to_page(response.json(), self.config.user)
        logger.info(f"Created gist {page.id} with {len(page.files)} file(s)")
        return page

    @staticmethod
    def _to_page(data: Dict[str, Any], user: str) -> Page:
        """Map a gist API object to a Page."""
        try:
            owner = (data.get("owner") or {}).get("login") or user
            return Page(
                user=owner,
                id=data["id"],
                description=data.get("description") or "",
                url=data["html_url"],
                public=bool(data.get("public")),
                created_at=parse_timestamp(data["created_at"]),
                updated_at=parse_timestamp(data["updated_at"]),
                files=tuple((data.get("files") or {}).keys()),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise APIAccessError(f"Malformed gist in API response: {e}") from e
