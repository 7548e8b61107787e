"""Retry logic with exponential backoff for GitHub API rate limits.

This module provides retry functionality specifically for handling rate limit
responses from the GitHub API (429, or 403 with an exhausted quota). It
implements exponential backoff (1s, 2s, 4s) and fails fast for other errors.
"""

import time
import logging
from typing import Callable, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Retry function on rate limit with exponential backoff.

    Executes the given function with the provided arguments, retrying up to 3 times
    with exponential backoff (1s, 2s, 4s) when a rate limit error is encountered.
    Fails fast for all other errors.

    Args:
        func: The function to execute with retry logic
        *args: Positional arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        APIAccessError: If rate limit persists after 3 retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> gists = retry_on_rate_limit(session.get, url, timeout=30)
    """
    for retry_num in range(MAX_RETRIES + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                logger.error(
                    f"Rate limit persisted after {MAX_RETRIES} retries, giving up"
                )
                raise APIAccessError(f"GitHub API failure (after {MAX_RETRIES} retries)")

            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    raise APIAccessError(f"GitHub API failure (after {MAX_RETRIES} retries)")


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a GitHub rate limit error.

    GitHub reports primary rate limits as 403 with X-RateLimit-Remaining: 0
    and secondary limits as 429 or 403 with a "rate limit" message.

    Args:
        exception: The exception to check

    Returns:
        True if this appears to be a rate limit error, False otherwise
    """
    error_msg = str(exception).lower()
    rate_limit_patterns = [
        '429',
        'too many requests',
        'rate limit exceeded',
        'secondary rate limit',
    ]
    if any(pattern in error_msg for pattern in rate_limit_patterns):
        return True

    response = getattr(exception, 'response', None)
    status_code = getattr(response, 'status_code', None)
    if status_code == 429:
        return True

    if status_code == 403:
        headers = getattr(response, 'headers', None) or {}
        if headers.get('X-RateLimit-Remaining') == '0':
            return True

    return False
