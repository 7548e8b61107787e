"""Metadata cache for the gist listing.

This module provides the PageCache class that stores the last known set of
gists as a single JSON file, so the remote listing call can be skipped.
The cache is a pure hint: every failure degrades to "no cache" and is never
propagated to the caller.
"""

import json
import logging
import os
from typing import List

from src.git_integration.errors import CacheError
from src.models.gist_page import Page

logger = logging.getLogger(__name__)


class PageCache:
    """Best-effort JSON snapshot of the user's gists.

    File structure:
        ~/.gist/
          cache.json    # [{"user": ..., "id": ..., "files": [...]}, ...]

    Example:
        >>> cache = PageCache("/home/me/.gist/cache.json")
        >>> pages = cache.load()
        >>> if not pages:
        ...     pages = api.list_gists("octocat")
        ...     cache.save(pages)
    """

    def __init__(self, cache_path: str):
        """Initialize page cache.

        Args:
            cache_path: Path of the cache file (e.g., ~/.gist/cache.json)
        """
        self.cache_path = cache_path
        self._ensure_absolute_path()

    def _ensure_absolute_path(self) -> None:
        """Convert cache_path to absolute path if relative."""
        if not os.path.isabs(self.cache_path):
            self.cache_path = os.path.abspath(self.cache_path)

    def load(self) -> List[Page]:
        """Load the cached gists.

        Returns:
            Cached pages, or an empty list if the cache is absent or corrupt
        """
        try:
            return self._read()
        except FileNotFoundError:
            logger.debug(f"Cache miss: {self.cache_path} not found")
        except CacheError as e:
            logger.warning(f"Ignoring unusable cache: {e}")
        except OSError as e:
            logger.warning(f"Ignoring unreadable cache {self.cache_path}: {e}")
        return []

    def _read(self) -> List[Page]:
        """Read and validate the cache file.

        Raises:
            FileNotFoundError: If the cache file does not exist
            OSError: If the file cannot be read
            CacheError: If the content is not a valid page list
        """
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueError
            raise CacheError(
                cache_path=self.cache_path,
                message=f"Failed to parse cache: {e!r}",
            )

        if not isinstance(records, list):
            raise CacheError(
                cache_path=self.cache_path,
                message=f"Cache must be a JSON array, got {type(records).__name__}",
            )

        try:
            pages = [Page.from_dict(record) for record in records]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CacheError(
                cache_path=self.cache_path,
                message=f"Invalid page record: {e!r}",
            )

        logger.debug(f"Cache hit: {len(pages)} pages from {self.cache_path}")
        return pages

    def save(self, pages: List[Page]) -> None:
        """Overwrite the cache with the given pages.

        Failures are logged and ignored because the cache is not authoritative.

        Args:
            pages: Pages to persist
        """
        try:
            os.makedirs(os.path.dirname(self.cache_path), exist_ok=True)
            with open(self.cache_path, "w", encoding="utf-8") as f:
                json.dump([page.to_dict() for page in pages], f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to save cache {self.cache_path}: {e}")
            return

        logger.debug(f"Cached {len(pages)} pages to {self.cache_path}")

    def invalidate(self) -> None:
        """Delete the cache file. Missing file is not an error."""
        try:
            os.remove(self.cache_path)
        except FileNotFoundError:
            logger.debug(f"No cache to invalidate at {self.cache_path}")
            return
        except OSError as e:
            logger.warning(f"Failed to delete cache file {self.cache_path}: {e}")
            return

        logger.info(f"Invalidated cache {self.cache_path}")
