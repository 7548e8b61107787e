"""Gist index: cached listing, mirror synchronization and file view.

This module provides the GistIndex class that builds the current page set
(from the metadata cache, or from the GitHub listing when the cache is empty),
makes sure every gist has a local mirror, and projects the result onto the
files stored in those mirrors.
"""

import logging
import os
from typing import Dict, List, Optional

from src.gist_client.api_wrapper import GistAPI
from src.git_integration.mirror_sync import MirrorSynchronizer
from src.git_integration.models import SyncResult
from src.git_integration.page_cache import PageCache
from src.models.gist_config import GistConfig
from src.models.gist_page import File, Page

logger = logging.getLogger(__name__)


class GistIndex:
    """Builds and exposes the locally mirrored gists of the configured user.

    The build sequence:
        1. Load the cache; fetch the remote listing only when it is empty
        2. Write the (pre-synchronization) page set back to the cache
        3. Synchronize mirrors; keep only the gists whose mirror is available

    Caching the set from step 1 rather than the synchronized one means a gist
    that fails to mirror on one run is still listed on the next.

    Example:
        >>> index = GistIndex(config)
        >>> pages = index.build_pages()
        >>> for file in index.files(pages):
        ...     print(file.page.id, file.name)
    """

    def __init__(
        self,
        config: GistConfig,
        api: Optional[GistAPI] = None,
        cache: Optional[PageCache] = None,
        synchronizer: Optional[MirrorSynchronizer] = None,
    ):
        """Initialize gist index with dependencies.

        Args:
            config: Tool configuration
            api: GitHub gist client (optional)
            cache: Page metadata cache (optional)
            synchronizer: Mirror synchronizer (optional)
        """
        self.config = config
        self.api = api or GistAPI(config)
        self.cache = cache or PageCache(config.cache_path)
        self.synchronizer = synchronizer or MirrorSynchronizer(config)
        self.pages: List[Page] = []
        self.last_sync: Optional[SyncResult] = None

    def build_pages(self, refresh: bool = False) -> List[Page]:
        """Build the current page set.

        Args:
            refresh: Drop the cache first, forcing a remote listing

        Returns:
            Pages with an available mirror, newest first

        Raises:
            GistClientError: If the cache is empty and the remote listing fails
        """
        if refresh:
            logger.info("Refresh requested, dropping cached listing")
            self.cache.invalidate()

        pages = self.cache.load()
        if pages:
            logger.info(f"Using {len(pages)} cached gists")
        else:
            logger.info(f"Fetching gist listing for {self.config.user}")
            pages = self.api.list_gists(self.config.user)

        self.cache.save(pages)

        self.last_sync = self.synchronizer.synchronize(pages)
        self.pages = self.last_sync.pages
        return self.pages

    def files(self, pages: Optional[List[Page]] = None) -> List[File]:
        """Project pages onto the files stored in their mirrors.

        Unreadable or missing files are listed with empty content.

        Args:
            pages: Pages to project (defaults to the last built page set)

        Returns:
            Files in page order, then in each page's declared file order
        """
        if pages is None:
            pages = self.pages

        files: List[File] = []
        for page in pages:
            for name in page.files:
                path = os.path.join(self.config.mirror_dir(page.id), name)
                files.append(File(
                    name=name,
                    content=self._read_content(path),
                    full_path=path,
                    page=page,
                ))
        return files

    @staticmethod
    def _read_content(path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read {path}: {e}")
            return ""

    def find_files(self, name: str, page_id: Optional[str] = None) -> List[File]:
        """Find files of the last built page set by name.

        Args:
            name: File name to look for
            page_id: Restrict the search to one gist

        Returns:
            Matching files (possibly several gists hold the same file name)
        """
        return [
            file for file in self.files()
            if file.name == name and (page_id is None or file.page.id == page_id)
        ]

    def create(
        self,
        description: str,
        files: Dict[str, str],
        public: bool = False,
    ) -> Page:
        """Create a gist and drop the now stale cached listing.

        Args:
            description: Gist description
            files: Mapping of file name to content
            public: Whether the gist is public

        Returns:
            The created Page

        Raises:
            ValueError: If no files are given
            GistClientError: If the API call fails
        """
        page = self.api.create_gist(description, files, public=public)
        self.cache.invalidate()
        return page
