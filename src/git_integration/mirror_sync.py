"""Concurrent synchronization of gist mirrors.

This module provides the MirrorSynchronizer class, which ensures a local git
mirror exists for every gist of a page set. Each gist is handled by its own
thread; a failing gist is dropped from the result instead of aborting the run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from src.git_integration.git_repository import GitMirror
from src.git_integration.models import MirrorOutcome, SyncResult
from src.models.gist_config import GistConfig
from src.models.gist_page import Page

logger = logging.getLogger(__name__)


class MirrorSynchronizer:
    """Clones missing gist mirrors and opens existing ones, in parallel.

    One task per gist, no worker cap: gist counts are bounded by a single
    user's account. Tasks touch only their own mirror directory, so they share
    no state. Results are collected in submission order once every task has
    finished, then ordered newest first.

    Example:
        >>> synchronizer = MirrorSynchronizer(config)
        >>> result = synchronizer.synchronize(pages)
        >>> for page_id, reason in result.failures:
        ...     print(f"Skipped {page_id}: {reason}")
    """

    def __init__(
        self,
        config: GistConfig,
        mirror_factory: Optional[Callable[..., GitMirror]] = None,
    ):
        """Initialize mirror synchronizer.

        Args:
            config: Tool configuration (user, token, work directory)
            mirror_factory: Callable building a GitMirror (defaults to GitMirror)
        """
        self.config = config
        self.mirror_factory = mirror_factory or GitMirror

    def synchronize(self, pages: List[Page]) -> SyncResult:
        """Ensure a mirror exists for each page.

        Args:
            pages: Current page set

        Returns:
            SyncResult with the pages whose mirror is available, sorted by
            creation time (newest first), and the failures of this run
        """
        if not pages:
            return SyncResult()

        logger.info(f"Synchronizing {len(pages)} gist mirrors")

        outcomes: List[MirrorOutcome] = []
        with ThreadPoolExecutor(max_workers=len(pages)) as executor:
            futures = [
                executor.submit(self._sync_single_page, page) for page in pages
            ]

            for page, future in zip(pages, futures):
                try:
                    outcomes.append(future.result())
                except Exception as e:
                    outcomes.append(MirrorOutcome(page=page, success=False, error=str(e)))
                    logger.info(f"  ✗ Skipping gist {page.id}: {e}")

        synced = [outcome.page for outcome in outcomes if outcome.success]
        synced.sort(key=lambda page: page.created_at, reverse=True)

        failures = [
            (outcome.page.id, outcome.error or "unknown error")
            for outcome in outcomes
            if not outcome.success
        ]

        logger.info(
            f"Mirror synchronization complete: {len(synced)} available, "
            f"{len(failures)} failed"
        )
        return SyncResult(pages=synced, failures=failures)

    def _sync_single_page(self, page: Page) -> MirrorOutcome:
        """Clone or open the mirror of a single page.

        Raises:
            GitRepositoryError: If the mirror cannot be established
        """
        mirror = self.mirror_factory(
            url=page.url,
            work_dir=self.config.mirror_dir(page.id),
            username=self.config.user,
            token=self.config.token,
        )
        mirror.clone_or_open()
        logger.debug(f"  ✓ Mirror ready: {page.id}")
        return MirrorOutcome(page=page, success=True)
