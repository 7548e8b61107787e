"""Edit and publish a single gist file.

This module provides the FilePublisher class which runs one interactive edit
session: open the file in the editor, and if the mirror changed, commit the
file and push it, then drop the cached listing.
"""

import logging
import os
from contextlib import nullcontext
from typing import Callable, ContextManager, Optional

from src.git_integration.editor import Editor
from src.git_integration.git_repository import GitMirror
from src.git_integration.models import EditState, PublishResult
from src.git_integration.page_cache import PageCache
from src.models.gist_config import GistConfig
from src.models.gist_page import File

logger = logging.getLogger(__name__)

COMMIT_MESSAGE = "update"


class FilePublisher:
    """Runs the edit/publish flow for one file.

    State sequence:
        EDITING -> CLEAN_CHECK -> DONE                                (no change)
        EDITING -> CLEAN_CHECK -> STAGING -> COMMITTING -> PUSHING -> DONE
    Any error moves the session to FAILED and propagates to the caller; the
    cache is only invalidated after a successful push.

    Example:
        >>> publisher = FilePublisher(config)
        >>> result = publisher.edit(file)
        >>> if result.pushed:
        ...     print("Pushed")
    """

    def __init__(
        self,
        config: GistConfig,
        editor: Optional[Editor] = None,
        cache: Optional[PageCache] = None,
        mirror_factory: Optional[Callable[..., GitMirror]] = None,
        status: Optional[Callable[[str], ContextManager[None]]] = None,
    ):
        """Initialize publisher with dependencies.

        Args:
            config: Tool configuration
            editor: Editor to launch (defaults to the configured editor)
            cache: Page metadata cache to invalidate after a push
            mirror_factory: Callable building a GitMirror (defaults to GitMirror)
            status: Context manager factory wrapping the push (e.g. a spinner)
        """
        self.config = config
        self.editor = editor or Editor(config.editor)
        self.cache = cache or PageCache(config.cache_path)
        self.mirror_factory = mirror_factory or GitMirror
        self.status = status or (lambda message: nullcontext())
        self.state = EditState.EDITING

    def _enter(self, state: EditState) -> None:
        logger.debug(f"Edit session: {self.state.value} -> {state.value}")
        self.state = state

    def edit(self, file: File) -> PublishResult:
        """Edit a file and publish the change if there is one.

        Args:
            file: File from the gist index

        Returns:
            PublishResult telling whether a commit was pushed

        Raises:
            EditorError: If the editor fails
            GitRepositoryError: If open, add, commit or push fails
        """
        self.state = EditState.EDITING
        try:
            return self._run(file)
        except Exception:
            self._enter(EditState.FAILED)
            raise

    def _run(self, file: File) -> PublishResult:
        self.editor.launch(file.full_path)

        mirror = self.mirror_factory(
            url=file.page.url,
            work_dir=os.path.dirname(file.full_path),
            username=file.page.user,
            token=self.config.token,
        )
        mirror.open()

        self._enter(EditState.CLEAN_CHECK)
        if mirror.is_clean():
            logger.info(f"No changes in {file.name}, nothing to push")
            self._enter(EditState.DONE)
            return PublishResult(file_name=file.name, state=self.state, pushed=False)

        self._enter(EditState.STAGING)
        mirror.add(file.name)

        self._enter(EditState.COMMITTING)
        mirror.commit(COMMIT_MESSAGE)

        self._enter(EditState.PUSHING)
        with self.status("Pushing..."):
            mirror.push()

        # The remote listing is stale now (updated_at changed)
        self.cache.invalidate()

        self._enter(EditState.DONE)
        logger.info(f"Published {file.name} to gist {file.page.id}")
        return PublishResult(file_name=file.name, state=self.state, pushed=True)
