"""Process-wide configuration for gist-sync."""

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_EDITOR = "vim"
CACHE_FILE_NAME = "cache.json"


@dataclass(frozen=True)
class GistConfig:
    """Configuration built once at startup and handed to every component.

    Attributes:
        user: Local GitHub user whose gists are mirrored
        token: GitHub token used for API calls and git push
        work_dir: Root directory holding the cache file and the mirrors
        editor: Editor command line used to edit files
        api_url: GitHub API base URL
    """
    user: str
    token: str
    work_dir: str
    editor: str = DEFAULT_EDITOR
    api_url: str = DEFAULT_API_URL

    @property
    def cache_path(self) -> str:
        """Path of the page metadata cache."""
        return os.path.join(self.work_dir, CACHE_FILE_NAME)

    def mirror_dir(self, page_id: str) -> str:
        """Local mirror directory for a gist of the configured user."""
        return os.path.join(self.work_dir, self.user, page_id)
