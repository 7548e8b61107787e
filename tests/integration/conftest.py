"""Pytest configuration and fixtures for integration tests.

Provides a temporary work directory, local bare repositories standing in for
gist remotes, and a mocked GistAPI returning pages that point at them.
"""

from pathlib import Path
from typing import Callable, Dict
from unittest.mock import Mock

import pytest

from src.gist_client.api_wrapper import GistAPI
from src.models.gist_config import GistConfig
from src.models.gist_page import Page
from tests.fixtures.sample_gists import make_config, make_page
from tests.helpers.git_test_utils import create_bare_gist_remote


@pytest.fixture(autouse=True)
def git_identity(monkeypatch):
    """Give git a committer identity independent of the host configuration."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Work directory holding the cache file and the mirrors."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def remotes_dir(tmp_path: Path) -> Path:
    """Directory holding the bare gist remotes."""
    path = tmp_path / "remotes"
    path.mkdir()
    return path


@pytest.fixture
def config(work_dir: Path) -> GistConfig:
    return make_config(str(work_dir))


@pytest.fixture
def gist_remote(remotes_dir: Path) -> Callable[..., Page]:
    """Factory creating a bare remote and the Page that points at it.

    Example:
        >>> page = gist_remote("abc", {"x.txt": "hello"})
        >>> page.url  # local path of the bare repository
    """
    def _create(gist_id: str, files: Dict[str, str], **page_fields) -> Page:
        url = create_bare_gist_remote(remotes_dir, gist_id, files)
        return make_page(gist_id, files=tuple(files), url=url, **page_fields)

    return _create


@pytest.fixture
def mock_api() -> Mock:
    """GistAPI mock with an empty listing by default."""
    api = Mock(spec=GistAPI)
    api.list_gists.return_value = []
    return api
