"""Unit tests for git_integration.gist_index module."""

import os
from unittest.mock import Mock

import pytest

from src.gist_client.errors import APIUnreachableError
from src.git_integration.gist_index import GistIndex
from src.git_integration.models import SyncResult
from tests.fixtures.sample_gists import make_config, make_page


@pytest.fixture
def config(tmp_path):
    return make_config(str(tmp_path))


@pytest.fixture
def mock_api():
    return Mock()


@pytest.fixture
def mock_cache():
    cache = Mock()
    cache.load.return_value = []
    return cache


@pytest.fixture
def mock_synchronizer():
    synchronizer = Mock()
    synchronizer.synchronize.side_effect = lambda pages: SyncResult(pages=list(pages))
    return synchronizer


@pytest.fixture
def index(config, mock_api, mock_cache, mock_synchronizer):
    return GistIndex(
        config,
        api=mock_api,
        cache=mock_cache,
        synchronizer=mock_synchronizer,
    )


def _write_mirror_file(config, page_id, name, content):
    directory = config.mirror_dir(page_id)
    os.makedirs(directory, exist_ok=True)
    with open(os.path.join(directory, name), "w", encoding="utf-8") as f:
        f.write(content)


class TestBuildPages:
    """Test cases for GistIndex.build_pages()."""

    def test_cache_hit_skips_remote_listing(self, index, mock_api, mock_cache):
        """A non-empty cache should be used without calling the API."""
        # Arrange
        cached = [make_page("cached")]
        mock_cache.load.return_value = cached

        # Act
        pages = index.build_pages()

        # Assert
        mock_api.list_gists.assert_not_called()
        assert pages == cached

    def test_cache_miss_fetches_and_seeds_cache(self, index, mock_api, mock_cache):
        """An empty cache should trigger the remote listing and be seeded with it."""
        # Arrange
        remote = [make_page("r1"), make_page("r2")]
        mock_api.list_gists.return_value = remote

        # Act
        pages = index.build_pages()

        # Assert
        mock_api.list_gists.assert_called_once_with("octocat")
        mock_cache.save.assert_called_once_with(remote)
        assert pages == remote

    def test_cache_keeps_pre_synchronization_set(
        self, index, mock_api, mock_cache, mock_synchronizer
    ):
        """The cache should hold every listed page, even those failing to mirror."""
        # Arrange
        remote = [make_page("ok"), make_page("broken")]
        mock_api.list_gists.return_value = remote
        mock_synchronizer.synchronize.side_effect = None
        mock_synchronizer.synchronize.return_value = SyncResult(
            pages=[remote[0]],
            failures=[("broken", "clone failed")],
        )

        # Act
        pages = index.build_pages()

        # Assert
        mock_cache.save.assert_called_once_with(remote)
        assert pages == [remote[0]]
        assert index.last_sync.failures == [("broken", "clone failed")]

    def test_remote_failure_propagates(self, index, mock_api, mock_cache, mock_synchronizer):
        """A listing failure with an empty cache is a hard failure."""
        mock_api.list_gists.side_effect = APIUnreachableError("https://api.github.com")

        with pytest.raises(APIUnreachableError):
            index.build_pages()

        mock_cache.save.assert_not_called()
        mock_synchronizer.synchronize.assert_not_called()

    def test_refresh_invalidates_before_loading(self, index, mock_api, mock_cache):
        """refresh=True should drop the cache first, forcing a remote listing."""
        # Arrange
        calls = []
        mock_cache.invalidate.side_effect = lambda: calls.append("invalidate")

        def load():
            calls.append("load")
            return []

        mock_cache.load.side_effect = load
        mock_api.list_gists.return_value = [make_page()]

        # Act
        index.build_pages(refresh=True)

        # Assert
        assert calls == ["invalidate", "load"]
        mock_api.list_gists.assert_called_once()

    def test_default_does_not_invalidate(self, index, mock_cache):
        """Without refresh the cache must be left alone."""
        mock_cache.load.return_value = [make_page()]

        index.build_pages()

        mock_cache.invalidate.assert_not_called()


class TestFiles:
    """Test cases for GistIndex.files() and find_files()."""

    def test_files_follow_page_then_declared_order(self, index, config):
        """Files should be listed page by page, in each page's declared order."""
        # Arrange
        pages = [make_page("p1", files=("b.txt", "a.txt")), make_page("p2", files=("c.txt",))]
        _write_mirror_file(config, "p1", "b.txt", "bee")
        _write_mirror_file(config, "p1", "a.txt", "ay")
        _write_mirror_file(config, "p2", "c.txt", "sea")

        # Act
        files = index.files(pages)

        # Assert
        assert [(f.page.id, f.name, f.content) for f in files] == [
            ("p1", "b.txt", "bee"),
            ("p1", "a.txt", "ay"),
            ("p2", "c.txt", "sea"),
        ]
        assert files[0].full_path == os.path.join(config.mirror_dir("p1"), "b.txt")

    def test_missing_file_has_empty_content(self, index, config):
        """A declared file absent from the mirror is listed with empty content."""
        pages = [make_page("p1", files=("gone.txt",))]

        files = index.files(pages)

        assert len(files) == 1
        assert files[0].content == ""

    def test_undecodable_file_has_empty_content(self, index, config):
        """Binary content that is not UTF-8 is listed with empty content."""
        directory = config.mirror_dir("p1")
        os.makedirs(directory)
        with open(os.path.join(directory, "blob.bin"), "wb") as f:
            f.write(b"\xff\xfe\x00\x81")

        files = index.files([make_page("p1", files=("blob.bin",))])

        assert files[0].content == ""

    def test_line_endings_are_preserved(self, index, config):
        """CRLF content is returned exactly as stored in the mirror."""
        directory = config.mirror_dir("p1")
        os.makedirs(directory)
        with open(os.path.join(directory, "win.txt"), "wb") as f:
            f.write(b"one\r\ntwo\r\n")

        files = index.files([make_page("p1", files=("win.txt",))])

        assert files[0].content == "one\r\ntwo\r\n"

    def test_files_defaults_to_last_built_pages(self, index, mock_cache, config):
        """files() without arguments should use the pages of the last build."""
        mock_cache.load.return_value = [make_page("p1", files=("x.txt",))]
        _write_mirror_file(config, "p1", "x.txt", "hello")
        index.build_pages()

        files = index.files()

        assert [f.content for f in files] == ["hello"]

    def test_find_files_by_name(self, index, mock_cache):
        """find_files() should return every file with the given name."""
        mock_cache.load.return_value = [
            make_page("p1", files=("notes.md", "x.py")),
            make_page("p2", files=("notes.md",)),
        ]
        index.build_pages()

        matches = index.find_files("notes.md")

        assert [f.page.id for f in matches] == ["p1", "p2"]

    def test_find_files_restricted_to_page(self, index, mock_cache):
        """find_files() with page_id should only consider that gist."""
        mock_cache.load.return_value = [
            make_page("p1", files=("notes.md",)),
            make_page("p2", files=("notes.md",)),
        ]
        index.build_pages()

        matches = index.find_files("notes.md", page_id="p2")

        assert [f.page.id for f in matches] == ["p2"]

    def test_find_files_no_match(self, index, mock_cache):
        """find_files() should return an empty list for unknown names."""
        mock_cache.load.return_value = [make_page("p1", files=("x.py",))]
        index.build_pages()

        assert index.find_files("missing.txt") == []


class TestCreate:
    """Test cases for GistIndex.create()."""

    def test_create_calls_api_then_invalidates(self, index, mock_api, mock_cache):
        """Creating a gist should invalidate the now stale listing."""
        created = make_page("new")
        mock_api.create_gist.return_value = created

        page = index.create("Notes", {"notes.md": "# Notes"}, public=True)

        assert page == created
        mock_api.create_gist.assert_called_once_with(
            "Notes", {"notes.md": "# Notes"}, public=True
        )
        mock_cache.invalidate.assert_called_once()

    def test_create_failure_keeps_cache(self, index, mock_api, mock_cache):
        """A failed creation should leave the cache untouched."""
        mock_api.create_gist.side_effect = APIUnreachableError("https://api.github.com")

        with pytest.raises(APIUnreachableError):
            index.create("Notes", {"notes.md": "# Notes"})

        mock_cache.invalidate.assert_not_called()
