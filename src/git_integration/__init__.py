"""Git integration for gist mirroring.

This package provides the local git mirrors of gists, the metadata cache,
concurrent mirror synchronization, and the edit/publish flow.
"""

from src.git_integration.editor import Editor
from src.git_integration.errors import (
    CacheError,
    EditorError,
    GitRepositoryError,
)
from src.git_integration.gist_index import GistIndex
from src.git_integration.git_repository import GitMirror
from src.git_integration.mirror_sync import MirrorSynchronizer
from src.git_integration.models import (
    EditState,
    MirrorOutcome,
    PublishResult,
    SyncResult,
)
from src.git_integration.page_cache import PageCache
from src.git_integration.publisher import FilePublisher

__all__ = [
    # Errors
    'CacheError',
    'EditorError',
    'GitRepositoryError',
    # Components
    'Editor',
    'FilePublisher',
    'GistIndex',
    'GitMirror',
    'MirrorSynchronizer',
    'PageCache',
    # Models
    'EditState',
    'MirrorOutcome',
    'PublishResult',
    'SyncResult',
]
