"""Test helper modules for git-backed gist tests.

This package provides utilities for unit and integration testing:
- git_test_utils: Temporary repositories, bare gist remotes, mock inspection
"""

from .git_test_utils import (
    create_bare_gist_remote,
    create_temp_git_repo,
    create_test_commit,
    get_commit_count,
    get_file_at_ref,
    get_git_command_calls,
)

__all__ = [
    'create_bare_gist_remote',
    'create_temp_git_repo',
    'create_test_commit',
    'get_commit_count',
    'get_file_at_ref',
    'get_git_command_calls',
]
