"""Data models for git integration module.

This module defines the data structures used by the mirror synchronizer and
the edit/publish flow.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from src.models.gist_page import Page


class EditState(Enum):
    """States of an edit/publish session."""

    EDITING = "editing"
    CLEAN_CHECK = "clean_check"
    STAGING = "staging"
    COMMITTING = "committing"
    PUSHING = "pushing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class MirrorOutcome:
    """Result of ensuring one gist mirror exists.

    Attributes:
        page: Gist the task worked on (passed through unchanged)
        success: Whether clone/open completed
        error: Failure reason (None on success)
    """

    page: Page
    success: bool
    error: Optional[str] = None


@dataclass
class SyncResult:
    """Result of a synchronization run.

    Attributes:
        pages: Gists whose mirror is available, newest first
        failures: (page_id, reason) for gists dropped from this run
    """

    pages: List[Page] = field(default_factory=list)
    failures: List[tuple[str, str]] = field(default_factory=list)


@dataclass
class PublishResult:
    """Outcome of an edit/publish session.

    Attributes:
        file_name: Edited file
        state: Final state (DONE unless an error escaped)
        pushed: True if a commit was pushed, False if the mirror stayed clean
    """

    file_name: str
    state: EditState
    pushed: bool
