"""Test fixtures for gist-sync tests.

This module provides:
- Page factories with sensible defaults
- Sample GitHub gist API payloads
"""

from .sample_gists import (
    SAMPLE_GIST_JSON,
    make_config,
    make_gist_json,
    make_page,
)

__all__ = [
    "SAMPLE_GIST_JSON",
    "make_config",
    "make_gist_json",
    "make_page",
]
