"""Data models for gists, their files and the tool configuration."""

from src.models.gist_config import GistConfig
from src.models.gist_page import File, Page

__all__ = ['File', 'GistConfig', 'Page']
