"""Data layer utilities for loading and parsing story files."""

from .errors import (
    DataError,
    DataLoadError,
    DataValidationError,
    MalformedDirectiveError,
    StoryFileNotFoundError,
)
from .paths import get_repo_root, get_stories_path

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "MalformedDirectiveError",
    "StoryFileNotFoundError",
    "get_repo_root",
    "get_stories_path",
]
