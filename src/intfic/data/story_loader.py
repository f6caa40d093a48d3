"""Low-level helpers for reading story files."""
from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import DataLoadError, StoryFileNotFoundError


def load_story_lines(path: Path) -> List[str]:
    """Read a story file as lines without line endings."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise StoryFileNotFoundError(f"Story file not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DataLoadError(f"Story file is not valid UTF-8: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read story file: {path}") from exc
    return text.splitlines()
