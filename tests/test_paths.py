from __future__ import annotations

from pathlib import Path

import pytest

from intfic.data import paths
from intfic.data.errors import StoryFileNotFoundError
from intfic.data.story_loader import load_story_lines


def test_default_stories_path_points_at_shipped_stories() -> None:
    stories = paths.get_stories_path()
    assert stories == paths.get_repo_root() / "data" / "stories"
    assert (stories / "example_1.txt").is_file()


def test_explicit_base_path_wins(tmp_path: Path) -> None:
    assert paths.get_stories_path(tmp_path) == tmp_path


def test_load_story_lines_splits_without_newlines(tmp_path: Path) -> None:
    story = tmp_path / "story.txt"
    story.write_text(":- start\r\nHello\n\n-> end\n", encoding="utf-8")
    assert load_story_lines(story) == [":- start", "Hello", "", "-> end"]


def test_load_story_lines_missing_file(tmp_path: Path) -> None:
    with pytest.raises(StoryFileNotFoundError):
        load_story_lines(tmp_path / "missing.txt")
