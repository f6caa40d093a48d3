from __future__ import annotations

import io
import random

import pytest

from intfic.core.config import StoryConfig
from intfic.domain.defs import StoryChoiceDef
from intfic.domain.text_directives import ResolvedLine
from intfic.presentation.cli.render import ANSI_COLORS, ANSI_RESET, ConsoleRenderer, colorize, format_line
from intfic.services.story_service import BlockNarration, PresentedChoice


def test_colorize_wraps_non_white_text() -> None:
    assert colorize("Hi", "white") == "Hi"
    assert colorize("Hi", "yellow") == f"{ANSI_COLORS['yellow']}Hi{ANSI_RESET}"
    assert colorize("", "red") == ""


def test_format_line_colors_quoted_speech_only() -> None:
    line = ResolvedLine(text='"Hi," he said.', color="blue")
    assert format_line(line) == f"{ANSI_COLORS['blue']}\"Hi,\"{ANSI_RESET} he said."


def test_narration_skips_empty_lines(capsys: pytest.CaptureFixture[str]) -> None:
    renderer = ConsoleRenderer()
    segment = BlockNarration(
        block_name="start",
        lines=[ResolvedLine(text=""), ResolvedLine(text="Hello"), ResolvedLine(text="  Now?", color="cyan", is_prompt=True)],
    )

    renderer.render_narration([segment])

    out = capsys.readouterr().out
    assert out == f"Hello\n\n{ANSI_COLORS['cyan']}  Now?{ANSI_RESET}\n\n"


def test_debug_mode_shows_block_names() -> None:
    stream = io.StringIO()
    renderer = ConsoleRenderer(StoryConfig(debug=True), stream=stream)

    renderer.render_narration([BlockNarration(block_name="crossroads", lines=[ResolvedLine(text="Hi")])])

    assert stream.getvalue().startswith("[crossroads]\nHi\n")


def test_choices_are_numbered(capsys: pytest.CaptureFixture[str]) -> None:
    renderer = ConsoleRenderer()
    choices = [
        PresentedChoice(number=1, label=ResolvedLine(text="Walk"), choice=StoryChoiceDef("Walk", "walk", "walk")),
        PresentedChoice(number=2, label=ResolvedLine(text="Run"), choice=StoryChoiceDef("Run", "run", "run")),
    ]

    renderer.render_choices(choices)

    assert capsys.readouterr().out == "1) Walk\n2) Run\n\n"


def test_fast_mode_never_sleeps() -> None:
    pauses: list[float] = []
    renderer = ConsoleRenderer(stream=io.StringIO(), sleep=pauses.append)

    renderer.render_message("Game Saved!")

    assert pauses == []


def test_typewriter_mode_types_each_character() -> None:
    pauses: list[float] = []
    stream = io.StringIO()
    config = StoryConfig(fast_mode=False)
    renderer = ConsoleRenderer(config, stream=stream, sleep=pauses.append, rng=random.Random(0))

    renderer.render_message("Hey")

    assert stream.getvalue() == "Hey\n"
    assert len(pauses) == 4
    assert pauses[-1] == config.line_delay
    assert all(0 < pause < config.line_delay for pause in pauses[:-1])
