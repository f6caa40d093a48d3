"""Shared CLI rendering helpers."""
from __future__ import annotations

import random
import sys
import time
from typing import Callable, Dict, Sequence, TextIO

from intfic.core.config import StoryConfig
from intfic.core.types import ColorName
from intfic.domain.text_directives import ResolvedLine
from intfic.services.story_service import BlockNarration, PresentedChoice

ANSI_RESET = "\033[0m"
ANSI_COLORS: Dict[ColorName, str] = {
    "white": "",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "green": "\033[32m",
    "red": "\033[31m",
    "purple": "\033[35m",
    "cyan": "\033[36m",
}


def colorize(text: str, color: ColorName) -> str:
    """Wrap text in the ANSI escape for `color`; white is left untouched."""
    code = ANSI_COLORS.get(color, "")
    if not code or not text:
        return text
    return f"{code}{text}{ANSI_RESET}"


def format_line(line: ResolvedLine) -> str:
    """Return the line with its coloured spans applied."""
    return "".join(colorize(text, color) for text, color in line.spans())


class ConsoleRenderer:
    """Writes story output to a terminal, optionally with a typewriter effect."""

    def __init__(
        self,
        config: StoryConfig | None = None,
        *,
        stream: TextIO | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or StoryConfig()
        self._stream = stream
        self._sleep = sleep
        self._rng = rng or random.Random()

    def render_narration(self, segments: Sequence[BlockNarration]) -> None:
        """Render each block's lines; empty lines produce no output."""
        for segment in segments:
            if self._config.debug:
                self._write(f"[{segment.block_name}]\n")
            for line in segment.lines:
                self.render_line(line)
            self._write("\n")

    def render_line(self, line: ResolvedLine, *, fast: bool = False) -> None:
        if not line.text:
            return
        if line.is_prompt:
            self._write("\n")
        for text, color in line.spans():
            self._type(text, color)
        self._write("\n")
        self._pause(self._config.line_delay / 2 if fast else self._config.line_delay)

    def render_choices(self, choices: Sequence[PresentedChoice]) -> None:
        """Display numbered story choices."""
        if not choices:
            return
        for presented in choices:
            numbered = ResolvedLine(
                text=f"{presented.number}) {presented.label.text}",
                color=presented.label.color,
            )
            self.render_line(numbered, fast=True)
        self._write("\n")

    def render_message(self, text: str, color: ColorName = "white") -> None:
        """Render a system message such as 'Game Saved!'."""
        self.render_line(ResolvedLine(text=text, color=color))

    def render_question(self, text: str) -> None:
        self.render_line(ResolvedLine(text=text, color="cyan"), fast=True)

    def _type(self, text: str, color: ColorName) -> None:
        if self._config.fast_mode:
            self._write(colorize(text, color))
            return
        for char in text:
            self._write(colorize(char, color))
            self._pause(self._config.type_delay * (self._rng.random() + 0.25))

    def _pause(self, seconds: float) -> None:
        if not self._config.fast_mode:
            self._sleep(seconds)

    def _write(self, text: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(text)
        stream.flush()
