"""Runtime configuration threaded into the interpreter and renderer."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_DIRECTIVE_DEPTH = 16
DEFAULT_MAX_AUTO_ADVANCES = 1000


@dataclass(frozen=True, slots=True)
class StoryConfig:
    """Options that change how a story is played, not what it contains."""

    debug: bool = False
    fast_mode: bool = True
    max_directive_depth: int = DEFAULT_MAX_DIRECTIVE_DEPTH
    max_auto_advances: int = DEFAULT_MAX_AUTO_ADVANCES
    # Seconds; only used when fast_mode is off.
    line_delay: float = 1.2
    type_delay: float = 0.024
