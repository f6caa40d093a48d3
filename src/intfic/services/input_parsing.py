"""Normalisation of player input and recognition of control commands."""
from __future__ import annotations

from intfic.core.types import ControlCommand
from intfic.services.dictionaries import EXITS, LOADS, SAVES


def sanitize(raw: str) -> str:
    """Lowercase, keep only letters, digits and spaces, then trim."""
    kept = "".join(char for char in raw if char.isalnum() or char == " ")
    return kept.strip().lower()


def classify_command(text: str) -> ControlCommand | None:
    """Return the control command a sanitized input asks for, if any."""
    if text in EXITS:
        return "quit"
    if text in SAVES:
        return "save"
    if text in LOADS:
        return "load"
    return None
