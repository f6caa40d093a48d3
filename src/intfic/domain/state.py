"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

SCORE_COUNTER = "score"
SAVED_FLAG = "saved"


def _initial_counters() -> Dict[str, int]:
    return {SCORE_COUNTER: 0}


@dataclass
class GameState:
    """Flags, counters and story position for a single run.

    `name` is the identity a save is stored under. Unset flags read as False and
    unset counters read as 0.
    """

    name: str
    document: str = ""
    block: str = ""
    flags: Dict[str, bool] = field(default_factory=dict)
    counters: Dict[str, int] = field(default_factory=_initial_counters)

    @property
    def position(self) -> Tuple[str, str]:
        """Return the (story file, block name) pair the run is at."""
        return self.document, self.block

    def set_progress(self, document: str, block: str) -> None:
        self.document = document
        self.block = block

    def get_flag(self, name: str) -> bool:
        return self.flags.get(name, False)

    def set_flag(self, name: str, value: bool) -> None:
        self.flags[name] = value

    def get_counter(self, name: str) -> int:
        return self.counters.get(name, 0)

    def update_counter(self, name: str, delta: int) -> None:
        """Add `delta` to the counter, starting from 0 if it was never set."""
        self.counters[name] = self.get_counter(name) + delta

    def add_score(self, amount: int) -> None:
        self.update_counter(SCORE_COUNTER, amount)

    def describe(self) -> str:
        """Return a multi-line summary used by debug output."""
        return (
            f"  Name: {self.name}\n"
            f"  Progress: [Story: {self.document}, Block: {self.block}]\n"
            f"  Flags: {self.flags}\n"
            f"  Counters: {self.counters}\n"
        )
