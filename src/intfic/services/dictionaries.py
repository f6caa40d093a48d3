"""Named phrase dictionaries used to understand free-form answers."""
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet

AFFIRMATIVES = frozenset({
    "affirmative", "alright", "aye", "hell yeah", "hell yes", "ok", "okay",
    "please", "positive", "roger", "sure", "y", "yay", "ye", "yeah", "yeah ok", "yeah sure",
    "yep", "yes", "yes please", "yup",
})
NEGATIVES = frozenset({
    "hell nah", "hell no", "n", "nah", "nay", "negative", "never", "no", "nope",
    "no please", "not ok", "not okay", "no way",
})
UNSURATIVES = frozenset({
    "dunno", "huh", "idk", "i dont know", "i dunno", "i guess", "maybe", "no clue",
    "no idea", "not sure", "que", "shrug", "unsure", "what",
})
NORTHS = frozenset({"forward", "go forward", "go north", "n", "north", "northbound", "northward"})
EASTS = frozenset({"e", "east", "eastbound", "eastward", "go east", "go right", "right"})
SOUTHS = frozenset({"backward", "go backward", "go south", "s", "south", "southbound", "southward"})
WESTS = frozenset({"go left", "go west", "left", "w", "west", "westbound", "westward"})
UPS = frozenset({"ascend", "climb", "climb up", "fly", "fly up", "go up", "rise", "u", "up"})
DOWNS = frozenset({"climb down", "d", "descend", "down", "fall", "glide", "go down"})
RETURNS = frozenset({
    "b", "back", "fall back", "go back", "r", "retreat", "return", "run", "run away",
})
EXITS = frozenset({"exit", "exit game", "quit", "quit game"})
SAVES = frozenset({"save", "save game"})
LOADS = frozenset({"load", "load game"})

DICTIONARIES: Dict[str, FrozenSet[str]] = {
    "AFFIRMATIVES": AFFIRMATIVES,
    "NEGATIVES": NEGATIVES,
    "UNSURATIVES": UNSURATIVES,
    "NORTHS": NORTHS,
    "EASTS": EASTS,
    "SOUTHS": SOUTHS,
    "WESTS": WESTS,
    "UPS": UPS,
    "DOWNS": DOWNS,
    "RETURNS": RETURNS,
    "EXITS": EXITS,
    "SAVES": SAVES,
    "LOADS": LOADS,
}


class Answer(Enum):
    YES = "yes"
    NO = "no"
    UNSURE = "unsure"


class Direction(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    UP = "up"
    DOWN = "down"
    RETURN = "return"


_ANSWERS = ((AFFIRMATIVES, Answer.YES), (NEGATIVES, Answer.NO), (UNSURATIVES, Answer.UNSURE))
_DIRECTIONS = (
    (NORTHS, Direction.NORTH),
    (EASTS, Direction.EAST),
    (SOUTHS, Direction.SOUTH),
    (WESTS, Direction.WEST),
    (UPS, Direction.UP),
    (DOWNS, Direction.DOWN),
    (RETURNS, Direction.RETURN),
)


def is_member(dictionary_name: str, text: str) -> bool:
    """Return True when `text` is listed in the named dictionary.

    Unknown dictionary names never match.
    """
    phrases = DICTIONARIES.get(dictionary_name.upper())
    return phrases is not None and text in phrases


def parse_answer(text: str) -> Answer | None:
    for phrases, answer in _ANSWERS:
        if text in phrases:
            return answer
    return None


def parse_direction(text: str) -> Direction | None:
    for phrases, direction in _DIRECTIONS:
        if text in phrases:
            return direction
    return None
