from __future__ import annotations

import pytest

from intfic.domain.defs import StoryChoiceDef
from intfic.services.choice_matcher import choice_matches
from intfic.services.dictionaries import Answer, Direction, is_member, parse_answer, parse_direction
from intfic.services.input_parsing import classify_command, sanitize

WALK = StoryChoiceDef(label="Keep walking", keywords="walk stroll", target="walk_car")
NORTH = StoryChoiceDef(label="Go north", keywords="@NORTHS", target="north_road")


def test_sanitize_strips_punctuation_and_case() -> None:
    assert sanitize("  Hello, World!  ") == "hello world"
    assert sanitize("GO-North") == "gonorth"
    assert sanitize("?!") == ""


@pytest.mark.parametrize("text", ["keep walking", "walk_car", "2", "walk", "str", "stroll"])
def test_walk_choice_matches(text: str) -> None:
    assert choice_matches(WALK, text, 2)


@pytest.mark.parametrize("text", ["", "1", "run", "keep running"])
def test_walk_choice_rejects(text: str) -> None:
    assert not choice_matches(WALK, text, 2)


def test_dictionary_keywords_match_phrases() -> None:
    assert choice_matches(NORTH, "forward", 1)
    assert choice_matches(NORTH, "go north", 1)
    assert not choice_matches(NORTH, "south", 1)


def test_displayed_label_is_matched() -> None:
    choice = StoryChoiceDef(label="#- score >= 5 => -y Climb", keywords="", target="tree")
    assert choice_matches(choice, "climb", 1, label="Climb")
    assert not choice_matches(choice, "climb", 1)


def test_lookup_can_be_replaced() -> None:
    calls: list[tuple[str, str]] = []

    def lookup(name: str, text: str) -> bool:
        calls.append((name, text))
        return text == "onward"

    assert choice_matches(NORTH, "onward", 1, lookup=lookup)
    assert calls == [("NORTHS", "onward")]


def test_is_member() -> None:
    assert is_member("NORTHS", "n")
    assert is_member("norths", "n")
    assert not is_member("NOWHERE", "n")


def test_parse_answer() -> None:
    assert parse_answer("yeah") is Answer.YES
    assert parse_answer("nope") is Answer.NO
    assert parse_answer("dunno") is Answer.UNSURE
    assert parse_answer("purple") is None


def test_parse_direction() -> None:
    assert parse_direction("go left") is Direction.WEST
    assert parse_direction("climb") is Direction.UP
    assert parse_direction("sideways") is None


@pytest.mark.parametrize(
    ("text", "command"),
    [("quit", "quit"), ("exit game", "quit"), ("save", "save"), ("load game", "load"), ("walk", None)],
)
def test_classify_command(text: str, command: str | None) -> None:
    assert classify_command(text) == command
