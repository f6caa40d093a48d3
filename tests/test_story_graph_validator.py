from __future__ import annotations

from intfic.data.story_parser import parse_story
from intfic.services.story_graph_validator import Issue, format_issue, validate_story_blocks


def _codes(issues: list[Issue]) -> list[str]:
    return [issue.code for issue in issues]


def _validate(text: str, **kwargs) -> list[Issue]:
    return validate_story_blocks(parse_story(text.splitlines()), **kwargs)


def test_clean_story_has_no_issues() -> None:
    story = """\
:- start
*- Left -> left -> left
*- Right -> @WESTS -> right
:- left
-> right
:- right
*- Onward -> on -> next.txt
"""
    assert _validate(story, document_exists=lambda name: name == "next.txt") == []


def test_duplicate_block_names() -> None:
    issues = _validate(":- start\n:- start\n")
    assert _codes(issues) == ["DUPLICATE_BLOCK_NAME"]
    assert issues[0].severity == "ERROR"


def test_missing_block_and_story_file() -> None:
    story = ":- start\n*- A -> a -> nowhere\n*- B -> b -> gone.txt\n"
    issues = _validate(story, document_exists=lambda name: False)
    assert _codes(issues) == ["MISSING_BLOCK_REF", "MISSING_STORY_FILE"]
    assert issues[0].context["target"] == "nowhere"


def test_story_files_unchecked_without_lookup() -> None:
    assert _validate(":- start\n-> gone.txt\n") == []


def test_unknown_dictionary_warns() -> None:
    issues = _validate(":- start\n*- A -> @SIDEWAYS -> start\n*- B -> b -> start\n")
    assert _codes(issues) == ["UNKNOWN_DICTIONARY"]
    assert issues[0].severity == "WARN"


def test_unreachable_block_warns() -> None:
    issues = _validate(":- start\nThe end.\n:- orphan\n")
    assert _codes(issues) == ["UNREACHABLE_BLOCK"]
    assert issues[0].context == {"block": "orphan"}


def test_auto_advance_cycle() -> None:
    story = ":- start\n-> a\n:- a\n-> b\n:- b\n-> a\n"
    issues = _validate(story)
    assert _codes(issues) == ["AUTOADVANCE_CYCLE"]
    assert issues[0].context["cycle"] == "a -> b -> a"

    relaxed = _validate(story, error_on_autoadvance_cycle=False)
    assert relaxed[0].severity == "WARN"


def test_conditional_single_choice_is_not_a_cycle() -> None:
    story = ":- start\n-> a\n:- a\n*- ?- done => Again -> again -> start\n"
    assert _validate(story) == []


def test_format_issue() -> None:
    issue = Issue(severity="WARN", code="UNREACHABLE_BLOCK", message="Block is unreachable.", context={"block": "x"})
    assert format_issue(issue) == "[WARN] UNREACHABLE_BLOCK: Block is unreachable. (block=x)"
