"""Decides whether player input selects a presented choice."""
from __future__ import annotations

from typing import Callable

from intfic.domain.defs import StoryChoiceDef
from intfic.services.dictionaries import is_member
from intfic.services.input_parsing import sanitize

MembershipLookup = Callable[[str, str], bool]


def choice_matches(
    choice: StoryChoiceDef,
    text: str,
    ordinal: int,
    *,
    label: str | None = None,
    lookup: MembershipLookup = is_member,
) -> bool:
    """Return True when sanitized `text` selects `choice`.

    `ordinal` is the 1-based position among the presented choices and `label` the
    label as displayed (defaults to the raw label). Input matches the label, the raw
    target, the ordinal, any substring of the keywords, or, for `@NAME` keywords,
    any phrase of that dictionary.
    """
    if not text:
        return False
    shown_label = choice.label if label is None else label
    if sanitize(shown_label) == text:
        return True
    if choice.target == text or str(ordinal) == text:
        return True
    if text in choice.keywords:
        return True
    dictionary_name = choice.dictionary_name
    return dictionary_name is not None and lookup(dictionary_name, text)
