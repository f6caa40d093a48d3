"""Story definition structures produced by the story file parser."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

DOCUMENT_SUFFIX = ".txt"
DICTIONARY_MARKER = "@"


@dataclass(slots=True)
class StoryChoiceDef:
    """Represents a selectable choice on a story block."""

    label: str
    keywords: str
    target: str

    @property
    def targets_document(self) -> bool:
        """True when the target names another story file instead of a block."""
        return self.target.endswith(DOCUMENT_SUFFIX)

    @property
    def dictionary_name(self) -> str | None:
        """Return the referenced dictionary name for `@NAME` keyword fields."""
        if not self.keywords.startswith(DICTIONARY_MARKER):
            return None
        return self.keywords[len(DICTIONARY_MARKER):]


@dataclass(slots=True)
class StoryBlockDef:
    """Fully parsed story block."""

    name: str
    text: List[str] = field(default_factory=list)
    choices: List[StoryChoiceDef] = field(default_factory=list)
    flags: Dict[str, bool] = field(default_factory=dict)
    counters: Dict[str, int] = field(default_factory=dict)
