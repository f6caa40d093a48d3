"""Domain definition exports."""

from .story_def import DICTIONARY_MARKER, DOCUMENT_SUFFIX, StoryBlockDef, StoryChoiceDef

__all__ = [
    "DICTIONARY_MARKER",
    "DOCUMENT_SUFFIX",
    "StoryBlockDef",
    "StoryChoiceDef",
]
