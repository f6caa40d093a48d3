"""Service layer exports."""

from .errors import BlockNotFoundError, SaveLoadError, StoryNavigationError, TargetNotFoundError
from .save_service import SaveService
from .story_service import BlockNarration, PresentedChoice, StoryService, StoryView

__all__ = [
    "BlockNarration",
    "BlockNotFoundError",
    "PresentedChoice",
    "SaveLoadError",
    "SaveService",
    "StoryNavigationError",
    "StoryService",
    "StoryView",
    "TargetNotFoundError",
]
