"""Service-layer exceptions."""


class SaveLoadError(Exception):
    """Raised when save or load operations fail."""


class StoryNavigationError(Exception):
    """Raised when a story transition leads nowhere."""


class BlockNotFoundError(StoryNavigationError):
    """Raised when a block name is not present in the current story file."""


class TargetNotFoundError(StoryNavigationError):
    """Raised when a choice target is neither a block nor a readable story file."""
