"""Repository for story blocks parsed from story files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from intfic.core.config import DEFAULT_MAX_DIRECTIVE_DEPTH
from intfic.data import paths
from intfic.data.errors import DataLoadError
from intfic.data.story_loader import load_story_lines
from intfic.data.story_parser import parse_story
from intfic.domain.defs import StoryBlockDef

logger = logging.getLogger(__name__)


class StoryRepository:
    """Loads story files and serves blocks from the current one.

    Only one document is held at a time; loading another story file replaces it.
    """

    def __init__(
        self,
        base_path: Path | str | None = None,
        *,
        max_directive_depth: int = DEFAULT_MAX_DIRECTIVE_DEPTH,
    ) -> None:
        self._base_path = Path(base_path) if base_path is not None else None
        self._max_directive_depth = max_directive_depth
        self._document: str | None = None
        self._blocks: List[StoryBlockDef] | None = None

    @property
    def document(self) -> str | None:
        """Name of the story file currently loaded, if any."""
        return self._document

    def load(self, document: str) -> List[StoryBlockDef]:
        """Parse a story file and make it the current document.

        Raises StoryFileNotFoundError / DataLoadError when the file cannot be read
        and MalformedDirectiveError when it cannot be parsed. On failure the
        previously loaded document stays current.
        """
        if document == self._document and self._blocks is not None:
            return self._blocks
        file_path = self._get_file_path(document)
        lines = load_story_lines(file_path)
        blocks = parse_story(lines, document=document, max_directive_depth=self._max_directive_depth)
        logger.debug("Loaded %d blocks from %s", len(blocks), file_path)
        self._document = document
        self._blocks = blocks
        return blocks

    def exists(self, document: str) -> bool:
        """Return True when a story file with this name is present."""
        return self._get_file_path(document).is_file()

    def find(self, name: str) -> StoryBlockDef | None:
        """Return the first block with exactly this name, or None."""
        for block in self._require_blocks():
            if block.name == name:
                return block
        return None

    def get(self, name: str) -> StoryBlockDef:
        """Return a block by name."""
        block = self.find(name)
        if block is None:
            raise KeyError(name)
        return block

    def first(self) -> StoryBlockDef:
        """Return the opening block of the current document."""
        return self._require_blocks()[0]

    def all(self) -> list[StoryBlockDef]:
        """Return the blocks of the current document in file order."""
        return list(self._require_blocks())

    def _get_file_path(self, document: str) -> Path:
        return paths.get_stories_path(self._base_path) / document

    def _require_blocks(self) -> List[StoryBlockDef]:
        if self._blocks is None:
            raise DataLoadError("No story file has been loaded.")
        return self._blocks
