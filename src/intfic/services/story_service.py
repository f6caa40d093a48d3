"""Story progression services."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from intfic.core.config import StoryConfig
from intfic.data.errors import DataError
from intfic.data.repositories import StoryRepository
from intfic.domain.defs import StoryBlockDef, StoryChoiceDef
from intfic.domain.state import SAVED_FLAG, GameState
from intfic.domain.text_directives import (
    DirectiveSyntaxError,
    ResolvedLine,
    resolve_choice_label,
    resolve_line,
)
from intfic.services.choice_matcher import MembershipLookup, choice_matches
from intfic.services.dictionaries import is_member
from intfic.services.errors import BlockNotFoundError, StoryNavigationError, TargetNotFoundError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BlockNarration:
    """Resolved text of one block, in display order."""

    block_name: str
    lines: List[ResolvedLine] = field(default_factory=list)


@dataclass(slots=True)
class PresentedChoice:
    """A choice that passed its condition, numbered as the player sees it."""

    number: int
    label: ResolvedLine
    choice: StoryChoiceDef


@dataclass(slots=True)
class StoryView:
    """Data returned to the presentation layer for rendering.

    `segments` holds every block played since the last input, auto-advanced ones
    included. With no `choices` the story has ended; `dead_end` then explains why
    when it ended on a navigation error rather than a block without choices.
    """

    segments: List[BlockNarration] = field(default_factory=list)
    choices: List[PresentedChoice] = field(default_factory=list)
    dead_end: str | None = None

    @property
    def ended(self) -> bool:
        return not self.choices


class StoryService:
    """Application service that plays story blocks against a game state."""

    def __init__(
        self,
        story_repo: StoryRepository,
        *,
        config: StoryConfig | None = None,
        lookup: MembershipLookup = is_member,
    ) -> None:
        self._story_repo = story_repo
        self._config = config or StoryConfig()
        self._lookup = lookup

    def start(self, state: GameState) -> StoryView:
        """Load the state's story file and play from its current block.

        Unlike later transitions, failing to load the starting file is not
        recoverable: DataError propagates to the caller.
        """
        blocks = self._story_repo.load(state.document)
        block_name = state.block or blocks[0].name
        return self.run(state, block_name)

    def run(self, state: GameState, block_name: str) -> StoryView:
        """Play a block of the current story file, following auto-advances."""
        view = StoryView()
        advances = 0
        while True:
            block = self._story_repo.find(block_name)
            if block is None:
                return self._dead_end(view, BlockNotFoundError(f"No block found with the name '{block_name}'."))
            self._enter_block(state, block, view)
            choices = self.filter_choices(block, state)
            if len(choices) != 1:
                view.choices = choices
                return view
            advances += 1
            if advances > self._config.max_auto_advances:
                return self._dead_end(
                    view,
                    StoryNavigationError(f"Too many automatic transitions, stopped at block '{block.name}'."),
                )
            try:
                block_name = self._resolve_target(state, choices[0].choice)
            except StoryNavigationError as exc:
                return self._dead_end(view, exc)

    def choose(self, state: GameState, view: StoryView, text: str) -> StoryView | None:
        """Match sanitized input against the presented choices and follow the first hit.

        Returns None when the input selects nothing.
        """
        for presented in view.choices:
            if choice_matches(
                presented.choice,
                text,
                presented.number,
                label=presented.label.text,
                lookup=self._lookup,
            ):
                return self.follow(state, presented.choice)
        return None

    def follow(self, state: GameState, choice: StoryChoiceDef) -> StoryView:
        """Follow a choice to its block or story file and play from there."""
        try:
            block_name = self._resolve_target(state, choice)
        except StoryNavigationError as exc:
            return self._dead_end(StoryView(), exc)
        return self.run(state, block_name)

    def render_text(self, block: StoryBlockDef, state: GameState) -> List[ResolvedLine]:
        """Resolve the block's text lines against the current state."""
        lines: List[ResolvedLine] = []
        for line in block.text:
            try:
                resolved = resolve_line(line, state, max_depth=self._config.max_directive_depth)
            except DirectiveSyntaxError as exc:
                logger.warning("Skipping line in block '%s': %s", block.name, exc)
                continue
            if resolved is not None:
                lines.append(resolved)
        return lines

    def filter_choices(self, block: StoryBlockDef, state: GameState) -> List[PresentedChoice]:
        """Return the choices whose conditions hold, numbered from 1."""
        presented: List[PresentedChoice] = []
        for choice in block.choices:
            try:
                label = resolve_choice_label(choice.label, state, max_depth=self._config.max_directive_depth)
            except DirectiveSyntaxError as exc:
                logger.warning("Dropping choice in block '%s': %s", block.name, exc)
                continue
            if label is None:
                continue
            presented.append(PresentedChoice(number=len(presented) + 1, label=label, choice=choice))
        return presented

    def _enter_block(self, state: GameState, block: StoryBlockDef, view: StoryView) -> None:
        # Text sees the state as of entry; effects land before choices are filtered.
        state.block = block.name
        view.segments.append(BlockNarration(block_name=block.name, lines=self.render_text(block, state)))
        self._apply_effects(block, state)

    @staticmethod
    def _apply_effects(block: StoryBlockDef, state: GameState) -> None:
        for name, value in block.flags.items():
            state.set_flag(name, value)
        for name, delta in block.counters.items():
            state.update_counter(name, delta)

    def _resolve_target(self, state: GameState, choice: StoryChoiceDef) -> str:
        target = choice.target
        if choice.targets_document:
            try:
                blocks = self._story_repo.load(target)
            except DataError as exc:
                raise TargetNotFoundError(f"Can't load story file '{target}': {exc}") from exc
            state.document = target
            state.set_flag(SAVED_FLAG, False)
            return blocks[0].name
        if self._story_repo.find(target) is None:
            raise TargetNotFoundError(f"Can't find StoryBlock: {target}")
        state.set_flag(SAVED_FLAG, False)
        return target

    @staticmethod
    def _dead_end(view: StoryView, error: StoryNavigationError) -> StoryView:
        logger.info("Story branch ended: %s", error)
        view.choices = []
        view.dead_end = str(error)
        return view
