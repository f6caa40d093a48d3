"""Console-driven UI loops for intfic."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence, TypeVar

from intfic.data.errors import DataError
from intfic.data.repositories import StoryRepository
from intfic.domain.state import SAVED_FLAG, GameState
from intfic.presentation.cli import config
from intfic.presentation.cli.render import ConsoleRenderer
from intfic.presentation.cli.save_store import SaveStore
from intfic.services import SaveLoadError, SaveService, StoryService, StoryView
from intfic.services.dictionaries import Answer, Direction, parse_answer, parse_direction
from intfic.services.input_parsing import classify_command, sanitize
from intfic.services.story_graph_validator import format_issue, validate_story_blocks

logger = logging.getLogger(__name__)

DEFAULT_GAME_NAME = "Interactive Fiction Title"
DEFAULT_STORY = "example_1.txt"
DEFAULT_START_BLOCK = "start"
INPUT_PROMPT = "> "
NOT_UNDERSTOOD = "I didn't understand that."
SAVE_FIRST_QUESTION = "Do you want to save first?"

ReadLine = Callable[[str], str]
T = TypeVar("T")


class ConsoleSession:
    """Plays a story in the terminal and intercepts quit, save and load."""

    def __init__(
        self,
        story_service: StoryService,
        state: GameState,
        *,
        save_service: SaveService,
        save_store: SaveStore,
        renderer: ConsoleRenderer,
        read_line: ReadLine = input,
    ) -> None:
        self.state = state
        self._story_service = story_service
        self._save_service = save_service
        self._save_store = save_store
        self._renderer = renderer
        self._read_line = read_line
        self._quit_requested = False
        self._pending_view: StoryView | None = None

    @property
    def quit_requested(self) -> bool:
        return self._quit_requested

    def play(self) -> None:
        """Run the story from the state's position until it ends or the player quits.

        Raises DataError when the starting story file cannot be loaded.
        """
        view = self._story_service.start(self.state)
        while True:
            self._renderer.render_narration(view.segments)
            if view.ended:
                self._render_ending(view)
                return
            self._renderer.render_choices(view.choices)
            next_view = self._await_choice(view)
            if next_view is None:
                return
            view = next_view

    def read_input(self, *, handle_commands: bool = True) -> str | None:
        """Read and sanitize a line of input.

        Control commands are handled here and yield None, as does end of input.
        """
        try:
            raw = self._read_line(INPUT_PROMPT)
        except EOFError:
            if handle_commands:
                self._shutdown()
            return None
        text = sanitize(raw)
        if not handle_commands:
            return text
        command = classify_command(text)
        if command is None:
            return text
        if command == "quit":
            self._handle_quit()
        elif command == "save":
            self.save_game()
        else:
            self._handle_load()
        return None

    def ask_question(self, question: str, *, handle_commands: bool = True) -> Answer | None:
        """Ask a yes/no/unsure question until the answer is understood."""
        return self._ask(question, parse_answer, handle_commands=handle_commands)

    def ask_direction(self, question: str) -> Direction | None:
        """Ask for a direction of travel until the answer is understood."""
        return self._ask(question, parse_direction, handle_commands=True)

    def save_game(self) -> bool:
        """Persist the current state under its game name."""
        payload = self._save_service.serialize(self.state)
        try:
            self._save_store.write(self.state.name, payload)
        except OSError as exc:
            logger.warning("Saving %r failed: %s", self.state.name, exc)
            self._renderer.render_message(f"Couldn't save the game: {exc}", "red")
            return False
        self._renderer.render_message("Game Saved!")
        self.state.set_flag(SAVED_FLAG, True)
        return True

    def load_game(self) -> GameState | None:
        """Read the save stored under the current game name, if there is one."""
        name = self.state.name
        if not self._save_store.exists(name):
            self._renderer.render_message("No save data found", "red")
            return None
        try:
            loaded = self._save_service.deserialize(self._save_store.read(name))
        except (OSError, ValueError, SaveLoadError) as exc:
            logger.warning("Loading %r failed: %s", name, exc)
            self._renderer.render_message(f"Couldn't load the save: {exc}", "red")
            return None
        self._renderer.render_message("Game Loaded!")
        return loaded

    def _await_choice(self, view: StoryView) -> StoryView | None:
        while True:
            text = self.read_input()
            if self._quit_requested:
                return None
            if self._pending_view is not None:
                next_view, self._pending_view = self._pending_view, None
                return next_view
            if not text:
                continue
            next_view = self._story_service.choose(self.state, view, text)
            if next_view is not None:
                return next_view
            self._renderer.render_message(NOT_UNDERSTOOD)

    def _ask(self, question: str, parse: Callable[[str], T | None], *, handle_commands: bool) -> T | None:
        while True:
            self._renderer.render_question(question)
            text = self.read_input(handle_commands=handle_commands)
            if text is None:
                return None
            if not text:
                continue
            parsed = parse(text)
            logger.debug("Input: %s, Parsed: %s", text, parsed)
            if parsed is not None:
                return parsed
            self._renderer.render_message(NOT_UNDERSTOOD)

    def _handle_quit(self) -> None:
        if not self.state.get_flag(SAVED_FLAG):
            answer = self.ask_question(SAVE_FIRST_QUESTION, handle_commands=False)
            if answer is Answer.YES:
                self.save_game()
            elif answer is Answer.UNSURE:
                self._renderer.render_message("I'll just save for you...")
                self.save_game()
        self._shutdown()

    def _handle_load(self) -> None:
        loaded = self.load_game()
        if loaded is None:
            return
        try:
            view = self._story_service.start(loaded)
        except DataError as exc:
            logger.warning("Resuming saved story failed: %s", exc)
            self._renderer.render_message(f"Couldn't resume the saved story: {exc}", "red")
            return
        self.state = loaded
        self._pending_view = view

    def _shutdown(self) -> None:
        self._renderer.render_message("See you next time!")
        self._quit_requested = True

    def _render_ending(self, view: StoryView) -> None:
        if view.dead_end:
            self._renderer.render_message("This path leads nowhere.", "red")
        self._renderer.render_message("The End.")


def check_story(story_repo: StoryRepository, document: str) -> int:
    """Validate a story file and print any issues. Returns a process exit code."""
    try:
        blocks = story_repo.load(document)
    except DataError as exc:
        print(exc)
        return 1
    issues = validate_story_blocks(blocks, document_exists=story_repo.exists)
    for issue in issues:
        print(format_issue(issue))
    if any(issue.severity == "ERROR" for issue in issues):
        return 1
    print(f"{document}: {len(blocks)} blocks OK")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="intfic", description="Play a branching story file.")
    parser.add_argument("story", nargs="?", default=DEFAULT_STORY, help="Story file to start with.")
    parser.add_argument("--block", default=DEFAULT_START_BLOCK, help="Block to start at.")
    parser.add_argument("--name", default=DEFAULT_GAME_NAME, help="Game name used for saves.")
    parser.add_argument("--stories-dir", type=Path, default=None, help="Directory holding story files.")
    parser.add_argument("--save-dir", type=Path, default=None, help="Directory holding saves.")
    parser.add_argument("--debug", action="store_true", help="Show block names and debug logging.")
    parser.add_argument("--typewriter", action="store_true", help="Type text out character by character.")
    parser.add_argument("--check", action="store_true", help="Validate the story file and exit.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive CLI session."""
    args = _build_parser().parse_args(argv)
    options = config.load_config()
    if args.debug:
        options["debug"] = True
    if args.typewriter:
        options["text_display_mode"] = "typewriter"
    story_config = config.build_story_config(options)
    logging.basicConfig(
        level=logging.DEBUG if story_config.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    story_repo = StoryRepository(args.stories_dir, max_directive_depth=story_config.max_directive_depth)
    if args.check:
        return check_story(story_repo, args.story)

    state = GameState(name=args.name)
    state.set_progress(args.story, args.block)
    session = ConsoleSession(
        StoryService(story_repo, config=story_config),
        state,
        save_service=SaveService(),
        save_store=SaveStore(args.save_dir),
        renderer=ConsoleRenderer(story_config),
    )
    try:
        session.play()
    except DataError as exc:
        print(f"Couldn't start story: {exc}", file=sys.stderr)
        return 1
    if story_config.debug:
        print(f"\nGame State:\n{session.state.describe()}")
    return 0
