"""Parser for the line-oriented story markup.

Example block:

    :- start
    It's nearly pitch black out tonight.
    =- left_home = true
    +- score + 5
    ?- has_torch => You light the torch. => You stumble in the dark.
      What do you do?
    *- Keep walking -> walk -> walk_car
    *- #- score >= 5 => Run home -> run -> home.txt

Every line is exactly one of: block start, flag effect, counter effect, choice,
auto-advance choice, or text. Text lines keep their raw form; conditionals in them
are shape-checked here and evaluated when the block is played.
"""
from __future__ import annotations

from typing import Iterable, List, NoReturn

from intfic.core.config import DEFAULT_MAX_DIRECTIVE_DEPTH
from intfic.data.errors import MalformedDirectiveError
from intfic.domain.defs import StoryBlockDef, StoryChoiceDef
from intfic.domain.text_directives import DirectiveSyntaxError, is_conditional, parse_text_line

BLOCK_PREFIX = ":-"
CHOICE_PREFIX = "*-"
AUTO_CHOICE_PREFIX = "->"
FLAG_PREFIX = "=-"
COUNTER_PREFIX = "+-"

CHOICE_SEPARATOR = " -> "
FLAG_SEPARATOR = " = "
COUNTER_SEPARATOR = " + "

DEFAULT_BLOCK_NAME = ""

_BOOL_LITERALS = {"true": True, "false": False}


def parse_story(
    lines: Iterable[str],
    *,
    document: str | None = None,
    max_directive_depth: int = DEFAULT_MAX_DIRECTIVE_DEPTH,
) -> List[StoryBlockDef]:
    """Convert story markup lines into blocks, in file order.

    Raises MalformedDirectiveError with the 1-based line number of the first bad
    directive. A file without any block start yields a single unnamed block.
    """
    parser = _StoryParser(document=document, max_directive_depth=max_directive_depth)
    for line_number, line in enumerate(lines, start=1):
        parser.feed(line_number, line)
    return parser.finish()


class _StoryParser:
    def __init__(self, *, document: str | None, max_directive_depth: int) -> None:
        self._document = document
        self._max_directive_depth = max_directive_depth
        self._blocks: List[StoryBlockDef] = []
        self._current = StoryBlockDef(name=DEFAULT_BLOCK_NAME)
        self._seen_block = False

    def feed(self, line_number: int, line: str) -> None:
        if line.startswith(BLOCK_PREFIX):
            self._start_block(line_number, line)
        elif line.startswith(CHOICE_PREFIX):
            self._current.choices.append(self._parse_choice(line_number, line))
        elif line.startswith(AUTO_CHOICE_PREFIX):
            target = self._argument(line_number, line, AUTO_CHOICE_PREFIX, "target")
            self._current.choices.append(StoryChoiceDef(label="", keywords="", target=target))
        elif line.startswith(FLAG_PREFIX):
            name, value = self._parse_flag(line_number, line)
            self._current.flags[name] = value
        elif line.startswith(COUNTER_PREFIX):
            name, delta = self._parse_counter(line_number, line)
            self._current.counters[name] = delta
        else:
            if is_conditional(line):
                self._check_directive(line_number, line)
            self._current.text.append(line)

    def finish(self) -> List[StoryBlockDef]:
        self._blocks.append(self._current)
        return self._blocks

    def _start_block(self, line_number: int, line: str) -> None:
        name = self._argument(line_number, line, BLOCK_PREFIX, "block name")
        if self._seen_block:
            self._blocks.append(self._current)
        else:
            self._seen_block = True
        self._current = StoryBlockDef(name=name)

    def _parse_choice(self, line_number: int, line: str) -> StoryChoiceDef:
        parts = line.split(CHOICE_SEPARATOR)
        if len(parts) != 3:
            self._fail(line_number, "expected '*- label -> keywords -> target'")
        label = self._argument(line_number, parts[0], CHOICE_PREFIX, "choice label")
        keywords = parts[1].strip()
        target = parts[2].strip()
        if not target:
            self._fail(line_number, "choice target is empty")
        if is_conditional(label):
            self._check_directive(line_number, label)
        return StoryChoiceDef(label=label, keywords=keywords, target=target)

    def _parse_flag(self, line_number: int, line: str) -> tuple[str, bool]:
        argument = self._argument(line_number, line, FLAG_PREFIX, "flag")
        name, separator, raw_value = argument.partition(FLAG_SEPARATOR)
        name = name.strip()
        if not separator or not name:
            self._fail(line_number, "expected '=- name = true|false'")
        value = _BOOL_LITERALS.get(raw_value.strip())
        if value is None:
            self._fail(line_number, f"flag value must be true or false, got '{raw_value.strip()}'")
        return name, value

    def _parse_counter(self, line_number: int, line: str) -> tuple[str, int]:
        argument = self._argument(line_number, line, COUNTER_PREFIX, "counter")
        name, separator, raw_delta = argument.partition(COUNTER_SEPARATOR)
        name = name.strip()
        if not separator or not name:
            self._fail(line_number, "expected '+- name + number'")
        try:
            delta = int(raw_delta.strip())
        except ValueError:
            self._fail(line_number, f"counter amount must be an integer, got '{raw_delta.strip()}'")
        return name, delta

    def _argument(self, line_number: int, line: str, prefix: str, what: str) -> str:
        remainder = line[len(prefix):]
        if remainder and not remainder[0].isspace():
            self._fail(line_number, f"expected a space after '{prefix}'")
        argument = remainder.strip()
        if not argument:
            self._fail(line_number, f"missing {what} after '{prefix}'")
        return argument

    def _check_directive(self, line_number: int, text: str) -> None:
        try:
            parse_text_line(text, max_depth=self._max_directive_depth)
        except DirectiveSyntaxError as exc:
            raise MalformedDirectiveError(line_number, str(exc), document=self._document) from exc

    def _fail(self, line_number: int, reason: str) -> NoReturn:
        raise MalformedDirectiveError(line_number, reason, document=self._document)
