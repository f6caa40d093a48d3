"""Conditional text, colour hints and prompts embedded in story lines.

A text line is parsed into a small tree of nodes. Conditionals choose between a
then-branch and an optional else-branch, and each branch is itself a node, so
conditionals can nest:

    ?- has_key => -y "It opens!" => #- score >= 10 => You force it. => It holds.

After the condition, a remainder that starts with another conditional is taken
whole as the then-branch. Otherwise the then-branch ends at the next ` => ` and
whatever follows is the else-branch.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple, Union

from intfic.core.config import DEFAULT_MAX_DIRECTIVE_DEPTH
from intfic.core.types import ColorName, ComparisonOp
from intfic.domain.state import GameState

FLAG_CONDITION_PREFIX = "?-"
COUNTER_CONDITION_PREFIX = "#-"
BRANCH_SEPARATOR = " => "
PROMPT_PREFIX = "  "
QUOTE = '"'

DEFAULT_COLOR: ColorName = "white"
PROMPT_COLOR: ColorName = "cyan"
COLOR_PREFIXES: Dict[str, ColorName] = {
    "-y ": "yellow",
    "-b ": "blue",
    "-g ": "green",
    "-r ": "red",
    "-p ": "purple",
    "-c ": "cyan",
}

_COMPARISONS: Dict[str, Callable[[int, int], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    ">=": operator.ge,
    ">": operator.gt,
}


class DirectiveSyntaxError(ValueError):
    """Raised when a conditional line does not have the expected shape."""


@dataclass(frozen=True, slots=True)
class PlainText:
    text: str


@dataclass(frozen=True, slots=True)
class ColorText:
    color: ColorName
    text: str


@dataclass(frozen=True, slots=True)
class PromptText:
    text: str


@dataclass(frozen=True, slots=True)
class FlagConditional:
    flag: str
    then_branch: "TextNode"
    else_branch: "TextNode | None" = None

    def holds(self, state: GameState) -> bool:
        return state.get_flag(self.flag)


@dataclass(frozen=True, slots=True)
class CounterConditional:
    counter: str
    op: ComparisonOp
    value: int
    then_branch: "TextNode"
    else_branch: "TextNode | None" = None

    def holds(self, state: GameState) -> bool:
        return _COMPARISONS[self.op](state.get_counter(self.counter), self.value)


TextNode = Union[PlainText, ColorText, PromptText, FlagConditional, CounterConditional]
_CONDITIONALS = (FlagConditional, CounterConditional)


@dataclass(frozen=True, slots=True)
class ResolvedLine:
    """A line ready to be shown, with its highlight colour."""

    text: str
    color: ColorName = DEFAULT_COLOR
    is_prompt: bool = False

    def spans(self) -> List[Tuple[str, ColorName]]:
        """Split the line into coloured spans.

        With two or more quote marks only the paired quotes (and what they enclose)
        take the highlight colour; everything else uses the default colour.
        """
        quote_positions = [index for index, char in enumerate(self.text) if char == QUOTE]
        if len(quote_positions) < 2:
            return [(self.text, self.color)]
        spans: List[Tuple[str, ColorName]] = []
        cursor = 0
        for start, end in zip(quote_positions[::2], quote_positions[1::2]):
            if start > cursor:
                spans.append((self.text[cursor:start], DEFAULT_COLOR))
            spans.append((self.text[start : end + 1], self.color))
            cursor = end + 1
        if cursor < len(self.text):
            spans.append((self.text[cursor:], DEFAULT_COLOR))
        return spans


def is_conditional(line: str) -> bool:
    return line.startswith(FLAG_CONDITION_PREFIX) or line.startswith(COUNTER_CONDITION_PREFIX)


def parse_text_line(line: str, *, max_depth: int = DEFAULT_MAX_DIRECTIVE_DEPTH) -> TextNode:
    """Parse a raw story line into a directive tree.

    Raises DirectiveSyntaxError when a conditional is malformed or nested deeper
    than `max_depth`.
    """
    return _parse_node(line, max_depth)


def _parse_node(line: str, depth_left: int) -> TextNode:
    if is_conditional(line):
        if depth_left <= 0:
            raise DirectiveSyntaxError("conditionals are nested too deeply")
        return _parse_conditional(line, depth_left - 1)
    for prefix, color in COLOR_PREFIXES.items():
        if line.startswith(prefix):
            return ColorText(color=color, text=line[len(prefix):])
    if line.startswith(PROMPT_PREFIX):
        return PromptText(text=line)
    return PlainText(text=line)


def _parse_conditional(line: str, depth_left: int) -> TextNode:
    condition, separator, remainder = line.partition(BRANCH_SEPARATOR)
    if not separator:
        raise DirectiveSyntaxError(f"missing '{BRANCH_SEPARATOR.strip()}' after condition '{condition}'")
    else_text: str | None = None
    if is_conditional(remainder):
        then_text = remainder
    else:
        then_text, separator, else_text = remainder.partition(BRANCH_SEPARATOR)
        if not separator:
            else_text = None
    then_branch = _parse_node(then_text, depth_left)
    else_branch = _parse_node(else_text, depth_left) if else_text is not None else None

    if condition.startswith(FLAG_CONDITION_PREFIX):
        flag = _parse_flag_condition(condition)
        return FlagConditional(flag=flag, then_branch=then_branch, else_branch=else_branch)
    counter, op, value = _parse_counter_condition(condition)
    return CounterConditional(
        counter=counter,
        op=op,
        value=value,
        then_branch=then_branch,
        else_branch=else_branch,
    )


def _parse_flag_condition(condition: str) -> str:
    parts = condition.split()
    if len(parts) != 2 or parts[0] != FLAG_CONDITION_PREFIX:
        raise DirectiveSyntaxError(f"expected '?- flag', got '{condition}'")
    return parts[1]


def _parse_counter_condition(condition: str) -> Tuple[str, ComparisonOp, int]:
    parts = condition.split()
    if len(parts) != 4 or parts[0] != COUNTER_CONDITION_PREFIX:
        raise DirectiveSyntaxError(f"expected '#- counter OP number', got '{condition}'")
    _, counter, op, raw_value = parts
    if op not in _COMPARISONS:
        raise DirectiveSyntaxError(f"unknown comparison '{op}' in '{condition}'")
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise DirectiveSyntaxError(f"'{raw_value}' is not an integer in '{condition}'") from exc
    return counter, op, value  # type: ignore[return-value]


def evaluate(node: TextNode, state: GameState) -> ResolvedLine | None:
    """Walk conditionals against the state and return the line to show, if any."""
    current: TextNode | None = node
    while isinstance(current, _CONDITIONALS):
        current = current.then_branch if current.holds(state) else current.else_branch
    if current is None:
        return None
    if isinstance(current, ColorText):
        return ResolvedLine(text=current.text, color=current.color)
    if isinstance(current, PromptText):
        return ResolvedLine(text=current.text, color=PROMPT_COLOR, is_prompt=True)
    return ResolvedLine(text=current.text)


def resolve_line(
    line: str, state: GameState, *, max_depth: int = DEFAULT_MAX_DIRECTIVE_DEPTH
) -> ResolvedLine | None:
    """Resolve a block text line; None when a conditional has no matching branch."""
    return evaluate(parse_text_line(line, max_depth=max_depth), state)


def resolve_choice_label(
    label: str, state: GameState, *, max_depth: int = DEFAULT_MAX_DIRECTIVE_DEPTH
) -> ResolvedLine | None:
    """Resolve a choice label. Choices have no else: a false condition hides them."""
    current = parse_text_line(label, max_depth=max_depth)
    while isinstance(current, _CONDITIONALS):
        if not current.holds(state):
            return None
        current = current.then_branch
    return evaluate(current, state)
