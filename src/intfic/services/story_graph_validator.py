"""Static validation of a parsed story file."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Collection, Mapping, Sequence

from intfic.domain.defs import StoryBlockDef
from intfic.domain.text_directives import is_conditional
from intfic.services.dictionaries import DICTIONARIES

Severity = str


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def validate_story_blocks(
    blocks: Sequence[StoryBlockDef],
    *,
    document_exists: Callable[[str], bool] | None = None,
    dictionary_names: Collection[str] = tuple(DICTIONARIES),
    error_on_autoadvance_cycle: bool = True,
) -> list[Issue]:
    """Report authoring problems the parser accepts but the player would hit.

    `document_exists` is consulted for choices that target other story files; when
    omitted those targets are not checked.
    """
    issues: list[Issue] = []
    by_name: dict[str, StoryBlockDef] = {}
    for block in blocks:
        if block.name in by_name:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="DUPLICATE_BLOCK_NAME",
                    message="Duplicate block name; only the first one can be reached.",
                    context={"block": block.name},
                )
            )
            continue
        by_name[block.name] = block

    for block in by_name.values():
        _validate_choice_targets(block, by_name, document_exists, issues)
        _validate_dictionary_refs(block, dictionary_names, issues)

    if blocks:
        _validate_reachability(by_name, blocks[0].name, issues)
    _validate_auto_advance_cycles(by_name, issues, error_on_autoadvance_cycle=error_on_autoadvance_cycle)
    return issues


def _validate_choice_targets(
    block: StoryBlockDef,
    by_name: Mapping[str, StoryBlockDef],
    document_exists: Callable[[str], bool] | None,
    issues: list[Issue],
) -> None:
    for index, choice in enumerate(block.choices):
        context = {"block": block.name, "choice": str(index + 1), "target": choice.target}
        if choice.targets_document:
            if document_exists is not None and not document_exists(choice.target):
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="MISSING_STORY_FILE",
                        message="Choice targets a story file that does not exist.",
                        context=context,
                    )
                )
        elif choice.target not in by_name:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="MISSING_BLOCK_REF",
                    message="Choice targets a missing block.",
                    context=context,
                )
            )


def _validate_dictionary_refs(
    block: StoryBlockDef, dictionary_names: Collection[str], issues: list[Issue]
) -> None:
    for index, choice in enumerate(block.choices):
        name = choice.dictionary_name
        if name is None or name.upper() in dictionary_names:
            continue
        issues.append(
            Issue(
                severity="WARN",
                code="UNKNOWN_DICTIONARY",
                message="Keywords reference an unknown dictionary and will only match literally.",
                context={"block": block.name, "choice": str(index + 1), "dictionary": name},
            )
        )


def _validate_reachability(
    by_name: Mapping[str, StoryBlockDef], root: str, issues: list[Issue]
) -> None:
    reachable: set[str] = set()
    stack: list[str] = [root]
    while stack:
        name = stack.pop()
        if name in reachable or name not in by_name:
            continue
        reachable.add(name)
        for choice in by_name[name].choices:
            if not choice.targets_document:
                stack.append(choice.target)
    for name in sorted(set(by_name) - reachable):
        issues.append(
            Issue(
                severity="WARN",
                code="UNREACHABLE_BLOCK",
                message="Block is unreachable from the first block of the file.",
                context={"block": name},
            )
        )


def _validate_auto_advance_cycles(
    by_name: Mapping[str, StoryBlockDef],
    issues: list[Issue],
    *,
    error_on_autoadvance_cycle: bool,
) -> None:
    # A block always auto-advances when its only choice is unconditional.
    adjacency: dict[str, str] = {}
    for name, block in by_name.items():
        if len(block.choices) != 1:
            continue
        choice = block.choices[0]
        if is_conditional(choice.label) or choice.targets_document:
            continue
        adjacency[name] = choice.target

    cycles: list[list[str]] = []
    visited: set[str] = set()
    for start in sorted(adjacency):
        path: list[str] = []
        on_path: set[str] = set()
        current: str | None = start
        while current is not None and current not in visited:
            visited.add(current)
            path.append(current)
            on_path.add(current)
            current = adjacency.get(current)
        if current is not None and current in on_path:
            cycles.append(path[path.index(current) :])

    severity = "ERROR" if error_on_autoadvance_cycle else "WARN"
    for cycle in cycles:
        issues.append(
            Issue(
                severity=severity,
                code="AUTOADVANCE_CYCLE",
                message="Auto-advance cycle detected.",
                context={"cycle": " -> ".join(cycle + [cycle[0]])},
            )
        )
