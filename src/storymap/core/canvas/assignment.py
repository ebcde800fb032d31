"""
Reparenting of outline elements.

Two steps, mirroring the "Assign to Parent" flow of the canvas editor:

1. ``parent_options`` lists the elements a selection may be moved under.
2. ``assign_to_parent`` applies the move, numbering the moved elements under
   the new parent and optionally renumbering all of the parent's children.

Type rules:
    - Epics are root-level: a selection containing an epic has no options.
    - Any epic outside the selection is a valid parent.
    - Features are valid parents only for selections made of stories alone.

Neither function mutates its input; ``assign_to_parent`` returns new
element objects for everything it touched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

from storymap.core.canvas.models import CanvasElement
from storymap.core.numbering import (
    EpicNumber,
    FeatureNumber,
    NumberRegistry,
    OutlineNumber,
    next_number,
    number_sort_key,
    parse_number,
)

logger = logging.getLogger(__name__)

ParentType = Literal["epic", "feature"]

# Elements without a number sort after any realistic number.
MISSING_NUMBER_SORT_KEY = "999"

_UNTITLED = {"epic": "Untitled Epic", "feature": "Untitled Feature"}


class AssignmentError(Exception):
    """Raised when a reparenting request cannot be applied."""

    pass


class ParentOption(BaseModel):
    """A candidate parent offered for a selection."""

    id: str
    type: ParentType
    number: str
    title: str


@dataclass
class AssignmentResult:
    """
    Outcome of ``assign_to_parent``.

    ``elements`` is the full element list in its original order, with
    updated copies in place of changed elements. ``renumbered`` maps element
    id to (old number, new number) for every element whose number changed.
    """

    elements: list[CanvasElement]
    parent_id: str
    moved_ids: list[str] = field(default_factory=list)
    renumbered: dict[str, tuple[str | None, str]] = field(default_factory=dict)


def _try_parse(number: str | None) -> OutlineNumber | None:
    if not number:
        return None
    try:
        return parse_number(number)
    except ValueError:
        return None


def _sort_by_number(
    elements: Iterable[CanvasElement], missing: str = MISSING_NUMBER_SORT_KEY
) -> list[CanvasElement]:
    return sorted(elements, key=lambda el: number_sort_key(el.story_number or missing))


def parent_options(
    selected: Sequence[CanvasElement],
    all_elements: Sequence[CanvasElement],
    missing_number: str = MISSING_NUMBER_SORT_KEY,
) -> list[ParentOption]:
    """
    List valid parents for a selection, ordered by number.

    Args:
        selected: Elements the user wants to move
        all_elements: Every element on the canvas
        missing_number: Sort stand-in for candidates without a number

    Returns:
        Candidate parents; empty when the selection contains an epic

    Example:
        >>> epic = CanvasElement(id="e", type="epic", content={"storyNumber": "1.0"})
        >>> story = CanvasElement(id="s", type="story")
        >>> [o.number for o in parent_options([story], [epic, story])]
        ['1.0']
    """
    selected_types = {el.type for el in selected}
    if "epic" in selected_types:
        return []

    selected_ids = {el.id for el in selected}
    allowed: set[str] = {"epic"}
    if "story" in selected_types and "feature" not in selected_types:
        allowed.add("feature")

    options: list[ParentOption] = []
    for parent_type in ("epic", "feature"):
        if parent_type not in allowed:
            continue
        for el in all_elements:
            if el.type != parent_type or el.id in selected_ids:
                continue
            options.append(
                ParentOption(
                    id=el.id,
                    type=parent_type,
                    number=el.story_number or "",
                    title=el.title or _UNTITLED[parent_type],
                )
            )

    options.sort(key=lambda opt: number_sort_key(opt.number or missing_number))
    return options


def find_children(
    elements: Iterable[CanvasElement], parent: CanvasElement
) -> list[CanvasElement]:
    """
    Return the direct children of an outline element.

    An element is a child when its ``parentId`` names the parent. Elements
    without a ``parentId`` fall back to their number: ``1.2.3`` belongs to
    the element numbered ``1.2``.
    """
    parent_number = _try_parse(parent.story_number)
    children: list[CanvasElement] = []

    for el in elements:
        if el.id == parent.id or el.tier is None:
            continue
        if el.parent_id:
            if el.parent_id == parent.id:
                children.append(el)
            continue
        if parent_number is None:
            continue
        number = _try_parse(el.story_number)
        if number is not None and number.parent == parent_number:
            children.append(el)

    return children


def _child_number(parent: OutlineNumber, tier: str, index: int) -> str:
    if isinstance(parent, EpicNumber):
        if tier == "feature":
            return f"{parent.epic}.{index}"
        return f"{parent.epic}.0.{index}"
    if isinstance(parent, FeatureNumber):
        return f"{parent.epic}.{parent.feature}.{index}"
    raise AssignmentError(f"Stories cannot have children (parent {parent})")


def assign_to_parent(
    elements: Sequence[CanvasElement],
    selected_ids: Sequence[str],
    parent_id: str,
    renumber_children: bool = True,
) -> AssignmentResult:
    """
    Move selected elements under a new parent and number them there.

    With ``renumber_children`` every child of the parent of a moved tier
    (existing children first, in number order, then the moved ones) is
    renumbered from ``.1``. Without it, existing children keep their numbers
    and moved elements take the next free numbers.

    When a feature's number changes, its stories are re-prefixed and keep
    their own last segment (``1.2.3`` → ``2.1.3``).

    Args:
        elements: Every element on the canvas
        selected_ids: Ids of the elements to move
        parent_id: Id of the new parent (an epic or feature)
        renumber_children: Renumber the parent's children from 1

    Returns:
        AssignmentResult with the updated element list

    Raises:
        AssignmentError: If the selection is empty or unknown, or the parent
            is not a valid option for it or carries no usable number
    """
    by_id = {el.id: el for el in elements}

    if not selected_ids:
        raise AssignmentError("Nothing selected to assign")
    unknown = [i for i in selected_ids if i not in by_id]
    if unknown:
        raise AssignmentError(f"Unknown element id(s): {', '.join(unknown)}")

    selected = [by_id[i] for i in dict.fromkeys(selected_ids)]
    unnumbered = [el.id for el in selected if el.tier is None]
    if unnumbered:
        raise AssignmentError(f"Not outline elements: {', '.join(unnumbered)}")
    selected_set = {el.id for el in selected}

    options = parent_options(selected, elements)
    if not any(opt.id == parent_id for opt in options):
        if any(el.type == "epic" for el in selected):
            raise AssignmentError("Epics cannot be assigned to a parent")
        raise AssignmentError(f"{parent_id} is not a valid parent for the selection")

    parent = by_id[parent_id]
    parent_number = _try_parse(parent.story_number)
    if parent_number is None or parent_number.tier != parent.type:
        raise AssignmentError(
            f"Parent {parent_id} has no valid {parent.type} number "
            f"(got {parent.story_number!r})"
        )

    updated: dict[str, CanvasElement] = {}
    renumbered: dict[str, tuple[str | None, str]] = {}

    def set_number(el: CanvasElement, number: str) -> None:
        current = updated.get(el.id, el)
        new = current.with_story_number(number).with_parent(parent.id)
        updated[el.id] = new
        if el.story_number != new.story_number:
            renumbered[el.id] = (el.story_number, new.story_number or number)

    # Registry of what stays where it is; grows as numbers are handed out.
    registry_numbers: dict[str, list[str]] = {"epic": [], "feature": [], "story": []}
    for el in elements:
        if el.tier is not None and el.id not in selected_set and el.story_number:
            registry_numbers[el.tier].append(el.story_number.strip())

    existing_children = find_children(elements, parent)

    for tier in ("feature", "story"):
        moved = _sort_by_number(el for el in selected if el.type == tier)
        if not moved:
            continue

        if renumber_children:
            existing = _sort_by_number(
                el for el in existing_children if el.type == tier and el.id not in selected_set
            )
            for index, el in enumerate(existing + moved, start=1):
                set_number(el, _child_number(parent_number, tier, index))
        else:
            for el in moved:
                number = next_number(
                    NumberRegistry(**registry_numbers), tier, parent=parent_number
                )
                registry_numbers[tier].append(number)
                set_number(el, number)

    # Re-prefix stories of features whose number changed.
    for el in list(updated.values()):
        if el.type != "feature" or el.id not in renumbered:
            continue
        original = by_id[el.id]
        new_feature = parse_number(el.story_number or "")
        for story in find_children(elements, original):
            if story.type != "story" or story.id in selected_set:
                continue
            old = _try_parse(story.story_number)
            if old is None:
                continue
            new_number = f"{new_feature.segments[0]}.{new_feature.segments[1]}.{old.segments[-1]}"
            new_story = story.with_story_number(new_number).with_parent(el.id)
            updated[story.id] = new_story
            if story.story_number != new_story.story_number:
                renumbered[story.id] = (story.story_number, new_number)

    logger.debug(
        "Assigned %d element(s) to %s (%s), %d renumbered",
        len(selected),
        parent_id,
        parent_number,
        len(renumbered),
    )

    return AssignmentResult(
        elements=[updated.get(el.id, el) for el in elements],
        parent_id=parent_id,
        moved_ids=[el.id for el in selected],
        renumbered=renumbered,
    )
