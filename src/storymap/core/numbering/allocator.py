"""
Allocation of new outline numbers.

Allocators read a NumberRegistry snapshot and return the next free numbers;
they never write. The caller stores the result on its elements.

Allocator functions:
    - next_number: Next number for a tier, optionally scoped to a parent
    - child_numbers: A contiguous run of story numbers below a parent

Example:
    >>> registry = NumberRegistry(epic=["1.0", "2.0", "5.0"])
    >>> next_number(registry, "epic")
    '6.0'
    >>> child_numbers(NumberRegistry(story=["3.2.1", "3.2.2"]), "3.2", 3)
    ['3.2.3', '3.2.4', '3.2.5']
"""

from __future__ import annotations

import logging

from storymap.core.numbering.models import EpicNumber, FeatureNumber, OutlineNumber
from storymap.core.numbering.parser import (
    EPIC_REGEX,
    FEATURE_REGEX,
    STORY_REGEX,
    InvalidNumberError,
    parse_number,
)
from storymap.core.numbering.registry import NumberRegistry

logger = logging.getLogger(__name__)

# Used when nothing else gives context: no epics, no features, or an
# unusable parent for child allocation.
DEFAULT_EPIC = 1
DEFAULT_FEATURE = 1
FALLBACK_NUMBER = "1.0"


def _max_epic(registry: NumberRegistry) -> int | None:
    values = [int(m.group(1)) for m in map(EPIC_REGEX.match, registry.epic) if m]
    return max(values) if values else None


def _max_feature_under(registry: NumberRegistry, epic: int) -> int:
    max_y = 0
    for number in registry.feature:
        match = FEATURE_REGEX.match(number)
        if match and int(match.group(1)) == epic and int(match.group(2)) > 0:
            max_y = max(max_y, int(match.group(2)))
    return max_y


def _max_story_under(registry: NumberRegistry, epic: int, feature: int, seed: int = 0) -> int:
    max_z = seed
    for number in registry.story:
        match = STORY_REGEX.match(number)
        if match and int(match.group(1)) == epic and int(match.group(2)) == feature:
            max_z = max(max_z, int(match.group(3)))
    return max_z


def _latest_feature(registry: NumberRegistry) -> tuple[int, int]:
    """Highest (epic, feature) pair among features, seeded at (1, 1)."""
    max_epic, max_feature = DEFAULT_EPIC, DEFAULT_FEATURE
    for number in registry.feature:
        match = FEATURE_REGEX.match(number)
        if not match:
            continue
        epic, feature = int(match.group(1)), int(match.group(2))
        if epic > max_epic or (epic == max_epic and feature > max_feature):
            max_epic, max_feature = epic, feature
    return max_epic, max_feature


def _coerce_parent(parent: str | OutlineNumber) -> OutlineNumber:
    if isinstance(parent, str):
        return parse_number(parent)
    return parent


def next_number(
    registry: NumberRegistry,
    tier: str,
    parent: str | OutlineNumber | None = None,
) -> str:
    """
    Return the next number a new element of ``tier`` should receive.

    Without a parent, features attach to the highest-numbered epic and
    stories to the highest-numbered feature. With a parent, allocation is
    scoped to it: a feature needs an epic parent, a story a feature or epic
    parent (``X.0`` parents give epic-level stories ``X.0.Z``).

    Args:
        registry: Numbers currently on the canvas
        tier: "epic", "feature" or "story"; anything else yields "1.0"
        parent: Optional parent number scoping the allocation

    Returns:
        The allocated number as a dotted string

    Raises:
        InvalidNumberError: If the parent is malformed or of the wrong tier

    Examples:
        >>> next_number(NumberRegistry(), "feature")
        '1.1'
        >>> registry = NumberRegistry(epic=["1.0", "2.0"], feature=["1.1", "1.2"])
        >>> next_number(registry, "feature")
        '2.1'
        >>> next_number(registry, "feature", parent="1.0")
        '1.3'
    """
    if tier == "epic":
        if parent is not None:
            raise InvalidNumberError("Epics are root-level and cannot have a parent")
        return f"{(_max_epic(registry) or 0) + 1}.0"

    if tier == "feature":
        if parent is None:
            epic = max(DEFAULT_EPIC, _max_epic(registry) or DEFAULT_EPIC)
        else:
            scope = _coerce_parent(parent)
            if not isinstance(scope, EpicNumber):
                raise InvalidNumberError(
                    f"A feature's parent must be an epic, got {scope.tier} {scope}",
                    number=str(scope),
                )
            epic = scope.epic
        return f"{epic}.{_max_feature_under(registry, epic) + 1}"

    if tier == "story":
        if parent is None:
            epic, feature = _latest_feature(registry)
        else:
            scope = _coerce_parent(parent)
            if isinstance(scope, FeatureNumber):
                epic, feature = scope.epic, scope.feature
            elif isinstance(scope, EpicNumber):
                epic, feature = scope.epic, 0
            else:
                raise InvalidNumberError(
                    f"A story's parent must be a feature or an epic, got story {scope}",
                    number=str(scope),
                )
        return f"{epic}.{feature}.{_max_story_under(registry, epic, feature) + 1}"

    logger.debug("Unknown tier %r, falling back to %s", tier, FALLBACK_NUMBER)
    return FALLBACK_NUMBER


def child_numbers(registry: NumberRegistry, parent_number: str | None, count: int) -> list[str]:
    """
    Allocate ``count`` sequential story numbers for children of a parent.

    Used when a story is split into several. The parent may be:
        - blank: children go under 1.1, after the highest story index on
          the whole canvas
        - a story X.Y.Z: children continue the X.Y family after
          max(Z, highest existing story under X.Y)
        - a feature (or epic) X.Y: children follow the highest story under X.Y
        - anything else: 1.1.1 … 1.1.N

    Args:
        registry: Numbers currently on the canvas
        parent_number: Number of the element being split
        count: How many numbers to allocate

    Returns:
        List of ``count`` dotted story numbers (empty when count <= 0)

    Example:
        >>> child_numbers(NumberRegistry(story=["1.1.1", "1.1.2"]), "", 2)
        ['1.1.3', '1.1.4']
    """
    if count <= 0:
        return []

    if parent_number is None or not parent_number.strip():
        max_z = 0
        for number in registry.story:
            match = STORY_REGEX.match(number)
            if match:
                max_z = max(max_z, int(match.group(3)))
        return [f"{DEFAULT_EPIC}.{DEFAULT_FEATURE}.{max_z + i + 1}" for i in range(count)]

    parts = parent_number.strip().split(".")
    if all(part.isascii() and part.isdigit() for part in parts):
        if len(parts) == 3:
            x, y, z = (int(part) for part in parts)
            max_z = _max_story_under(registry, x, y, seed=z)
            return [f"{x}.{y}.{max_z + i + 1}" for i in range(count)]

        if len(parts) == 2:
            x, y = (int(part) for part in parts)
            max_z = _max_story_under(registry, x, y)
            return [f"{x}.{y}.{max_z + i + 1}" for i in range(count)]

    logger.debug("Unusable parent number %r, using default children", parent_number)
    return [f"{DEFAULT_EPIC}.{DEFAULT_FEATURE}.{i + 1}" for i in range(count)]
