"""
Outline number parser and validator.

This module converts dotted outline numbers to their typed models and back,
and classifies raw strings by tier:
- Epic:    1.0
- Feature: 1.2
- Story:   1.2.3

Strings that match no tier are not errors when scanning a canvas; callers
that need strictness (validate-on-write) use ``normalize_number``.

Public API:
    - parse_number: Parse string into typed model
    - validate_number: Check if string is a valid number (optionally of a tier)
    - get_tier: Determine tier without full parsing
    - get_parent_number: Extract parent number from a number
    - normalize_number: Trim, validate against a tier and canonicalize
    - number_sort_key: Numeric-aware sort key for display ordering
"""

from __future__ import annotations

import re
from typing import Any

from storymap.core.numbering.models import (
    EpicNumber,
    FeatureNumber,
    OutlineNumber,
    StoryNumber,
    Tier,
)

# Full number patterns (anchored). ASCII so that only 0-9 count as digits.
EPIC_REGEX = re.compile(r"^(\d+)\.0$", re.ASCII)
FEATURE_REGEX = re.compile(r"^(\d+)\.(\d+)$", re.ASCII)
STORY_REGEX = re.compile(r"^(\d+)\.(\d+)\.(\d+)$", re.ASCII)

_DIGIT_RUN = re.compile(r"(\d+)", re.ASCII)


class InvalidNumberError(ValueError):
    """Raised when a string is not a valid outline number for the requested use."""

    def __init__(self, message: str, number: str | None = None):
        super().__init__(message)
        self.number = number


def get_tier(text: str) -> Tier | None:
    """
    Determine the tier of a number without constructing the model.

    Surrounding whitespace is ignored.

    Args:
        text: The number string to classify

    Returns:
        The tier, or None if the string is not a well-formed number

    Examples:
        >>> get_tier("2.0")
        'epic'
        >>> get_tier("2.3")
        'feature'
        >>> get_tier("2.3.1")
        'story'
        >>> get_tier("2.3.0") is None
        True
    """
    text = text.strip()

    match = STORY_REGEX.match(text)
    if match:
        return "story" if int(match.group(3)) > 0 else None

    if EPIC_REGEX.match(text):
        return "epic"

    match = FEATURE_REGEX.match(text)
    if match and int(match.group(2)) > 0:
        return "feature"

    return None


def parse_number(text: str) -> OutlineNumber:
    """
    Parse a dotted number into its typed model.

    Args:
        text: The number string to parse

    Returns:
        EpicNumber, FeatureNumber or StoryNumber

    Raises:
        InvalidNumberError: If the string matches no tier

    Examples:
        >>> parse_number("3.2.7")
        StoryNumber(epic=3, feature=2, story=7)
        >>> str(parse_number(" 03.2 "))
        '3.2'
    """
    if not isinstance(text, str):
        raise InvalidNumberError(f"Number must be a string, got {type(text).__name__}")

    stripped = text.strip()
    tier = get_tier(stripped)

    if tier == "story":
        x, y, z = STORY_REGEX.match(stripped).groups()  # type: ignore[union-attr]
        return StoryNumber(epic=int(x), feature=int(y), story=int(z))
    if tier == "feature":
        x, y = FEATURE_REGEX.match(stripped).groups()  # type: ignore[union-attr]
        return FeatureNumber(epic=int(x), feature=int(y))
    if tier == "epic":
        (x,) = EPIC_REGEX.match(stripped).groups()  # type: ignore[union-attr]
        return EpicNumber(epic=int(x))

    raise InvalidNumberError(f"Invalid outline number: {text!r}", number=text)


def validate_number(text: str, tier: Tier | None = None) -> bool:
    """
    Check if a string is a valid outline number.

    Args:
        text: The number string to validate
        tier: If given, the number must also belong to this tier

    Returns:
        True if valid (and of the requested tier), False otherwise
    """
    if not isinstance(text, str):
        return False
    found = get_tier(text)
    if found is None:
        return False
    return tier is None or found == tier


def get_parent_number(text: str) -> str | None:
    """
    Extract the parent number of a number.

    Examples:
        >>> get_parent_number("1.2.3")
        '1.2'
        >>> get_parent_number("1.0.3")
        '1.0'
        >>> get_parent_number("1.2")
        '1.0'
        >>> get_parent_number("1.0") is None
        True

    Raises:
        InvalidNumberError: If the string is not a valid number
    """
    parent = parse_number(text).parent
    return str(parent) if parent is not None else None


def normalize_number(text: Any, tier: Tier) -> str:
    """
    Validate a number for assignment to an element of the given tier.

    The value is trimmed and canonicalized (leading zeros dropped).

    Args:
        text: Candidate number
        tier: Tier of the element that will carry the number

    Returns:
        Canonical dotted string

    Raises:
        InvalidNumberError: If the value is not a number of that tier

    Examples:
        >>> normalize_number(" 01.2 ", "feature")
        '1.2'
        >>> normalize_number("1.2", "story")
        Traceback (most recent call last):
            ...
        storymap.core.numbering.parser.InvalidNumberError: '1.2' is a feature number, not a story number
    """
    number = parse_number(text)
    if number.tier != tier:
        raise InvalidNumberError(
            f"{text.strip()!r} is a {number.tier} number, not a {tier} number",
            number=text,
        )
    return str(number)


def number_sort_key(text: str) -> tuple[tuple[int, Any], ...]:
    """
    Sort key that compares digit runs numerically.

    Mirrors a locale-aware numeric collation, so ``"1.2"`` sorts before
    ``"1.10"``. Non-digit runs compare case-insensitively.

    Examples:
        >>> sorted(["1.10", "1.2", "1.9"], key=number_sort_key)
        ['1.2', '1.9', '1.10']
    """
    key: list[tuple[int, Any]] = []
    for i, chunk in enumerate(_DIGIT_RUN.split(text)):
        if i % 2:
            key.append((0, int(chunk)))
        else:
            key.append((1, chunk.casefold()))
    return tuple(key)
