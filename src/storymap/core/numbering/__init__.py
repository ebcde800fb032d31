"""
Hierarchical outline numbering for planning canvases.

This package numbers the three tiers of a work-breakdown outline:
epic (X.0) → feature (X.Y) → story (X.Y.Z).

Public API:
    Models:
        - EpicNumber: Epic number model (3.0)
        - FeatureNumber: Feature number model (3.2)
        - StoryNumber: Story number model (3.2.7)

    Parser functions:
        - parse_number: Parse string number into typed model
        - validate_number: Check if string is a valid number
        - get_tier: Determine tier without full parsing
        - get_parent_number: Extract parent number
        - normalize_number: Validate and canonicalize a number for a tier
        - number_sort_key: Numeric-aware display ordering
        - InvalidNumberError: Exception for malformed or mismatched numbers

    Registry:
        - NumberRegistry: Existing numbers grouped by tier
        - extract_numbers: Build a registry from canvas elements

    Allocator functions:
        - next_number: Next number for a tier
        - child_numbers: Sequential story numbers below a parent

Example:
    >>> from storymap.core.numbering import NumberRegistry, next_number
    >>> registry = NumberRegistry(feature=["1.1", "1.2", "2.1"])
    >>> next_number(registry, "story")
    '2.1.1'
"""

from storymap.core.numbering.allocator import child_numbers, next_number
from storymap.core.numbering.models import (
    TIERS,
    EpicNumber,
    FeatureNumber,
    OutlineNumber,
    StoryNumber,
    Tier,
)
from storymap.core.numbering.parser import (
    InvalidNumberError,
    get_parent_number,
    get_tier,
    normalize_number,
    number_sort_key,
    parse_number,
    validate_number,
)
from storymap.core.numbering.registry import NumberRegistry, extract_numbers

__all__ = [
    # Models
    "EpicNumber",
    "FeatureNumber",
    "StoryNumber",
    "OutlineNumber",
    "Tier",
    "TIERS",
    # Parser functions
    "parse_number",
    "validate_number",
    "get_tier",
    "get_parent_number",
    "normalize_number",
    "number_sort_key",
    "InvalidNumberError",
    # Registry
    "NumberRegistry",
    "extract_numbers",
    # Allocator functions
    "next_number",
    "child_numbers",
]
