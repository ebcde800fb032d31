"""
Registry of the outline numbers currently present on a canvas.

The registry is derived fresh from a snapshot of canvas elements on every
call; it holds no state of its own and is never written back.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from storymap.core.numbering.models import TIERS, Tier

if TYPE_CHECKING:
    from storymap.core.canvas.models import CanvasElement


def _element_type_and_number(element: CanvasElement | Mapping[str, Any]) -> tuple[Any, Any]:
    """Read (type, storyNumber) from a model or a raw JSON element dict."""
    if isinstance(element, Mapping):
        content = element.get("content")
        number = content.get("storyNumber") if isinstance(content, Mapping) else None
        return element.get("type"), number
    content = getattr(element, "content", None)
    return getattr(element, "type", None), getattr(content, "story_number", None)


class NumberRegistry(BaseModel):
    """
    Existing numbers grouped by tier, in element order.

    Values are trimmed but otherwise kept as found: malformed strings are
    still listed here and simply never match during allocation. Duplicates
    are kept.

    Example:
        >>> registry = NumberRegistry(epic=["1.0"], feature=["1.1", "1.2"])
        >>> registry.for_tier("feature")
        ['1.1', '1.2']
    """

    epic: list[str] = Field(default_factory=list)
    feature: list[str] = Field(default_factory=list)
    story: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_elements(
        cls, elements: Iterable[CanvasElement | Mapping[str, Any]]
    ) -> NumberRegistry:
        """
        Scan canvas elements and collect their numbers by tier.

        Elements of other types (bmc, sticky, ...) and tier elements with a
        missing, blank or non-string number are skipped.

        Args:
            elements: Canvas elements as models or raw JSON dicts

        Returns:
            A new NumberRegistry
        """
        numbers: dict[Tier, list[str]] = {tier: [] for tier in TIERS}

        for element in elements:
            element_type, number = _element_type_and_number(element)
            if not isinstance(element_type, str) or element_type not in numbers:
                continue
            if isinstance(number, str) and number.strip():
                numbers[element_type].append(number.strip())

        return cls(**numbers)

    def for_tier(self, tier: Tier) -> list[str]:
        """Return the numbers recorded for a tier."""
        return list(getattr(self, tier))


def extract_numbers(
    elements: Iterable[CanvasElement | Mapping[str, Any]],
) -> NumberRegistry:
    """Shorthand for ``NumberRegistry.from_elements``."""
    return NumberRegistry.from_elements(elements)
