"""
Canvas data models for storymap.

A canvas document is a JSON object holding a flat list of elements. Only
epic, feature and story elements take part in outline numbering; other
element types (bmc, sticky, text, ...) are carried through untouched.

Wire format keys are camelCase (``storyNumber``, ``parentId``) to match the
documents written by the canvas editor; Python attributes are snake_case.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storymap.core.numbering.models import TIERS, Tier
from storymap.core.numbering.parser import normalize_number


class Position(BaseModel):
    """Top-left corner of an element on the canvas."""

    x: float = 0
    y: float = 0


class Size(BaseModel):
    """Rendered element size."""

    width: float = 0
    height: float = 0


class ElementContent(BaseModel):
    """
    Content payload of a canvas element.

    Only the numbering-relevant fields are modelled; anything else the editor
    stores (descriptions, colours, acceptance criteria, ...) is preserved as
    extra data.
    """

    story_number: Any = Field(
        default=None,
        alias="storyNumber",
        description="Outline number (X.0, X.Y or X.Y.Z); kept as written, even when not a string",
    )
    title: str | None = Field(default=None, description="Display title")
    parent_id: str | None = Field(
        default=None,
        alias="parentId",
        description="Id of the element this one belongs to",
    )

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class CanvasElement(BaseModel):
    """
    A single element on a canvas.

    Example:
        >>> element = CanvasElement(id="e1", type="epic", content={"storyNumber": "1.0"})
        >>> element.tier
        'epic'
        >>> element.with_story_number(" 2.0 ").story_number
        '2.0'
    """

    id: str = Field(..., min_length=1, description="Unique element id")
    type: str = Field(..., description="Element type (epic, feature, story, bmc, sticky, ...)")
    content: ElementContent = Field(default_factory=ElementContent)
    position: Position = Field(default_factory=Position)
    size: Size = Field(default_factory=Size)
    style: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("content", mode="before")
    @classmethod
    def default_missing_content(cls, v: Any) -> Any:
        """Editors sometimes write ``null`` content for fresh elements."""
        return {} if v is None else v

    @property
    def tier(self) -> Tier | None:
        """Outline tier, or None for elements outside the outline."""
        return self.type if self.type in TIERS else None  # type: ignore[return-value]

    @property
    def story_number(self) -> str | None:
        """The stored number, or None when it is missing or not a string."""
        number = self.content.story_number
        return number if isinstance(number, str) else None

    @property
    def parent_id(self) -> str | None:
        return self.content.parent_id

    @property
    def title(self) -> str | None:
        return self.content.title

    def with_story_number(self, number: str) -> CanvasElement:
        """
        Return a copy carrying a validated, canonical number.

        Raises:
            InvalidNumberError: If the number does not fit the element's tier
            ValueError: If the element is not an epic, feature or story
        """
        tier = self.tier
        if tier is None:
            raise ValueError(f"Element {self.id} of type {self.type!r} cannot be numbered")
        canonical = normalize_number(number, tier)
        return self.model_copy(
            update={"content": self.content.model_copy(update={"story_number": canonical})}
        )

    def with_parent(self, parent_id: str | None) -> CanvasElement:
        """Return a copy pointing at a new parent element."""
        return self.model_copy(
            update={"content": self.content.model_copy(update={"parent_id": parent_id})}
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize with wire-format (camelCase) keys.

        Only keys that were read or explicitly set are written, nulls included,
        so untouched elements come back exactly as they were loaded.
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class CanvasData(BaseModel):
    """
    A whole canvas document.

    File format:
        {
            "elements": [
                {"id": "...", "type": "epic", "content": {"storyNumber": "1.0", ...}, ...}
            ],
            "layout": null,
            "metadata": {}
        }
    """

    elements: list[CanvasElement] = Field(default_factory=list)
    layout: Any = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    def get_element(self, element_id: str) -> CanvasElement | None:
        """Find an element by id."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with wire-format (camelCase) keys."""
        data = self.model_dump(by_alias=True, exclude_unset=True, mode="json")
        data["elements"] = [element.to_dict() for element in self.elements]
        data.setdefault("metadata", self.metadata)
        return data
