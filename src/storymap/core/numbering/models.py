"""
Outline number models for hierarchical canvas numbering.

These Pydantic models provide type-safe representations of the three-tier
outline used by planning canvases: epic → feature → story.

Number Format Examples:
    - Epic:    3.0
    - Feature: 3.2
    - Story:   3.2.7

Numbers are formatted to their dotted string only at the boundary (``str()``);
internally every number is a frozen model with validated components.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

# Type alias for tier literals
Tier = Literal["epic", "feature", "story"]

TIERS: tuple[Tier, ...] = ("epic", "feature", "story")


class EpicNumber(BaseModel):
    """
    Epic number: {epic}.0 → 3.0

    Epics are root-level, so they have no parent number.
    """

    epic: int

    model_config = ConfigDict(frozen=True)

    @field_validator("epic")
    @classmethod
    def validate_epic(cls, v: int) -> int:
        """Validate that epic is non-negative."""
        if v < 0:
            raise ValueError("Epic number must be non-negative")
        return v

    @property
    def tier(self) -> Tier:
        return "epic"

    @property
    def parent(self) -> None:
        return None

    @property
    def segments(self) -> tuple[int, ...]:
        return (self.epic, 0)

    def __str__(self) -> str:
        """Format as {epic}.0"""
        return f"{self.epic}.0"


class FeatureNumber(BaseModel):
    """
    Feature number: {epic}.{feature} → 3.2

    The feature component starts at 1; ``X.0`` is reserved for the epic itself.
    """

    epic: int
    feature: int

    model_config = ConfigDict(frozen=True)

    @field_validator("epic")
    @classmethod
    def validate_epic(cls, v: int) -> int:
        """Validate that epic is non-negative."""
        if v < 0:
            raise ValueError("Epic number must be non-negative")
        return v

    @field_validator("feature")
    @classmethod
    def validate_feature(cls, v: int) -> int:
        """Validate that feature is positive."""
        if v < 1:
            raise ValueError("Feature number must be positive (starts at 1)")
        return v

    @property
    def tier(self) -> Tier:
        return "feature"

    @property
    def parent(self) -> EpicNumber:
        return EpicNumber(epic=self.epic)

    @property
    def segments(self) -> tuple[int, ...]:
        return (self.epic, self.feature)

    def __str__(self) -> str:
        """Format as {epic}.{feature}"""
        return f"{self.epic}.{self.feature}"


class StoryNumber(BaseModel):
    """
    Story number: {epic}.{feature}.{story} → 3.2.7

    A feature component of 0 marks a story attached directly to its epic
    (``3.0.1``), which happens when a story is reassigned to an epic.
    """

    epic: int
    feature: int
    story: int

    model_config = ConfigDict(frozen=True)

    @field_validator("epic", "feature")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate that epic and feature are non-negative."""
        if v < 0:
            raise ValueError("Story number components must be non-negative")
        return v

    @field_validator("story")
    @classmethod
    def validate_story(cls, v: int) -> int:
        """Validate that story is positive."""
        if v < 1:
            raise ValueError("Story number must be positive (starts at 1)")
        return v

    @property
    def tier(self) -> Tier:
        return "story"

    @property
    def parent(self) -> EpicNumber | FeatureNumber:
        if self.feature == 0:
            return EpicNumber(epic=self.epic)
        return FeatureNumber(epic=self.epic, feature=self.feature)

    @property
    def segments(self) -> tuple[int, ...]:
        return (self.epic, self.feature, self.story)

    def __str__(self) -> str:
        """Format as {epic}.{feature}.{story}"""
        return f"{self.epic}.{self.feature}.{self.story}"


OutlineNumber = EpicNumber | FeatureNumber | StoryNumber
