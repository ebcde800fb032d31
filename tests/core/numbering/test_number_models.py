"""
Tests for outline number models.

These tests verify validation, string formatting, parent derivation and
immutability of the tagged number models.
"""

import pytest
from pydantic import ValidationError

from storymap.core.numbering import EpicNumber, FeatureNumber, StoryNumber


class TestEpicNumber:
    """Tests for EpicNumber model."""

    def test_format(self) -> None:
        assert str(EpicNumber(epic=3)) == "3.0"

    def test_has_no_parent(self) -> None:
        epic = EpicNumber(epic=3)
        assert epic.parent is None
        assert epic.tier == "epic"
        assert epic.segments == (3, 0)

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            EpicNumber(epic=-1)
        assert "Epic number must be non-negative" in str(exc_info.value)

    def test_immutable(self) -> None:
        epic = EpicNumber(epic=1)
        with pytest.raises(ValidationError):
            epic.epic = 2  # type: ignore[misc]


class TestFeatureNumber:
    """Tests for FeatureNumber model."""

    def test_format(self) -> None:
        assert str(FeatureNumber(epic=3, feature=2)) == "3.2"

    def test_parent_is_epic(self) -> None:
        assert FeatureNumber(epic=3, feature=2).parent == EpicNumber(epic=3)

    def test_zero_feature_rejected(self) -> None:
        """X.0 is the epic itself, never a feature."""
        with pytest.raises(ValidationError) as exc_info:
            FeatureNumber(epic=1, feature=0)
        assert "Feature number must be positive" in str(exc_info.value)

    def test_equality(self) -> None:
        assert FeatureNumber(epic=1, feature=2) == FeatureNumber(epic=1, feature=2)
        assert FeatureNumber(epic=1, feature=2) != FeatureNumber(epic=1, feature=3)


class TestStoryNumber:
    """Tests for StoryNumber model."""

    def test_format(self) -> None:
        assert str(StoryNumber(epic=3, feature=2, story=7)) == "3.2.7"

    def test_parent_is_feature(self) -> None:
        story = StoryNumber(epic=3, feature=2, story=7)
        assert story.parent == FeatureNumber(epic=3, feature=2)
        assert story.segments == (3, 2, 7)

    def test_epic_level_story_parent_is_epic(self) -> None:
        """A zero feature component marks a story attached to its epic."""
        story = StoryNumber(epic=3, feature=0, story=1)
        assert str(story) == "3.0.1"
        assert story.parent == EpicNumber(epic=3)

    def test_zero_story_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            StoryNumber(epic=1, feature=1, story=0)
        assert "Story number must be positive" in str(exc_info.value)

    def test_negative_feature_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StoryNumber(epic=1, feature=-1, story=1)
