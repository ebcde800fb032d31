"""
Outline service for canvas documents.

Provides high-level operations for:
- Adding epics, features and stories with allocated numbers
- Splitting a story into several numbered siblings
- Listing parent options and reassigning elements to a parent
- Building the epic → feature → story tree for display

Every operation loads the canvas from its store, applies a pure computation
from ``storymap.core.numbering`` / ``storymap.core.canvas.assignment`` and
saves the result. There is no locking: the last save wins.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from storymap.core.canvas.assignment import (
    AssignmentResult,
    ParentOption,
    assign_to_parent,
    find_children,
    parent_options,
)
from storymap.core.canvas.models import CanvasData, CanvasElement, Position, Size
from storymap.core.canvas.store import CanvasStore
from storymap.core.config import StorymapConfig, load_config
from storymap.core.numbering import (
    TIERS,
    NumberRegistry,
    child_numbers,
    next_number,
    number_sort_key,
    parse_number,
)

logger = logging.getLogger(__name__)

# Vertical gap between a split story and its new siblings
SPLIT_OFFSET = 40.0


class OutlineServiceError(Exception):
    """Error from outline service operations."""

    pass


@dataclass
class OutlineNode:
    """An outline element with its children, ordered by number."""

    element: CanvasElement
    children: list[OutlineNode] = field(default_factory=list)


@dataclass
class Outline:
    """
    Tree view of a canvas.

    ``orphans`` holds features and stories that no epic reaches, through
    either ``parentId`` or their number.
    """

    epics: list[OutlineNode] = field(default_factory=list)
    orphans: list[CanvasElement] = field(default_factory=list)


class OutlineService:
    """
    Service for numbering and restructuring a canvas outline.

    Example:
        >>> service = OutlineService(project_dir=Path.cwd())
        >>> epic = service.add_element("epic", "Checkout")
        >>> epic.story_number
        '1.0'
        >>> feature = service.add_element("feature", "Payments", parent="1.0")
        >>> feature.story_number
        '1.1'
    """

    def __init__(
        self,
        store: CanvasStore | None = None,
        config: StorymapConfig | None = None,
        project_dir: Path | None = None,
    ) -> None:
        """
        Initialize OutlineService.

        Args:
            store: Canvas storage (defaults to the configured canvas file)
            config: Configuration (defaults to load_config(project_dir))
            project_dir: Project directory (defaults to cwd)
        """
        self.project_dir = project_dir or Path.cwd()
        self.config = config or load_config(self.project_dir)
        self.store = store or CanvasStore(self.config.canvas.path, project_dir=self.project_dir)

    def load(self) -> CanvasData:
        return self.store.load()

    def registry(self) -> NumberRegistry:
        """Numbers currently on the canvas."""
        return NumberRegistry.from_elements(self.load().elements)

    def next_number(self, tier: str, parent: str | None = None) -> str:
        return next_number(self.registry(), tier, parent=parent)

    def child_numbers(self, parent_number: str | None, count: int) -> list[str]:
        return child_numbers(self.registry(), parent_number, count)

    def _require(self, data: CanvasData, element_id: str) -> CanvasElement:
        element = data.get_element(element_id)
        if element is None:
            raise OutlineServiceError(f"Element {element_id} not found in {self.store.path}")
        return element

    def add_element(self, tier: str, title: str, parent: str | None = None) -> CanvasElement:
        """
        Create a new epic, feature or story with the next free number.

        Args:
            tier: "epic", "feature" or "story"
            title: Element title
            parent: Optional parent number; the new element is linked to the
                element carrying it, if there is one

        Returns:
            The created element

        Raises:
            OutlineServiceError: If the tier is not an outline tier
            InvalidNumberError: If the parent number is malformed or of the
                wrong tier
        """
        if tier not in TIERS:
            raise OutlineServiceError(
                f"Cannot add element of type {tier!r}; expected one of {', '.join(TIERS)}"
            )

        data = self.load()
        registry = NumberRegistry.from_elements(data.elements)
        number = next_number(registry, tier, parent=parent)

        parent_id = None
        if parent is not None:
            parent_number = str(parse_number(parent))
            for el in data.elements:
                if el.tier is not None and (el.story_number or "").strip() == parent_number:
                    parent_id = el.id
                    break
            if parent_id is None:
                logger.info("No element carries parent number %s", parent_number)

        element = CanvasElement(
            id=uuid.uuid4().hex,
            type=tier,
            content={"title": title, "parentId": parent_id},
            position=Position(x=0, y=0),
            size=Size(width=0, height=0),
        ).with_story_number(number)

        data.elements.append(element)
        self.store.save(data)
        logger.info("Added %s %s %r", tier, number, title)
        return element

    def split_story(self, element_id: str, titles: Sequence[str]) -> list[CanvasElement]:
        """
        Split a story into new sibling stories.

        The new stories are numbered after the story within its feature and
        belong to the same parent.

        Args:
            element_id: Id of the story to split
            titles: One title per new story

        Returns:
            The created stories, in number order

        Raises:
            OutlineServiceError: If the element is missing or not a story, or
                no titles were given
        """
        if not titles:
            raise OutlineServiceError("At least one title is required to split a story")

        data = self.load()
        story = self._require(data, element_id)
        if story.type != "story":
            raise OutlineServiceError(f"Element {element_id} is a {story.type}, not a story")

        registry = NumberRegistry.from_elements(data.elements)
        numbers = child_numbers(registry, story.story_number or "", len(titles))

        created: list[CanvasElement] = []
        for index, (title, number) in enumerate(zip(titles, numbers), start=1):
            position = Position(
                x=story.position.x,
                y=story.position.y + index * (story.size.height + SPLIT_OFFSET),
            )
            child = CanvasElement(
                id=uuid.uuid4().hex,
                type="story",
                content={"title": title, "parentId": story.parent_id, "splitFrom": story.id},
                position=position,
                size=Size(width=story.size.width, height=story.size.height),
            ).with_story_number(number)
            created.append(child)

        data.elements.extend(created)
        self.store.save(data)
        logger.info("Split %s into %s", story.story_number or element_id, ", ".join(numbers))
        return created

    def parent_options(self, selected_ids: Sequence[str]) -> list[ParentOption]:
        """
        List valid parents for the given element ids.

        Raises:
            OutlineServiceError: If an id is not on the canvas
        """
        data = self.load()
        selected = [self._require(data, i) for i in selected_ids]
        return parent_options(
            selected,
            data.elements,
            missing_number=self.config.numbering.missing_number_sort_key,
        )

    def assign(
        self,
        selected_ids: Sequence[str],
        parent_id: str,
        renumber_children: bool | None = None,
    ) -> AssignmentResult:
        """
        Move elements under a parent and save the result.

        Args:
            selected_ids: Ids of elements to move
            parent_id: Id of the new parent
            renumber_children: Renumber the parent's children from .1
                (defaults to numbering.renumber_children)

        Raises:
            AssignmentError: If the move is not allowed
        """
        if renumber_children is None:
            renumber_children = self.config.numbering.renumber_children

        data = self.load()
        result = assign_to_parent(data.elements, selected_ids, parent_id, renumber_children)
        data.elements = result.elements
        self.store.save(data)

        logger.info(
            "Assigned %s to %s (%d renumbered)",
            ", ".join(result.moved_ids),
            parent_id,
            len(result.renumbered),
        )
        return result

    def outline(self) -> Outline:
        """
        Build the epic → feature → story tree.

        Returns:
            Outline with epics in number order and unreachable elements as
            orphans
        """
        elements = [el for el in self.load().elements if el.tier is not None]
        missing = self.config.numbering.missing_number_sort_key

        def ordered(items: list[CanvasElement]) -> list[CanvasElement]:
            return sorted(items, key=lambda el: number_sort_key(el.story_number or missing))

        seen: set[str] = set()

        def build(element: CanvasElement) -> OutlineNode:
            seen.add(element.id)
            children = [
                el
                for el in find_children(elements, element)
                if el.id not in seen and TIERS.index(el.tier) > TIERS.index(element.tier)  # type: ignore[arg-type]
            ]
            return OutlineNode(element=element, children=[build(c) for c in ordered(children)])

        epics = [build(el) for el in ordered([el for el in elements if el.type == "epic"])]
        orphans = ordered([el for el in elements if el.id not in seen])
        return Outline(epics=epics, orphans=orphans)
