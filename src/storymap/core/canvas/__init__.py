"""
Canvas documents and outline restructuring.

Provides:
- Canvas models (CanvasElement, CanvasData) matching the editor's JSON format
- Parent options and reassignment with renumbering
- JSON file storage
- OutlineService tying them together for the CLI
"""

from storymap.core.canvas.assignment import (
    AssignmentError,
    AssignmentResult,
    ParentOption,
    assign_to_parent,
    find_children,
    parent_options,
)
from storymap.core.canvas.models import CanvasData, CanvasElement, ElementContent
from storymap.core.canvas.service import (
    Outline,
    OutlineNode,
    OutlineService,
    OutlineServiceError,
)
from storymap.core.canvas.store import CanvasFileCorruptedError, CanvasStore

__all__ = [
    "AssignmentError",
    "AssignmentResult",
    "CanvasData",
    "CanvasElement",
    "CanvasFileCorruptedError",
    "CanvasStore",
    "ElementContent",
    "Outline",
    "OutlineNode",
    "OutlineService",
    "OutlineServiceError",
    "ParentOption",
    "assign_to_parent",
    "find_children",
    "parent_options",
]
