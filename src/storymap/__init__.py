"""
storymap - outline numbering for planning canvases

A library and CLI that number and restructure the epic → feature → story
outline of a canvas document.
"""

__version__ = "0.3.0"

# Re-export core models for convenience
from storymap.core.canvas.models import CanvasData, CanvasElement
from storymap.core.config.models import StorymapConfig
from storymap.core.numbering import NumberRegistry, child_numbers, next_number

__all__ = [
    "CanvasData",
    "CanvasElement",
    "NumberRegistry",
    "StorymapConfig",
    "child_numbers",
    "next_number",
    "__version__",
]
