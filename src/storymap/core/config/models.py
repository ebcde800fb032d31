"""
Configuration data models for storymap.

These models define the structure of .storymap.json and
~/.config/storymap/config.json files, with validation and type safety via
Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field


class CanvasConfig(BaseModel):
    """
    Where the canvas document lives.
    """

    path: str = Field(
        default="canvas.json",
        min_length=1,
        description="Canvas JSON file, relative to the project directory",
    )


class NumberingConfig(BaseModel):
    """
    Outline numbering behaviour.
    """

    renumber_children: bool = Field(
        default=True,
        description="Renumber a parent's children from .1 when assigning elements to it",
    )
    missing_number_sort_key: str = Field(
        default="999",
        min_length=1,
        description="Sort stand-in for elements without a number",
    )


class StorymapConfig(BaseModel):
    """
    Main storymap configuration.

    Combines all configuration sections. Loaded from (in order of precedence):
    1. Environment variables (STORYMAP_*)
    2. Project config (.storymap.json)
    3. User config (~/.config/storymap/config.json)
    4. Hardcoded defaults
    """

    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    numbering: NumberingConfig = Field(default_factory=NumberingConfig)

    model_config = ConfigDict(
        validate_assignment=True,
        extra="allow",
    )
