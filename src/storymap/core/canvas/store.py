"""
JSON file storage for canvas documents.

Reads and writes a single canvas document (``canvas.json`` by default) with
atomic writes, so an interrupted save never leaves a truncated file behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from storymap.core.canvas.models import CanvasData

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_FILE = "canvas.json"


class CanvasFileCorruptedError(Exception):
    """Raised when the canvas file is not a valid canvas document."""

    pass


class CanvasStore:
    """
    Canvas storage backed by one JSON file.

    A missing file reads as an empty canvas; it is only created on the
    first save.

    Example:
        >>> store = CanvasStore(Path("canvas.json"))
        >>> data = store.load()
        >>> store.save(data)
    """

    def __init__(self, path: Path | str | None = None, project_dir: Path | None = None):
        """
        Initialize the store.

        Args:
            path: Canvas file path; relative paths resolve against project_dir
            project_dir: Base directory (defaults to current directory)
        """
        self.project_dir = project_dir or Path.cwd()
        path = Path(path) if path else Path(DEFAULT_CANVAS_FILE)
        self.path = path if path.is_absolute() else self.project_dir / path

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> CanvasData:
        """
        Load the canvas document.

        Returns:
            Parsed CanvasData (empty when the file does not exist)

        Raises:
            CanvasFileCorruptedError: If the file is not UTF-8 JSON or not a
                canvas document
        """
        if not self.path.exists():
            logger.debug("No canvas at %s, starting empty", self.path)
            return CanvasData()

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CanvasFileCorruptedError(f"Failed to parse {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise CanvasFileCorruptedError(f"{self.path} must contain a JSON object")

        try:
            data = CanvasData.model_validate(raw)
        except ValidationError as e:
            raise CanvasFileCorruptedError(f"Invalid canvas document {self.path}: {e}") from e

        logger.debug("Loaded %d element(s) from %s", len(data.elements), self.path)
        return data

    def save(self, data: CanvasData) -> None:
        """
        Save the canvas document atomically.

        Uses a temporary file and atomic rename to prevent corruption
        on write failures.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=".canvas_", suffix=".json.tmp"
        )

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data.to_dict(), f, indent=2, ensure_ascii=False)
                f.write("\n")

            os.replace(temp_path, self.path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        logger.debug("Saved %d element(s) to %s", len(data.elements), self.path)
