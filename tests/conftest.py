"""
Pytest configuration and shared fixtures.

Provides an isolated working directory and config environment for every
test, plus factories for canvas elements and canvas files.
"""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from storymap.core.canvas.models import CanvasElement
from storymap.core.config import clear_cache

# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """
    Run each test in its own directory with no user config or STORYMAP_* vars.
    """
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("STORYMAP_CANVAS", raising=False)
    monkeypatch.delenv("STORYMAP_RENUMBER", raising=False)
    clear_cache()
    yield work
    clear_cache()


@pytest.fixture
def project_dir(isolated_env) -> Path:
    """The working directory the test runs in."""
    return isolated_env


# ==============================================================================
# Sample Data Fixtures
# ==============================================================================


@pytest.fixture
def make_element() -> Callable[..., CanvasElement]:
    """Factory for canvas elements: make_element("e1", "epic", "1.0", title="Checkout")."""

    def _make(
        element_id: str,
        element_type: str,
        number: str | None = None,
        **content: Any,
    ) -> CanvasElement:
        if number is not None:
            content["storyNumber"] = number
        return CanvasElement(id=element_id, type=element_type, content=content)

    return _make


@pytest.fixture
def sample_elements(make_element) -> list[CanvasElement]:
    """
    A small outline plus unrelated elements.

    1.0 Checkout
        1.1 Payments
            1.1.1 Pay by card
            1.1.2 Pay by invoice
        1.2 Shipping
    2.0 Accounts
    (bmc and sticky elements alongside)
    """
    return [
        make_element("epic-1", "epic", "1.0", title="Checkout"),
        make_element("feat-1", "feature", "1.1", title="Payments"),
        make_element("story-1", "story", "1.1.1", title="Pay by card"),
        make_element("story-2", "story", "1.1.2", title="Pay by invoice"),
        make_element("feat-2", "feature", "1.2", title="Shipping"),
        make_element("epic-2", "epic", "2.0", title="Accounts"),
        make_element("bmc-1", "bmc", None, title="Business model"),
        make_element("sticky-1", "sticky", None, text="remember refunds"),
    ]


@pytest.fixture
def canvas_file(project_dir, sample_elements) -> Path:
    """Write sample_elements to canvas.json in the project directory."""
    path = project_dir / "canvas.json"
    data = {"elements": [el.to_dict() for el in sample_elements], "metadata": {}}
    path.write_text(json.dumps(data, indent=2))
    return path
