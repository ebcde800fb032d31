"""
Unit tests for configuration loader.

Tests multi-layer config merging, environment variable overrides,
caching, and XDG directory handling.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from storymap.core.config import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    load_config,
)
from storymap.core.config.loader import (
    apply_env_overrides,
    deep_merge,
    get_default_config,
    get_xdg_config_home,
    load_json_file,
)
from storymap.core.config.models import StorymapConfig

# ==============================================================================
# Helper Functions Tests
# ==============================================================================


class TestDeepMerge:
    """Test the deep_merge helper function."""

    def test_nested_merge(self):
        """Nested dicts are merged key by key."""
        base = {"canvas": {"path": "a.json"}, "numbering": {"renumber_children": True}}
        override = {"numbering": {"renumber_children": False}}
        result = deep_merge(base, override)
        assert result == {
            "canvas": {"path": "a.json"},
            "numbering": {"renumber_children": False},
        }

    def test_override_replaces_non_dict(self):
        assert deep_merge({"a": [1, 2, 3]}, {"a": [4]}) == {"a": [4]}

    def test_inputs_unchanged(self):
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestLoadJsonFile:
    """Test JSON file loading."""

    def test_load_existing_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"canvas": {"path": "x.json"}}))
        assert load_json_file(path) == {"canvas": {"path": "x.json"}}

    def test_missing_file(self, tmp_path):
        assert load_json_file(tmp_path / "nope.json") is None

    def test_invalid_json_is_ignored(self, tmp_path, caplog):
        """A broken config file is logged and skipped."""
        path = tmp_path / "config.json"
        path.write_text("{ broken")
        assert load_json_file(path) is None
        assert "Failed to parse config" in caplog.text

    def test_non_object_is_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        assert load_json_file(path) is None


class TestPaths:
    """Test config path helpers."""

    def test_xdg_config_home(self, tmp_path):
        assert get_xdg_config_home() == tmp_path / "config"

    def test_xdg_default(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME")
        assert get_xdg_config_home() == Path.home() / ".config"

    def test_user_config_path(self, tmp_path):
        assert get_user_config_path() == tmp_path / "config" / "storymap" / "config.json"

    def test_project_config_path(self, project_dir):
        assert get_project_config_path() == project_dir / ".storymap.json"
        assert get_project_config_path(Path("/srv/app")) == Path("/srv/app/.storymap.json")


class TestEnvOverrides:
    """Test environment variable overrides."""

    def test_canvas_path(self, monkeypatch):
        monkeypatch.setenv("STORYMAP_CANVAS", "boards/q3.json")
        result = apply_env_overrides(get_default_config())
        assert result["canvas"]["path"] == "boards/q3.json"

    @pytest.mark.parametrize("value", ["false", "0", "no", "OFF"])
    def test_renumber_disabled(self, monkeypatch, value):
        monkeypatch.setenv("STORYMAP_RENUMBER", value)
        result = apply_env_overrides(get_default_config())
        assert result["numbering"]["renumber_children"] is False

    def test_renumber_enabled(self, monkeypatch):
        monkeypatch.setenv("STORYMAP_RENUMBER", "yes")
        result = apply_env_overrides({"numbering": {"renumber_children": False}})
        assert result["numbering"]["renumber_children"] is True

    def test_no_env_no_change(self):
        defaults = get_default_config()
        assert apply_env_overrides(defaults) == defaults


# ==============================================================================
# load_config Tests
# ==============================================================================


class TestLoadConfig:
    """Test the full precedence chain."""

    def test_defaults(self, project_dir):
        config = load_config(project_dir)
        assert isinstance(config, StorymapConfig)
        assert config.canvas.path == "canvas.json"
        assert config.numbering.renumber_children is True
        assert config.numbering.missing_number_sort_key == "999"

    def test_user_config(self, tmp_path, project_dir):
        user = tmp_path / "config" / "storymap" / "config.json"
        user.parent.mkdir(parents=True)
        user.write_text(json.dumps({"canvas": {"path": "user.json"}}))

        assert load_config(project_dir).canvas.path == "user.json"

    def test_project_beats_user(self, tmp_path, project_dir):
        user = tmp_path / "config" / "storymap" / "config.json"
        user.parent.mkdir(parents=True)
        user.write_text(json.dumps({"canvas": {"path": "user.json"}}))
        (project_dir / ".storymap.json").write_text(
            json.dumps({"canvas": {"path": "project.json"}})
        )

        config = load_config(project_dir)
        assert config.canvas.path == "project.json"
        assert config.numbering.renumber_children is True

    def test_env_beats_project(self, project_dir, monkeypatch):
        (project_dir / ".storymap.json").write_text(
            json.dumps({"numbering": {"renumber_children": True}})
        )
        monkeypatch.setenv("STORYMAP_RENUMBER", "0")

        assert load_config(project_dir).numbering.renumber_children is False

    def test_unknown_sections_allowed(self, project_dir):
        (project_dir / ".storymap.json").write_text(json.dumps({"theme": "dark"}))
        assert load_config(project_dir).model_extra == {"theme": "dark"}

    def test_invalid_value_raises(self, project_dir):
        (project_dir / ".storymap.json").write_text(json.dumps({"canvas": {"path": ""}}))
        with pytest.raises(ValidationError):
            load_config(project_dir)

    def test_cache(self, project_dir):
        first = load_config(project_dir)
        (project_dir / ".storymap.json").write_text(json.dumps({"canvas": {"path": "new.json"}}))

        assert load_config(project_dir) is first
        assert load_config(project_dir, use_cache=False).canvas.path == "new.json"

    def test_clear_cache(self, project_dir):
        first = load_config(project_dir)
        clear_cache()
        assert load_config(project_dir) is not first
