"""
Tests for layered .env loading.
"""

import os

from storymap.core.config import load_layered_env


class TestLoadLayeredEnv:
    """Test .env precedence: shell > project .env > user .env."""

    def test_user_env(self, tmp_path, project_dir, monkeypatch):
        user_env = tmp_path / "config" / "storymap" / ".env"
        user_env.parent.mkdir(parents=True)
        user_env.write_text("STORYMAP_CANVAS=user.json\n")

        load_layered_env(project_dir=project_dir)

        assert os.environ["STORYMAP_CANVAS"] == "user.json"

    def test_project_beats_user(self, tmp_path, project_dir):
        user_env = tmp_path / "user.env"
        user_env.write_text("STORYMAP_CANVAS=user.json\nSTORYMAP_RENUMBER=off\n")
        (project_dir / ".env").write_text("STORYMAP_CANVAS=project.json\n")

        load_layered_env(project_dir=project_dir, user_env_paths=[user_env])

        assert os.environ["STORYMAP_CANVAS"] == "project.json"
        assert os.environ["STORYMAP_RENUMBER"] == "off"

    def test_shell_wins(self, project_dir, monkeypatch):
        monkeypatch.setenv("STORYMAP_CANVAS", "shell.json")
        (project_dir / ".env").write_text("STORYMAP_CANVAS=project.json\n")

        load_layered_env(project_dir=project_dir)

        assert os.environ["STORYMAP_CANVAS"] == "shell.json"

    def test_missing_files(self, project_dir):
        load_layered_env(project_dir=project_dir)

        assert "STORYMAP_CANVAS" not in os.environ
