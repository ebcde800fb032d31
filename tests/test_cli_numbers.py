"""
Tests for the next and children CLI commands.
"""

import json

from typer.testing import CliRunner

from storymap.cli import app

runner = CliRunner()


class TestNextCommand:
    """Test `storymap next`."""

    def test_empty_canvas(self, project_dir) -> None:
        """Empty canvas starts every tier at 1."""
        for tier, expected in (("epic", "1.0"), ("feature", "1.1"), ("story", "1.1.1")):
            result = runner.invoke(app, ["next", tier])
            assert result.exit_code == 0
            assert result.output.strip() == expected

    def test_from_canvas(self, canvas_file) -> None:
        result = runner.invoke(app, ["next", "feature"])

        assert result.exit_code == 0
        assert result.output.strip() == "2.1"

    def test_with_parent(self, canvas_file) -> None:
        result = runner.invoke(app, ["next", "story", "--parent", "1.1"])

        assert result.exit_code == 0
        assert result.output.strip() == "1.1.3"

    def test_does_not_write(self, canvas_file) -> None:
        before = canvas_file.read_text()
        runner.invoke(app, ["next", "epic"])

        assert canvas_file.read_text() == before

    def test_unknown_tier(self, project_dir) -> None:
        result = runner.invoke(app, ["next", "sticky"])

        assert result.exit_code == 2
        assert "Invalid option: sticky" in result.output

    def test_wrong_parent_tier(self, canvas_file) -> None:
        result = runner.invoke(app, ["next", "feature", "-p", "1.1"])

        assert result.exit_code == 2
        assert "must be an epic" in result.output

    def test_canvas_option(self, project_dir) -> None:
        """--canvas points at another file."""
        other = project_dir / "other.json"
        other.write_text(
            json.dumps({"elements": [{"id": "e", "type": "epic", "content": {"storyNumber": "4.0"}}]})
        )

        result = runner.invoke(app, ["--canvas", "other.json", "next", "epic"])

        assert result.exit_code == 0
        assert result.output.strip() == "5.0"

    def test_canvas_from_env(self, project_dir, monkeypatch) -> None:
        (project_dir / "q3.json").write_text(
            json.dumps({"elements": [{"id": "e", "type": "epic", "content": {"storyNumber": "7.0"}}]})
        )
        monkeypatch.setenv("STORYMAP_CANVAS", "q3.json")

        result = runner.invoke(app, ["next", "epic"])

        assert result.output.strip() == "8.0"

    def test_corrupted_canvas(self, project_dir) -> None:
        (project_dir / "canvas.json").write_text("{oops")

        result = runner.invoke(app, ["next", "epic"])

        assert result.exit_code == 1
        assert "Error:" in result.output


    def test_canvas_not_utf8(self, project_dir) -> None:
        (project_dir / "canvas.json").write_bytes(b"\xff\xfe{}")

        result = runner.invoke(app, ["next", "epic"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestChildrenCommand:
    """Test `storymap children`."""

    def test_feature_parent(self, canvas_file) -> None:
        result = runner.invoke(app, ["children", "1.1", "--count", "2"])

        assert result.exit_code == 0
        assert result.output.split() == ["1.1.3", "1.1.4"]

    def test_blank_parent(self, canvas_file) -> None:
        result = runner.invoke(app, ["children", "", "-n", "1"])

        assert result.exit_code == 0
        assert result.output.split() == ["1.1.3"]

    def test_count_must_be_positive(self, canvas_file) -> None:
        result = runner.invoke(app, ["children", "1.1", "--count", "0"])

        assert result.exit_code != 0
