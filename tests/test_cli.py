"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from storyverse.cli import main
from storyverse.config import get_settings


SAMPLE = "He walked into the bar. It was late and the rain was cold. She did not look up."


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STORYVERSE_STORE_BACKEND", "json")
    monkeypatch.setenv("STORYVERSE_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


def analyze(runner, title="Night"):
    result = runner.invoke(main, ["analyze", "--text", SAMPLE, "--title", title, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["sample_id"]


def create_profile(runner, *sample_ids):
    args = ["profile", "create", "Noir", "-a", "Raymond Chandler"]
    for sample_id in sample_ids:
        args += ["-s", sample_id]
    result = runner.invoke(main, args)
    assert result.exit_code == 0, result.output
    line = next(l for l in result.output.splitlines() if l.startswith("Profile ID:"))
    return line.split(":", 1)[1].strip()


class TestAnalyzeCommand:
    """Test the analyze command."""

    def test_text_as_json(self, runner):
        """Inline text can be analyzed without saving."""
        result = runner.invoke(main, ["analyze", "--text", SAMPLE, "--no-save", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["sample_id"] is None
        assert data["metrics"]["narrative_characteristics"]["pov"] == "third_person"

    def test_file_with_table(self, runner, tmp_path):
        """File analysis prints the metrics table and summary."""
        path = tmp_path / "night_scene.txt"
        path.write_text(SAMPLE, encoding="utf-8")

        result = runner.invoke(main, ["analyze", str(path)])

        assert result.exit_code == 0, result.output
        assert "Sample ID:" in result.output
        assert "third_person" in result.output
        assert "This writing features" in result.output

    def test_samples_persist_between_runs(self, runner, tmp_path):
        """Saved samples are written to the JSON store."""
        analyze(runner)
        assert (tmp_path / "data" / "storyverse.json").exists()

    def test_no_input(self, runner):
        """Analyze without a file or text fails."""
        result = runner.invoke(main, ["analyze"])
        assert result.exit_code == 1
        assert "Provide a file path or --text" in result.output

    def test_title_required(self, runner):
        """Saving inline text needs a title."""
        result = runner.invoke(main, ["analyze", "--text", SAMPLE])
        assert result.exit_code == 1
        assert "Title is required" in result.output


class TestProfileCommands:
    """Test profile create and show."""

    def test_create_and_show(self, runner):
        """A created profile can be shown with guidance and examples."""
        profile_id = create_profile(runner, analyze(runner, "Night"), analyze(runner, "Rain"))

        result = runner.invoke(main, ["profile", "show", profile_id, "--examples"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("# Noir\n")
        assert "## Sentence Structure" in result.output
        assert "- Emulate the style of: Raymond Chandler" in result.output
        assert "### Rain" in result.output

    def test_show_json(self, runner):
        """Profiles can be printed as JSON."""
        profile_id = create_profile(runner, analyze(runner))

        result = runner.invoke(main, ["profile", "show", profile_id, "--json", "--no-notes"])

        data = json.loads(result.output)
        assert data["profile"]["id"] == profile_id
        assert "style_guidance" not in data

    def test_unknown_sample(self, runner):
        """Unknown sample ids are reported."""
        result = runner.invoke(main, ["profile", "create", "Noir", "-s", "missing"])
        assert result.exit_code == 1
        assert "Found 0 of 1 requested samples" in result.output

    def test_unknown_profile(self, runner):
        """Unknown profiles exit with an error."""
        result = runner.invoke(main, ["profile", "show", "missing"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestWriteCommand:
    """Test the write command."""

    def test_brief(self, runner):
        """The write command prints the writing brief."""
        profile_id = create_profile(runner, analyze(runner))

        result = runner.invoke(main, ["write", profile_id, "A storm", "--length", "200"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("# Writing Request: A storm")
        assert "Write approximately 200 words." in result.output

    def test_length_must_be_positive(self, runner):
        """A zero length is a usage error."""
        result = runner.invoke(main, ["write", "some-id", "A storm", "--length", "0"])
        assert result.exit_code == 2


class TestToolsCommands:
    """Test tool listing and raw calls."""

    def test_list_schema(self, runner):
        """Tool definitions are printed as JSON."""
        result = runner.invoke(main, ["tools", "list", "--schema"])

        assert result.exit_code == 0, result.output
        names = [d["name"] for d in json.loads(result.output)]
        assert names == [
            "analyze_writing_sample",
            "get_style_profile",
            "create_style_profile",
            "write_in_style",
        ]

    def test_call(self, runner):
        """Tools can be called with JSON arguments."""
        args = json.dumps({"text": SAMPLE, "saveSample": False})
        result = runner.invoke(main, ["tools", "call", "analyze_writing_sample", args])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["isError"] is False

    def test_call_error(self, runner):
        """Error responses exit with status 1."""
        result = runner.invoke(main, ["tools", "call", "get_style_profile", '{"profileId": "missing"}'])

        assert result.exit_code == 1
        assert json.loads(result.output)["isError"] is True

    def test_call_bad_json(self, runner):
        """Malformed argument JSON is rejected."""
        result = runner.invoke(main, ["tools", "call", "analyze_writing_sample", "{oops"])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output


class TestStatusCommand:
    """Test the status command."""

    def test_json_backend(self, runner):
        """Status reports the JSON store file."""
        result = runner.invoke(main, ["status"])
        assert result.exit_code == 0
        assert "Store backend: json" in result.output
        assert "Store file:" in result.output
