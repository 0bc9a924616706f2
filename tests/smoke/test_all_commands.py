"""Smoke tests for the wolfram-llm CLI.

Commands that would call the API get a client backed by a mock transport.
"""

import json

import pytest
from typer.testing import CliRunner

from wolfram_llm import cli
from wolfram_llm.cli import app

runner = CliRunner()


@pytest.fixture
def raw_file(tmp_path, two_plus_two_answer):
    """A saved raw answer on disk."""
    path = tmp_path / "answer.txt"
    path.write_text(two_plus_two_answer, encoding="utf-8")
    return path


@pytest.fixture
def mock_api(monkeypatch, make_client, text_response):
    """Route CLI clients to a mock transport answering with the given text."""

    def install(text: str, status_code: int = 200) -> None:
        monkeypatch.setenv("WOLFRAM_LLM_APP_ID", "test-app-id")
        monkeypatch.setattr(
            cli,
            "WolframLLMClient",
            lambda cfg: make_client(text_response(text, status_code), cfg=cfg),
        )

    return install


class TestCLISmoke:
    """Smoke tests for CLI commands."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "wolfram" in result.stdout.lower()

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.stdout

    @pytest.mark.parametrize(
        "command",
        [
            ["serve", "--help"],
            ["ask", "--help"],
            ["simple", "--help"],
            ["validate-key", "--help"],
            ["parse", "--help"],
        ],
    )
    def test_command_help(self, command):
        result = runner.invoke(app, command)
        assert result.exit_code == 0


class TestParseCommand:
    """Offline parsing of saved answers."""

    def test_agent_output(self, raw_file):
        result = runner.invoke(app, ["--agent", "parse", str(raw_file)])

        assert result.exit_code == 0
        assert "=== Query: what is 2+2? ===" in result.stdout
        assert "--- Result ---" in result.stdout
        assert "Full results: https://www.wolframalpha.com/input?i=what+is+2%2B2%3F" in result.stdout

    def test_json_output(self, raw_file):
        result = runner.invoke(app, ["--json", "parse", str(raw_file)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["query"] == "what is 2+2?"
        assert [s["title"] for s in data["sections"]] == ["Input", "Result", "Number name"]

    def test_human_output(self, raw_file):
        result = runner.invoke(app, ["parse", str(raw_file)])

        assert result.exit_code == 0
        assert "Number name" in result.stdout

    def test_stdin(self, two_plus_two_answer):
        result = runner.invoke(app, ["--agent", "parse", "-"], input=two_plus_two_answer)

        assert result.exit_code == 0
        assert "--- Number name ---" in result.stdout

    def test_format_error(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("Result: 4", encoding="utf-8")

        result = runner.invoke(app, ["--agent", "parse", str(path)])

        assert result.exit_code == 1
        assert "ERROR: Invalid response format: missing query" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["--agent", "parse", str(tmp_path / "nope.txt")])

        assert result.exit_code == 1
        assert "ERROR: Cannot read" in result.stdout


class TestAPICommands:
    """Commands that talk to the API."""

    def test_ask(self, mock_api, two_plus_two_answer):
        mock_api(two_plus_two_answer)

        result = runner.invoke(app, ["--agent", "ask", "what is 2+2?"])

        assert result.exit_code == 0
        assert "--- Input ---" in result.stdout
        assert "2 + 2" in result.stdout

    def test_simple(self, mock_api, requests_seen, duplicated_answer):
        mock_api(duplicated_answer)

        result = runner.invoke(app, ["--agent", "simple", "pi", "--max-chars", "80"])

        assert result.exit_code == 0
        assert "Interpretation: \"pi\" is a mathematical constant" in result.stdout
        assert "Continued fraction" not in result.stdout
        assert requests_seen[0].url.params["maxchars"] == "80"

    def test_ask_not_interpreted(self, mock_api):
        mock_api("no", 501)

        result = runner.invoke(app, ["--agent", "ask", "xyzabc"])

        assert result.exit_code == 1
        assert "Input cannot be interpreted" in result.stdout

    def test_validate_key(self, mock_api, two_plus_two_answer):
        mock_api(two_plus_two_answer)

        result = runner.invoke(app, ["--agent", "validate-key"])

        assert result.exit_code == 0
        assert "OK: API key is valid" in result.stdout

    def test_validate_key_invalid(self, mock_api):
        mock_api("Error 1: Invalid appid", 403)

        result = runner.invoke(app, ["--json", "validate-key"])

        assert result.exit_code == 1
        assert '"valid": false' in result.stdout


class TestAgentMode:
    """Test agent mode flag handling."""

    def test_agent_flag(self):
        result = runner.invoke(app, ["--agent", "--help"])
        assert result.exit_code == 0

    def test_json_flag(self):
        result = runner.invoke(app, ["--json", "--help"])
        assert result.exit_code == 0

    def test_agent_env(self, monkeypatch, raw_file):
        monkeypatch.setenv("WOLFRAM_AGENT", "1")

        result = runner.invoke(app, ["parse", str(raw_file)])

        assert result.exit_code == 0
        assert "=== Query: what is 2+2? ===" in result.stdout


class TestHumanMode:
    """Rich output with brackets in API text."""

    def _parse(self, tmp_path, raw: str):
        path = tmp_path / "answer.txt"
        path.write_text(raw, encoding="utf-8")
        return runner.invoke(app, ["parse", str(path)])

    def test_closing_tag_in_title(self, tmp_path):
        result = self._parse(tmp_path, 'Query: "x"\n\nMass [/kg]: 5')

        assert result.exit_code == 0
        assert "Mass [/kg]" in result.stdout

    def test_balanced_brackets_in_title(self, tmp_path):
        result = self._parse(tmp_path, 'Query: "x"\n\nVolume [liters]: 5')

        assert result.exit_code == 0
        assert "Volume [liters]" in result.stdout

    def test_brackets_in_url(self, tmp_path):
        raw = 'Query: "x"\n\nResult: 1\n\nWolfram|Alpha website result for "x":\nhttps://x.test/?q=[/b]'
        result = self._parse(tmp_path, raw)

        assert result.exit_code == 0
        assert "https://x.test/?q=[/b]" in result.stdout

    def test_brackets_in_error(self, tmp_path):
        result = self._parse(tmp_path, "Query: [/b]\n\nResult: 1")

        assert result.exit_code == 1
        assert "[/b]" in result.stdout
        assert "query is not a JSON string" in result.stdout

    def test_validate_key_without_app_id(self):
        result = runner.invoke(app, ["--agent", "validate-key"])

        assert result.exit_code == 1
        assert "WARNING: WOLFRAM_LLM_APP_ID is not set" in result.stdout
        assert "ERROR: API key is invalid" in result.stdout
