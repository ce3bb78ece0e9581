"""
Integration tests for the CLI commands.
"""

import json
import logging

import pytest
from typer.testing import CliRunner

from web_test_automation import main
from web_test_automation.core.session import TestSession
from tests.fakes import FakeBrowser, FakeElement, FakeLLMProvider, FakePage


LOGIN_REPLY = json.dumps({"actions": [
    {"type": "Navigate", "target": "example.com", "value": ""},
    {"type": "Click", "target": "Login button", "value": ""},
    {"type": "VerifyUrl", "target": "", "value": "example.com"},
]})


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run in an empty directory with fast timings and no stray key."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("WEB_TEST_AUTOMATION__LLM__API_KEY", raising=False)
    for name in (
        "WEB_TEST_AUTOMATION__RUNNER__INTER_ACTION_DELAY_MS",
        "WEB_TEST_AUTOMATION__EXECUTOR__NAVIGATION_SETTLE_MS",
        "WEB_TEST_AUTOMATION__EXECUTOR__CLICK_SETTLE_MS",
        "WEB_TEST_AUTOMATION__LLM__MIN_CALL_INTERVAL_S",
    ):
        monkeypatch.setenv(name, "0")

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fake_session(monkeypatch):
    """Replace the CLI's session with one backed by fakes."""
    page = FakePage([FakeElement("button", "Login")])
    provider = FakeLLMProvider([LOGIN_REPLY])

    def build(settings):
        return TestSession(settings=settings, browser=FakeBrowser(page), llm_provider=provider)

    monkeypatch.setattr(main, "TestSession", build)
    return page, provider


class TestCLIHelp:
    """Test help output."""

    def test_run_help(self, runner):
        """Test help for run command."""
        result = runner.invoke(main.app, ["run", "--help"])
        assert result.exit_code == 0
        assert "--visible" in result.output
        assert "--base-url" in result.output
        assert "--report" in result.output

    def test_interactive_help(self, runner):
        """Test help for interactive command."""
        result = runner.invoke(main.app, ["interactive", "--help"])
        assert result.exit_code == 0
        assert "--visible" in result.output

    def test_version(self, runner):
        """Test version command."""
        result = runner.invoke(main.app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCLIRun:
    """Test the 'run' CLI command."""

    def test_missing_api_key(self, runner):
        """Without a key the command explains the setup and exits 1."""
        result = runner.invoke(main.app, ["run", "go to example.com"])

        assert result.exit_code == 1
        assert "OPENAI_API_KEY environment variable is required" in result.output
        assert "export OPENAI_API_KEY" in result.output

    def test_interactive_missing_api_key(self, runner):
        """Interactive mode also requires the key."""
        result = runner.invoke(main.app, ["interactive"])
        assert result.exit_code == 1

    def test_successful_run(self, runner, fake_session, monkeypatch, tmp_path):
        """A passing scenario exits 0 and writes the report."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        page, provider = fake_session
        report = tmp_path / "out" / "report.json"

        result = runner.invoke(main.app, ["run", "log in on example.com", "--yes", "--report", str(report)])

        assert result.exit_code == 0, result.output
        assert "Scenario execution: SUCCESS" in result.output
        assert page.elements[0].clicks == 1
        data = json.loads(report.read_text())
        assert data["passed_scenarios"] == 1
        assert data["results"][0]["description"] == "log in on example.com"

    def test_failed_run(self, runner, fake_session, monkeypatch, tmp_path):
        """A failing scenario exits 1."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        page, _ = fake_session
        page.elements.clear()

        result = runner.invoke(main.app, ["run", "log in", "-y", "-r", str(tmp_path / "r.json")])

        assert result.exit_code == 1
        assert "Scenario execution: FAILED" in result.output

    def test_parse_error(self, runner, fake_session, monkeypatch, tmp_path):
        """An unusable model reply is reported and exits 1."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        _, provider = fake_session
        provider.replies[:] = ["not json"]

        result = runner.invoke(main.app, ["run", "log in", "-y", "-r", str(tmp_path / "r.json")])

        assert result.exit_code == 1
        assert "Invalid JSON structure from AI" in result.output

    def test_declined_confirmation(self, runner, fake_session, monkeypatch, tmp_path):
        """Answering no skips execution."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        page, _ = fake_session

        result = runner.invoke(main.app, ["run", "log in", "-r", str(tmp_path / "r.json")], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert page.goto_calls == []


class TestCLIInteractive:
    """Test the 'interactive' CLI command."""

    def test_runs_prompts_until_exit(self, runner, fake_session, monkeypatch, tmp_path):
        """Each confirmed prompt is run; the report is written on exit."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        page, _ = fake_session
        report = tmp_path / "interactive.json"

        result = runner.invoke(main.app, ["interactive", "-r", str(report)], input="log in\ny\nexit\n")

        assert result.exit_code == 0, result.output
        assert "Scenario execution: SUCCESS" in result.output
        assert json.loads(report.read_text())["total_scenarios"] == 1

    def test_parse_error_continues(self, runner, fake_session, monkeypatch, tmp_path):
        """A bad reply is reported and the loop asks again."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        _, provider = fake_session
        provider.replies[:] = ["", LOGIN_REPLY]

        result = runner.invoke(
            main.app,
            ["interactive", "-r", str(tmp_path / "r.json")],
            input="first\nsecond\ny\nexit\n",
        )

        assert result.exit_code == 0, result.output
        assert "Empty response from AI" in result.output
        assert "Scenario execution: SUCCESS" in result.output
