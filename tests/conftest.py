"""
Pytest configuration and fixtures.
"""

import pytest


@pytest.fixture
def executor_settings():
    """Executor settings with every delay removed."""
    from web_test_automation.config import ExecutorSettings

    return ExecutorSettings(
        navigation_retry_delay_ms=0,
        navigation_settle_ms=0,
        click_retry_delay_ms=0,
        click_settle_ms=0,
        navigation_click_settle_ms=0,
    )


@pytest.fixture
def runner_settings():
    """Runner settings without the pause between actions."""
    from web_test_automation.config import RunnerSettings

    return RunnerSettings(inter_action_delay_ms=0)


@pytest.fixture
def settings(executor_settings, runner_settings, tmp_path):
    """Provide test settings."""
    from web_test_automation.config import Settings, LLMSettings, ReportSettings

    return Settings(
        llm=LLMSettings(api_key="sk-test", min_call_interval_s=0),
        executor=executor_settings,
        runner=runner_settings,
        report=ReportSettings(output_path=str(tmp_path / "test-report.json")),
    )


@pytest.fixture
def step_log():
    """A StepLogger plus the list of entries it produced."""
    from web_test_automation.reporting import StepLogger

    entries = []
    step_logger = StepLogger()
    step_logger.add_sink(entries.append)
    return step_logger, entries


@pytest.fixture(autouse=True)
def _reset_settings():
    """Keep the global settings singleton from leaking between tests."""
    from web_test_automation.config import reset_settings

    reset_settings()
    yield
    reset_settings()
