"""
Tests for the scenario runner.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from web_test_automation.engine.action_executor import ActionExecutor
from web_test_automation.engine.scenario_runner import RunState, ScenarioRunner
from web_test_automation.exceptions.base import InitializationError
from web_test_automation.interfaces.action import Action, ActionResult, ActionType, Scenario
from tests.fakes import FakeElement, FakePage


def _ok(action_type=ActionType.CLICK):
    return ActionResult.success_result(action_type)


def _failed(action_type=ActionType.CLICK, error="boom"):
    return ActionResult.failure_result(action_type, error=error, error_type="NotFound")


@pytest.fixture
def mock_executor():
    """An executor double whose results are scripted per test."""
    executor = MagicMock()
    executor.page = FakePage()
    executor.execute = AsyncMock(return_value=_ok())
    return executor


@pytest.fixture
def four_actions():
    return Scenario(
        name="Login flow",
        description="Log in and check the dashboard",
        actions=(
            Action(ActionType.NAVIGATE, target="example.com"),
            Action(ActionType.CLICK, target="Login"),
            Action(ActionType.TYPE, target="email", value="a@b.c"),
            Action(ActionType.VERIFY_URL, value="/dashboard"),
        ),
    )


class TestRun:
    """Test ScenarioRunner.run()."""

    @pytest.mark.asyncio
    async def test_all_succeed(self, mock_executor, runner_settings, four_actions):
        """Every action succeeding completes the scenario."""
        runner = ScenarioRunner(mock_executor, runner_settings)
        result = await runner.run(four_actions)

        assert result.success is True
        assert result.state == RunState.COMPLETED
        assert result.actions_executed == 4
        assert result.failed_action is None
        assert mock_executor.execute.await_count == 4

    @pytest.mark.asyncio
    async def test_first_failure_aborts(self, mock_executor, runner_settings, four_actions):
        """A failing second action stops the run before the third."""
        mock_executor.execute.side_effect = [_ok(), _failed(error="Could not find Login")]
        runner = ScenarioRunner(mock_executor, runner_settings)

        result = await runner.run(four_actions)

        assert result.success is False
        assert result.state == RunState.ABORTED
        assert result.actions_executed == 2
        assert result.failed_action == 2
        assert result.error == "Could not find Login"
        executed = [c.args[0] for c in mock_executor.execute.await_args_list]
        assert executed == list(four_actions.actions[:2])

    @pytest.mark.asyncio
    async def test_failure_logged_with_position(self, mock_executor, runner_settings, four_actions, step_log):
        """The failing step is logged as i/n with its type and target."""
        step_logger, entries = step_log
        mock_executor.execute.side_effect = [_ok(), _failed()]

        await ScenarioRunner(mock_executor, runner_settings, step_logger).run(four_actions)

        assert any("Failed to execute action 2/4: Click - Login" in e for e in entries)
        assert any("Scenario aborted" in e for e in entries)

    @pytest.mark.asyncio
    async def test_logs_start_and_success(self, mock_executor, runner_settings, four_actions, step_log):
        """Start, description and success lines are written."""
        step_logger, entries = step_log

        await ScenarioRunner(mock_executor, runner_settings, step_logger).run(four_actions)

        assert any("Starting execution of scenario: Login flow" in e for e in entries)
        assert any("Description: Log in and check the dashboard" in e for e in entries)
        assert any("Scenario executed successfully" in e for e in entries)

    @pytest.mark.asyncio
    async def test_escaping_exception_becomes_failure(self, mock_executor, runner_settings, four_actions):
        """An exception out of the executor is recorded as that step's failure."""
        mock_executor.execute.side_effect = [_ok(), RuntimeError("page crashed")]

        result = await ScenarioRunner(mock_executor, runner_settings).run(four_actions)

        assert result.success is False
        assert result.failed_action == 2
        assert result.action_results[1].error_type == "RuntimeError"

    @pytest.mark.asyncio
    async def test_empty_scenario_fails(self, mock_executor, runner_settings):
        """A scenario without actions is not a success."""
        result = await ScenarioRunner(mock_executor, runner_settings).run(Scenario(name="Empty"))

        assert result.success is False
        assert result.state == RunState.ABORTED
        assert result.actions_executed == 0
        assert result.error == "Scenario has no actions"
        mock_executor.execute.assert_not_awaited()


class TestInterActionDelay:
    """Test the pause between actions."""

    @pytest.mark.asyncio
    async def test_no_delay_after_last_action(self, mock_executor, runner_settings, four_actions):
        """n actions get n - 1 pauses."""
        settings = runner_settings.model_copy(update={"inter_action_delay_ms": 1500})

        with patch("asyncio.sleep", new_callable=AsyncMock) as sleep:
            await ScenarioRunner(mock_executor, settings).run(four_actions)

        assert [c.args[0] for c in sleep.await_args_list] == [1.5, 1.5, 1.5]

    @pytest.mark.asyncio
    async def test_no_delay_after_failure(self, mock_executor, runner_settings, four_actions):
        """Aborting does not wait."""
        settings = runner_settings.model_copy(update={"inter_action_delay_ms": 1500})
        mock_executor.execute.side_effect = [_failed()]

        with patch("asyncio.sleep", new_callable=AsyncMock) as sleep:
            await ScenarioRunner(mock_executor, settings).run(four_actions)

        sleep.assert_not_awaited()


class TestStates:
    """Test the run state machine."""

    def test_starts_not_started(self, mock_executor):
        """A fresh runner has not started."""
        assert ScenarioRunner(mock_executor).state == RunState.NOT_STARTED

    @pytest.mark.asyncio
    async def test_running_during_execution(self, mock_executor, runner_settings):
        """The runner reports RUNNING while an action executes."""
        seen = []
        runner = ScenarioRunner(mock_executor, runner_settings)

        async def execute(action):
            seen.append(runner.state)
            return _ok()

        mock_executor.execute.side_effect = execute
        await runner.run(Scenario(name="One", actions=(Action(ActionType.CLICK, target="Go"),)))

        assert seen == [RunState.RUNNING]
        assert runner.state == RunState.COMPLETED

    @pytest.mark.asyncio
    async def test_runner_can_be_reused(self, mock_executor, runner_settings, four_actions):
        """A finished runner accepts the next scenario."""
        runner = ScenarioRunner(mock_executor, runner_settings)
        mock_executor.execute.side_effect = [_failed()]
        await runner.run(four_actions)

        mock_executor.execute.side_effect = None
        mock_executor.execute.return_value = _ok()
        result = await runner.run(four_actions)

        assert result.success is True

    @pytest.mark.asyncio
    async def test_concurrent_run_rejected(self, mock_executor, runner_settings):
        """A second run while one is in progress raises."""
        release = asyncio.Event()
        runner = ScenarioRunner(mock_executor, runner_settings)

        async def execute(action):
            await release.wait()
            return _ok()

        mock_executor.execute.side_effect = execute
        scenario = Scenario(name="Slow", actions=(Action(ActionType.CLICK, target="Go"),))
        first = asyncio.create_task(runner.run(scenario))
        await asyncio.sleep(0)

        with pytest.raises(InitializationError):
            await runner.run(scenario)

        release.set()
        assert (await first).success is True

    @pytest.mark.asyncio
    async def test_requires_executor(self, runner_settings, four_actions):
        """Running without an executor raises InitializationError."""
        with pytest.raises(InitializationError):
            await ScenarioRunner(None, runner_settings).run(four_actions)

    @pytest.mark.asyncio
    async def test_requires_page(self, mock_executor, runner_settings, four_actions):
        """Running without a page raises InitializationError."""
        mock_executor.page = None
        with pytest.raises(InitializationError):
            await ScenarioRunner(mock_executor, runner_settings).run(four_actions)


class TestWithRealExecutor:
    """Run scenarios through an ActionExecutor over a FakePage."""

    @pytest.mark.asyncio
    async def test_login_flow(self, executor_settings, runner_settings, step_log):
        """Navigate, type, click and verify against the fake page."""
        step_logger, _ = step_log
        email = FakeElement("input", label="Email")
        password = FakeElement("input", input_type="password")
        login = FakeElement("button", "Login")
        page = FakePage([email, password, login, FakeElement("h1", "Welcome")])
        executor = ActionExecutor(page, executor_settings, step_logger)

        scenario = Scenario(
            name="Login",
            actions=(
                Action(ActionType.NAVIGATE, target="example.com"),
                Action(ActionType.TYPE, target="Email", value="admin@test.com"),
                Action(ActionType.TYPE, target="password field", value="secret"),
                Action(ActionType.CLICK, target="Login button"),
                Action(ActionType.VERIFY_TEXT, value="Welcome"),
                Action(ActionType.VERIFY_URL, value="example.com"),
            ),
        )
        result = await ScenarioRunner(executor, runner_settings, step_logger).run(scenario)

        assert result.success is True
        assert email.value == "admin@test.com"
        assert password.value == "secret"
        assert login.clicks == 1

    @pytest.mark.asyncio
    async def test_missing_element_aborts(self, executor_settings, runner_settings):
        """An unresolvable click stops the remaining steps."""
        later = FakeElement("button", "Next")
        page = FakePage([later])
        executor = ActionExecutor(page, executor_settings)

        scenario = Scenario(
            name="Broken",
            actions=(
                Action(ActionType.CLICK, target="Checkout"),
                Action(ActionType.CLICK, target="Next"),
            ),
        )
        result = await ScenarioRunner(executor, runner_settings).run(scenario)

        assert result.failed_action == 1
        assert result.action_results[0].error_type == "NotFound"
        assert later.clicks == 0
