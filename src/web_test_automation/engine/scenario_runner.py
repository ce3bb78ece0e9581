"""
Scenario Runner - Executes a scenario's actions in order.

States: NOT_STARTED -> RUNNING -> COMPLETED | ABORTED

The first failing action aborts the scenario; the actions after it are
never executed.

Example:
    >>> runner = ScenarioRunner(executor, settings.runner, step_logger)
    >>> result = await runner.run(scenario)
    >>> print(result.success, result.actions_executed)
"""

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging

from web_test_automation.config.settings import RunnerSettings
from web_test_automation.engine.action_executor import ActionExecutor
from web_test_automation.exceptions.base import InitializationError
from web_test_automation.interfaces.action import ActionResult, Scenario
from web_test_automation.reporting.step_logger import StepLogger

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Lifecycle of a scenario run."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class ScenarioResult:
    """
    Result of running a scenario.

    Attributes:
        state: Final state (COMPLETED or ABORTED)
        success: Whether every action succeeded
        actions_executed: Number of actions attempted, including a failed one
        failed_action: 1-based index of the failing action, if any
        error: Why the scenario was aborted
        duration_ms: Total run time in milliseconds
        action_results: One result per executed action
    """
    state: RunState
    success: bool
    actions_executed: int = 0
    failed_action: Optional[int] = None
    error: Optional[str] = None
    duration_ms: float = 0.0
    action_results: List[ActionResult] = field(default_factory=list)


class ScenarioRunner:
    """
    Runs scenarios one at a time through an ActionExecutor.
    """

    def __init__(
        self,
        executor: Optional[ActionExecutor],
        settings: Optional[RunnerSettings] = None,
        step_logger: Optional[StepLogger] = None,
    ):
        self._executor = executor
        self._settings = settings or RunnerSettings()
        self._log = step_logger or StepLogger()
        self._state = RunState.NOT_STARTED

    @property
    def state(self) -> RunState:
        return self._state

    async def run(self, scenario: Scenario) -> ScenarioResult:
        """
        Run every action of ``scenario`` until one fails.

        Raises:
            InitializationError: If there is no page to run against, or a
                scenario is already running on this runner
        """
        if self._executor is None or self._executor.page is None:
            self._log.error("Browser not initialized. Start the session first.")
            raise InitializationError("Cannot run a scenario without a page")
        if self._state == RunState.RUNNING:
            raise InitializationError("A scenario is already running on this runner")

        self._state = RunState.RUNNING
        start_time = time.perf_counter()
        results: List[ActionResult] = []
        failed_action: Optional[int] = None
        error: Optional[str] = None

        self._log.info(f"Starting execution of scenario: {scenario.name}")
        self._log.info(f"Description: {scenario.description}")

        try:
            if not scenario.actions:
                error = "Scenario has no actions"
                self._log.error(error)

            for index, action in enumerate(scenario.actions, start=1):
                try:
                    result = await self._executor.execute(action)
                except Exception as e:
                    self._log.error(f"Exception during scenario execution: {e}")
                    result = ActionResult.failure_result(
                        action.type,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                results.append(result)

                if not result.success:
                    failed_action = index
                    error = result.error
                    self._log.error(
                        f"Failed to execute action {index}/{len(scenario)}: "
                        f"{action.type.value} - {action.target}"
                    )
                    break

                if index < len(scenario):
                    await self._delay(self._settings.inter_action_delay_ms)

            success = error is None
            self._state = RunState.COMPLETED if success else RunState.ABORTED
        finally:
            if self._state == RunState.RUNNING:
                self._state = RunState.ABORTED

        if success:
            self._log.info("Scenario executed successfully")
        else:
            self._log.error(f"Scenario aborted: {error}")

        return ScenarioResult(
            state=self._state,
            success=success,
            actions_executed=len(results),
            failed_action=failed_action,
            error=error,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            action_results=results,
        )

    async def _delay(self, ms: int) -> None:
        """Wait for specified milliseconds."""
        if ms > 0:
            await asyncio.sleep(ms / 1000)
