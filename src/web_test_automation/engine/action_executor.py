"""
Action Executor - Runs one Action against the page.

Each action type has a handler that resolves its element, performs the
interaction and judges the outcome. Failures come back as an ActionResult;
the executor never raises for a failed step.

Failure categories:
- ValidationError: the action is missing a required field (no page access)
- NotFound: no lookup strategy matched the target (never retried)
- navigation and click errors: retried up to the configured attempts
- anything else: caught at the action boundary and reported

Example:
    >>> executor = ActionExecutor(page, settings.executor, step_logger)
    >>> result = await executor.execute(Action(ActionType.CLICK, target="Login"))
    >>> result.success
    True
"""

import asyncio
import re
import time
from typing import Awaitable, Callable, Dict, Optional
import logging

from web_test_automation.config.settings import ExecutorSettings
from web_test_automation.engine.element_resolver import ElementResolver
from web_test_automation.exceptions.browser import TimeoutError as BrowserTimeoutError
from web_test_automation.interfaces.action import Action, ActionResult, ActionType
from web_test_automation.interfaces.browser import IPage
from web_test_automation.reporting.step_logger import StepLogger
from web_test_automation.utils.retry import RetryPolicy, retry_async

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")

EMPTY_VERIFY_TEXT_MESSAGE = "VerifyText action has empty value. Expected text to verify is missing."


def looks_like_url(target: str) -> bool:
    """A target is URL-like when it has a scheme or contains '.' or '/'."""
    target = target.strip()
    return bool(_SCHEME_RE.match(target)) or "." in target or "/" in target


def ensure_scheme(target: str) -> str:
    """Prefix ``https://`` when the target has no scheme."""
    target = target.strip()
    if _SCHEME_RE.match(target):
        return target
    return f"https://{target}"


def _is_secret(action: Action) -> bool:
    return action.type == ActionType.TYPE and "password" in action.target.lower()


class ActionExecutor:
    """
    Executes actions on a single page.

    Example:
        >>> executor = ActionExecutor(page)
        >>> await executor.execute(Action(ActionType.NAVIGATE, target="example.com"))
    """

    def __init__(
        self,
        page: IPage,
        settings: Optional[ExecutorSettings] = None,
        step_logger: Optional[StepLogger] = None,
    ):
        """
        Initialize the executor.

        Args:
            page: Page every action runs against
            settings: Timeouts, retries and settle delays
            step_logger: Destination for execution log lines
        """
        self._page = page
        self._settings = settings or ExecutorSettings()
        self._log = step_logger or StepLogger()
        self._resolver = ElementResolver(
            page,
            exact_text=self._settings.exact_text_match,
            step_logger=self._log,
        )

        self._handlers: Dict[ActionType, Callable[[Action], Awaitable[ActionResult]]] = {
            ActionType.NAVIGATE: self._navigate,
            ActionType.CLICK: self._click,
            ActionType.TYPE: self._type,
            ActionType.WAIT_FOR_ELEMENT: self._wait_for_element,
            ActionType.VERIFY_TEXT: self._verify_text,
            ActionType.VERIFY_URL: self._verify_url,
        }

    @property
    def page(self) -> IPage:
        return self._page

    @property
    def resolver(self) -> ElementResolver:
        return self._resolver

    async def execute(self, action: Action) -> ActionResult:
        """
        Execute one action.

        Args:
            action: The step to run

        Returns:
            ActionResult describing the outcome
        """
        start_time = time.perf_counter()
        self._log.info(f"Executing {self._describe(action)}")

        result = self._check_contract(action)
        if result is None:
            try:
                result = await self._handlers[action.type](action)
            except Exception as e:
                self._log.error(f"Exception executing {action.type.value}: {e}")
                result = ActionResult.failure_result(
                    action.type,
                    error=str(e) or type(e).__name__,
                    error_type=type(e).__name__,
                )

        result.duration_ms = (time.perf_counter() - start_time) * 1000
        if result.success:
            logger.debug(f"{action.type.value} succeeded in {result.duration_ms:.0f}ms")
        else:
            logger.debug(f"{action.type.value} failed in {result.duration_ms:.0f}ms: {result.error}")
        return result

    def _describe(self, action: Action) -> str:
        if _is_secret(action):
            return f"{action.type.value}: {action.target} = {'*' * len(action.value)}"
        return action.describe()

    def _check_contract(self, action: Action) -> Optional[ActionResult]:
        """Return a failure when the action is missing a required field."""
        if action.type == ActionType.VERIFY_TEXT and not action.value.strip():
            self._log.error(EMPTY_VERIFY_TEXT_MESSAGE)
            self._log.info(f"Action details - Target: '{action.target}', Value: '{action.value}'")
            return ActionResult.failure_result(
                action.type,
                error=EMPTY_VERIFY_TEXT_MESSAGE,
                error_type="ValidationError",
            )

        problems = action.violations()
        if problems:
            message = "; ".join(problems.values())
            self._log.error(f"Invalid {action.type.value} action: {message}")
            return ActionResult.failure_result(
                action.type,
                error=message,
                error_type="ValidationError",
                invalid_params=problems,
            )
        return None

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _navigate(self, action: Action) -> ActionResult:
        target = action.target.strip()
        if not looks_like_url(target):
            message = (
                f"'{target}' doesn't look like a URL. "
                f"Did you mean to click on a '{target}' link instead?"
            )
            self._log.error(message)
            return ActionResult.failure_result(action.type, error=message, error_type="ValidationError")

        url = ensure_scheme(target)
        max_attempts = self._settings.navigation_attempts
        attempts = 0

        async def goto() -> None:
            nonlocal attempts
            attempts += 1
            self._log.info(f"Navigation attempt {attempts}/{max_attempts} to: {url}")
            await self._page.goto(
                url,
                wait_until="networkidle",
                timeout_ms=self._settings.navigation_timeout_ms,
            )

        policy = RetryPolicy(
            max_attempts=max_attempts,
            delay_ms=self._settings.navigation_retry_delay_ms,
            on_retry=lambda attempt, e: self._log.warning(
                f"Navigation attempt {attempt} failed: {e}. Retrying..."
            ),
        )

        try:
            await retry_async(goto, policy)
        except Exception as e:
            self._log.error(f"Failed to navigate to {url}: {e}")
            return ActionResult.failure_result(
                action.type,
                error=f"Failed to navigate to {url} after {attempts} attempts: {e}",
                error_type=type(e).__name__,
                attempts=attempts,
                url=url,
            )

        await self._delay(self._settings.navigation_settle_ms)
        self._log.info(f"Successfully navigated to: {url}")
        return ActionResult.success_result(action.type, attempts=attempts, url=url)

    async def _click(self, action: Action) -> ActionResult:
        self._log.info(f"Looking for clickable element: {action.target}")

        candidate = await self._resolver.resolve_clickable(action.target)
        if candidate is None:
            self._log.error(f"Could not find any clickable element with text: {action.target}")
            await self._log_available_elements()
            return ActionResult.failure_result(
                action.type,
                error=f"Could not find any clickable element with text: {action.target}",
                error_type="NotFound",
            )

        max_attempts = self._settings.click_attempts
        attempts = 0

        async def click() -> None:
            nonlocal attempts
            attempts += 1
            await candidate.element.click(timeout_ms=self._settings.click_timeout_ms)

        policy = RetryPolicy(
            max_attempts=max_attempts,
            delay_ms=self._settings.click_retry_delay_ms,
            on_retry=lambda attempt, e: self._log.warning(
                f"Click attempt {attempt} failed: {e}. Retrying..."
            ),
        )

        try:
            await retry_async(click, policy)
        except Exception as e:
            self._log.error(f"Failed to click element {action.target}: {e}")
            return ActionResult.failure_result(
                action.type,
                error=f"Failed to click element {action.target} after {attempts} attempts: {e}",
                error_type=type(e).__name__,
                attempts=attempts,
                strategy=candidate.strategy,
            )

        self._log.info(f"Successfully clicked: {action.target}")
        await self._settle_after_click(action.target)
        return ActionResult.success_result(
            action.type,
            attempts=attempts,
            strategy=candidate.strategy,
            matched_target=candidate.target,
        )

    async def _type(self, action: Action) -> ActionResult:
        candidate = await self._resolver.resolve_input(action.target)
        if candidate is None:
            self._log.error(f"Could not find input field: {action.target}")
            return ActionResult.failure_result(
                action.type,
                error=f"Could not find input field: {action.target}",
                error_type="NotFound",
            )

        await candidate.element.clear()
        await candidate.element.fill(action.value)

        shown = action.value
        if _is_secret(action) or candidate.strategy == "password_type":
            shown = "*" * len(action.value)
        self._log.info(f"Typed '{shown}' into: {action.target}")
        return ActionResult.success_result(action.type, strategy=candidate.strategy)

    async def _wait_for_element(self, action: Action) -> ActionResult:
        timeout_ms = action.timeout_seconds * 1000
        locator = self._page.get_by_text(action.target, exact=self._settings.exact_text_match)
        try:
            await locator.first.wait_for("visible", timeout_ms=timeout_ms)
        except BrowserTimeoutError:
            self._log.error(f"Timeout waiting for element: {action.target}")
            return ActionResult.failure_result(
                action.type,
                error=f"Timeout waiting for element: {action.target} ({action.timeout_seconds}s)",
                error_type="Timeout",
            )

        self._log.info(f"Successfully waited for element: {action.target}")
        return ActionResult.success_result(action.type)

    async def _verify_text(self, action: Action) -> ActionResult:
        text = action.value.strip()
        self._log.info(f"Verifying text is visible: '{text}'")

        if await self._resolver.resolve_visible_text(text):
            return ActionResult.success_result(action.type)
        return ActionResult.failure_result(
            action.type,
            error=f"Text '{text}' is not visible on the page",
            error_type="VerificationFailed",
        )

    async def _verify_url(self, action: Action) -> ActionResult:
        current_url = self._page.url
        matches = action.value in current_url
        self._log.info(
            f"Verify URL contains '{action.value}': "
            f"{'Match' if matches else 'No match'} (Current: {current_url})"
        )
        if matches:
            return ActionResult.success_result(action.type, url=current_url)
        return ActionResult.failure_result(
            action.type,
            error=f"URL '{current_url}' does not contain '{action.value}'",
            error_type="VerificationFailed",
            url=current_url,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _settle_after_click(self, target: str) -> None:
        """Give the page time to react; navigation-like clicks get longer."""
        await self._delay(self._settings.click_settle_ms)

        lowered = target.lower()
        if not any(keyword.lower() in lowered for keyword in self._settings.navigation_keywords):
            return

        self._log.info("Navigation click detected - waiting for page/menu to stabilize")
        await self._delay(self._settings.navigation_click_settle_ms)
        try:
            await self._page.wait_for_load_state(
                "networkidle",
                timeout_ms=self._settings.post_click_idle_timeout_ms,
            )
        except BrowserTimeoutError:
            self._log.info("Network didn't idle, continuing anyway")

    async def _log_available_elements(self) -> None:
        try:
            available = await self._resolver.list_clickable(self._settings.diagnostics_limit)
        except Exception as e:
            logger.warning(f"Could not list clickable elements: {e}")
            return

        self._log.info("Available clickable elements on page:")
        for text in available["buttons"]:
            self._log.info(f"  Button: '{text}'")
        for text in available["links"]:
            self._log.info(f"  Link: '{text}'")

    async def _delay(self, ms: int) -> None:
        """Wait for specified milliseconds."""
        if ms > 0:
            await asyncio.sleep(ms / 1000)
