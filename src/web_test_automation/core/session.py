"""
Session - Wires browser, parser, executor and reporter together.

A TestSession owns one browser and one page for its lifetime. Every
prompt it runs becomes one scenario in the reporter.

Example:
    >>> from web_test_automation import TestSession
    >>> from web_test_automation.config import load_config
    >>>
    >>> settings = load_config()
    >>> async with TestSession(settings=settings) as session:
    ...     scenario = await session.parse("Go to example.com, verify Example Domain")
    ...     result = await session.run_scenario(scenario)
    ...     print(f"Success: {result.success}")
"""

from typing import Any, Optional, TYPE_CHECKING
import logging

from web_test_automation.engine.action_executor import ActionExecutor
from web_test_automation.engine.prompt_parser import PromptParser
from web_test_automation.engine.scenario_runner import ScenarioResult, ScenarioRunner
from web_test_automation.exceptions.base import ConfigurationError, InitializationError
from web_test_automation.interfaces.browser import BrowserType
from web_test_automation.reporting.step_logger import StepLogger
from web_test_automation.reporting.test_reporter import TestReporter

if TYPE_CHECKING:
    from web_test_automation.config.settings import Settings
    from web_test_automation.interfaces.action import Scenario
    from web_test_automation.interfaces.browser import IBrowser, IPage
    from web_test_automation.interfaces.llm import ILLMProvider

logger = logging.getLogger(__name__)


class TestSession:
    """
    Runs parsed scenarios against a live browser and records the results.

    The browser and the model provider are created from settings unless
    supplied, which is how tests inject fakes.
    """
    __test__ = False

    def __init__(
        self,
        settings: Optional["Settings"] = None,
        browser: Optional["IBrowser"] = None,
        llm_provider: Optional["ILLMProvider"] = None,
        reporter: Optional[TestReporter] = None,
        step_logger: Optional[StepLogger] = None,
    ):
        """
        Initialize the session.

        Args:
            settings: Configuration settings (loads defaults if None)
            browser: Browser instance (Playwright if None)
            llm_provider: Model provider (OpenAI-compatible if None)
            reporter: Collects per-scenario results
            step_logger: Produces execution log lines
        """
        self._settings = settings
        self._browser = browser
        self._llm_provider = llm_provider
        self._reporter = reporter or TestReporter()
        self._step_logger = step_logger or StepLogger()
        self._page: Optional["IPage"] = None
        self._parser: Optional[PromptParser] = None
        self._runner: Optional[ScenarioRunner] = None
        self._is_initialized = False

        self._step_logger.add_sink(self._reporter.add_log)

    @property
    def settings(self) -> "Settings":
        """Get the current settings, loading defaults if needed."""
        if self._settings is None:
            from web_test_automation.config import load_config
            self._settings = load_config()
        return self._settings

    @property
    def reporter(self) -> TestReporter:
        return self._reporter

    @property
    def step_logger(self) -> StepLogger:
        return self._step_logger

    @property
    def page(self) -> Optional["IPage"]:
        """Get the current page, if any."""
        return self._page

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def parser(self) -> PromptParser:
        """Prompt parser, created on first use."""
        if self._parser is None:
            self._parser = PromptParser(self._get_llm_provider(), self.settings.llm)
        return self._parser

    def _get_llm_provider(self) -> "ILLMProvider":
        if self._llm_provider is None:
            api_key = self.settings.llm.resolve_api_key()
            if not api_key:
                raise ConfigurationError(
                    "OPENAI_API_KEY environment variable is required",
                    {"setting": "llm.api_key"},
                )
            from web_test_automation.llm.openai_provider import OpenAIProvider
            self._llm_provider = OpenAIProvider(
                base_url=self.settings.llm.base_url,
                model=self.settings.llm.model,
                api_key=api_key,
                timeout=float(self.settings.llm.timeout),
            )
        return self._llm_provider

    async def initialize(self) -> None:
        """
        Launch the browser and set up the executor and runner.

        Raises:
            BrowserLaunchError: If the browser cannot be started
        """
        if self._is_initialized:
            return

        logger.info("Initializing test session...")
        browser_settings = self.settings.browser

        if self._browser is None:
            from web_test_automation.browsers.playwright_browser import PlaywrightBrowser
            self._browser = PlaywrightBrowser()

        launch_options: dict[str, Any] = {"args": list(browser_settings.launch_args)}
        if browser_settings.channel:
            launch_options["channel"] = browser_settings.channel
        if browser_settings.slow_mo:
            launch_options["slow_mo"] = browser_settings.slow_mo

        await self._browser.launch(
            headless=browser_settings.headless,
            browser_type=BrowserType(browser_settings.browser_type),
            **launch_options,
        )

        self._page = await self._browser.new_page(
            viewport={
                "width": browser_settings.viewport_width,
                "height": browser_settings.viewport_height,
            },
        )

        executor = ActionExecutor(self._page, self.settings.executor, self._step_logger)
        self._runner = ScenarioRunner(executor, self.settings.runner, self._step_logger)

        self._is_initialized = True
        self._step_logger.info("Playwright initialized successfully")

    async def close(self) -> None:
        """Close the browser and the model client."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._llm_provider:
            await self._llm_provider.close()

        self._runner = None
        self._is_initialized = False
        logger.info("Test session closed")

    async def __aenter__(self) -> "TestSession":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def parse(self, prompt: str, base_url: str = "") -> "Scenario":
        """Parse a natural-language prompt into a scenario."""
        return await self.parser.parse(prompt, base_url)

    async def run_scenario(self, scenario: "Scenario") -> ScenarioResult:
        """
        Run a scenario and record it in the reporter.

        Raises:
            InitializationError: If the session has not been initialized
        """
        if self._runner is None:
            raise InitializationError(
                "Session not initialized. Use 'async with session:' or call 'await session.initialize()'"
            )

        self._reporter.start_scenario(scenario)
        try:
            result = await self._runner.run(scenario)
        except Exception as e:
            self._reporter.end_scenario(False, str(e))
            raise

        self._reporter.end_scenario(result.success, result.error)
        return result

    async def run_prompt(self, prompt: str, base_url: str = "") -> ScenarioResult:
        """Parse ``prompt`` and run the resulting scenario."""
        scenario = await self.parse(prompt, base_url)
        return await self.run_scenario(scenario)
