"""
Prompt Parser - Turn a natural-language test instruction into a Scenario.

One model round-trip per new prompt. Results are cached per
``prompt|base_url`` and calls are spaced out by a RateLimiter.

Example:
    >>> parser = PromptParser(provider, settings.llm)
    >>> scenario = await parser.parse("Go to example.com and click More information")
    >>> [a.type.value for a in scenario.actions]
    ['Navigate', 'Click']
"""

from collections import OrderedDict
from typing import Optional
import logging

from pydantic import ValidationError

from web_test_automation.config.settings import LLMSettings
from web_test_automation.engine.llm.prompts import SCENARIO_PARSE_SYSTEM
from web_test_automation.engine.llm.schemas import ParsedScenario, extract_json
from web_test_automation.exceptions.llm import InvalidResponseError, ScenarioParseError
from web_test_automation.interfaces.action import Scenario
from web_test_automation.interfaces.llm import ILLMProvider, Message
from web_test_automation.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

SCENARIO_NAME = "AI Generated Test Scenario"


class PromptParser:
    """
    Parses test instructions with an OpenAI-compatible model.

    Transport failures from the provider (LLMConnectionError,
    LLMAuthenticationError, RateLimitError) propagate unchanged.
    """

    def __init__(
        self,
        provider: ILLMProvider,
        settings: Optional[LLMSettings] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """
        Initialize the parser.

        Args:
            provider: Chat-completion backend
            settings: Model, sampling and cache settings
            rate_limiter: Shared limiter; one is created from settings if omitted
        """
        self._provider = provider
        self._settings = settings or LLMSettings()
        self._rate_limiter = rate_limiter or RateLimiter(self._settings.min_call_interval_s)
        self._cache: "OrderedDict[str, Scenario]" = OrderedDict()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    @staticmethod
    def cache_key(prompt: str, base_url: str = "") -> str:
        return f"{prompt}|{base_url}"

    async def parse(self, prompt: str, base_url: str = "") -> Scenario:
        """
        Parse ``prompt`` into a Scenario.

        Args:
            prompt: Natural-language test instruction
            base_url: Optional base URL recorded on the scenario

        Returns:
            Scenario with at least one action

        Raises:
            InvalidResponseError: If the reply is empty or not valid JSON
            ScenarioParseError: If the reply holds no usable action
        """
        key = self.cache_key(prompt, base_url)
        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Using cached AI parsing result")
            return cached

        async with self._rate_limiter.acquire():
            response = await self._provider.complete(
                [Message.system(SCENARIO_PARSE_SYSTEM), Message.user(prompt)],
                model=self._settings.model,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
            )

        scenario = self._build_scenario(response.content, prompt, base_url)
        logger.info(f"Successfully parsed with AI: {len(scenario)} actions")
        self._remember(key, scenario)
        return scenario

    def _build_scenario(self, content: str, prompt: str, base_url: str) -> Scenario:
        text = (content or "").strip()
        if not text:
            raise InvalidResponseError("Empty response from AI", raw_response=content)

        try:
            parsed = ParsedScenario.from_json(extract_json(text))
        except (ValueError, ValidationError) as e:
            raise InvalidResponseError(
                f"Invalid JSON structure from AI: {e}",
                raw_response=text,
            ) from e

        actions = parsed.to_actions()
        dropped = len(parsed.actions) - len(actions)
        if dropped:
            logger.warning(f"Dropped {dropped} action(s) with an unknown type")

        if not actions:
            raise ScenarioParseError(
                "Failed to parse prompt with AI: no usable actions. "
                "Please check your prompt and try again.",
                prompt=prompt,
            )

        return Scenario(
            name=SCENARIO_NAME,
            description=prompt,
            base_url=base_url,
            actions=tuple(actions),
        )

    def _remember(self, key: str, scenario: Scenario) -> None:
        limit = self._settings.cache_size
        if limit <= 0:
            return
        self._cache[key] = scenario
        while len(self._cache) > limit:
            oldest, _ = self._cache.popitem(last=False)
            logger.debug(f"Evicted cached scenario: {oldest[:60]}")
