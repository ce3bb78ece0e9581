"""
Engine Module - Resolution and execution of test actions.

Handles:
- Target normalization and element resolution
- Per-action execution with retries and settle delays
- Scenario runs that abort on the first failure
- Parsing natural-language prompts into scenarios
"""

from web_test_automation.engine.target_normalizer import normalize, TARGET_SUFFIXES
from web_test_automation.engine.element_resolver import (
    ElementResolver,
    LookupStrategy,
    ResolutionCandidate,
    StrategyRunner,
    clickable_strategies,
    input_strategies,
    target_variants,
)
from web_test_automation.engine.action_executor import (
    ActionExecutor,
    ensure_scheme,
    looks_like_url,
)
from web_test_automation.engine.scenario_runner import (
    RunState,
    ScenarioResult,
    ScenarioRunner,
)
from web_test_automation.engine.prompt_parser import PromptParser

__all__ = [
    # Normalization
    "normalize",
    "TARGET_SUFFIXES",
    # Resolution
    "ElementResolver",
    "LookupStrategy",
    "ResolutionCandidate",
    "StrategyRunner",
    "clickable_strategies",
    "input_strategies",
    "target_variants",
    # Execution
    "ActionExecutor",
    "ensure_scheme",
    "looks_like_url",
    # Scenarios
    "RunState",
    "ScenarioResult",
    "ScenarioRunner",
    # Parsing
    "PromptParser",
]
