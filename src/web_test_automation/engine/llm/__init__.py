"""
LLM module - Prompts and response schemas for scenario parsing.
"""

from web_test_automation.engine.llm.prompts import SCENARIO_PARSE_SYSTEM
from web_test_automation.engine.llm.schemas import (
    ParsedAction,
    ParsedScenario,
    extract_json,
)

__all__ = [
    "SCENARIO_PARSE_SYSTEM",
    "ParsedAction",
    "ParsedScenario",
    "extract_json",
]
