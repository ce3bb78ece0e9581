"""
LLM Providers - Concrete implementations of the LLM interface.
"""

from web_test_automation.llm.openai_provider import OpenAIProvider

__all__ = [
    "OpenAIProvider",
]
