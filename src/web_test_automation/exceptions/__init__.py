"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Web Test Automation,
providing clear error types for different failure scenarios.
"""

from web_test_automation.exceptions.base import (
    WebTestAutomationError,
    ConfigurationError,
    InitializationError,
)
from web_test_automation.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    BrowserConnectionError,
    NavigationError,
    TimeoutError as BrowserTimeoutError,
)
from web_test_automation.exceptions.llm import (
    LLMError,
    LLMConnectionError,
    LLMAuthenticationError,
    RateLimitError,
    InvalidResponseError,
    ScenarioParseError,
)
from web_test_automation.exceptions.action import (
    ActionError,
    ActionValidationError,
)

__all__ = [
    # Base exceptions
    "WebTestAutomationError",
    "ConfigurationError",
    "InitializationError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "BrowserConnectionError",
    "NavigationError",
    "BrowserTimeoutError",
    # LLM exceptions
    "LLMError",
    "LLMConnectionError",
    "LLMAuthenticationError",
    "RateLimitError",
    "InvalidResponseError",
    "ScenarioParseError",
    # Action exceptions
    "ActionError",
    "ActionValidationError",
]
