"""
Web Test Automation - Natural-language web tests executed with Playwright.

A prompt such as "go to example.com, click More information, verify IANA"
is parsed into a scenario of typed actions, each action is resolved against
the live page and executed, and the outcome is recorded in a JSON report.

Example:
    >>> from web_test_automation import TestSession
    >>> async with TestSession() as session:
    ...     result = await session.run_prompt("Go to example.com, verify Example Domain")
"""

__version__ = "0.1.0"

# Public API exports
from web_test_automation.core.session import TestSession
from web_test_automation.config.settings import Settings
from web_test_automation.interfaces.action import Action, ActionType, Scenario

__all__ = [
    "TestSession",
    "Settings",
    "Action",
    "ActionType",
    "Scenario",
    "__version__",
]
