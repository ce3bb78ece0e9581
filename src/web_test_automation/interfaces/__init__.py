"""
Interfaces module - Contracts between the engine and its collaborators.
"""

from web_test_automation.interfaces.action import (
    ActionType,
    Action,
    Scenario,
    ActionStatus,
    ActionResult,
)
from web_test_automation.interfaces.browser import (
    BrowserType,
    AriaRole,
    ILocator,
    IPage,
    IBrowser,
)
from web_test_automation.interfaces.llm import (
    MessageRole,
    Message,
    Usage,
    LLMResponse,
    ILLMProvider,
)

__all__ = [
    # Action model
    "ActionType",
    "Action",
    "Scenario",
    "ActionStatus",
    "ActionResult",
    # Browser
    "BrowserType",
    "AriaRole",
    "ILocator",
    "IPage",
    "IBrowser",
    # LLM
    "MessageRole",
    "Message",
    "Usage",
    "LLMResponse",
    "ILLMProvider",
]
