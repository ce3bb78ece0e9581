"""
Action-related exceptions.
"""

from web_test_automation.exceptions.base import WebTestAutomationError


class ActionError(WebTestAutomationError):
    """Base exception for action-related errors."""
    pass


class ActionValidationError(ActionError):
    """
    Action parameters are invalid.
    
    Raised by ``Action.validate()`` when a required field is empty.
    """
    
    def __init__(self, message: str, action_type: str, invalid_params: dict | None = None):
        super().__init__(message, {"action_type": action_type, "invalid_params": invalid_params})
        self.action_type = action_type
        self.invalid_params = invalid_params
