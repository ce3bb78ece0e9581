"""
LLM-related exceptions.

Two families matter to callers of the prompt parser:

- transport errors (``LLMConnectionError``, ``LLMAuthenticationError``,
  ``RateLimitError``): the model could not be reached or refused the call.
- "no usable actions" errors (``InvalidResponseError``, ``ScenarioParseError``):
  the model answered but nothing executable came back.
"""

from web_test_automation.exceptions.base import WebTestAutomationError


class LLMError(WebTestAutomationError):
    """Base exception for LLM-related errors."""
    pass


class LLMConnectionError(LLMError):
    """
    Error connecting to the LLM provider.
    
    Raised when the connection to the LLM API fails or it answers
    with an unexpected HTTP status.
    """
    
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, {"status_code": status_code})
        self.status_code = status_code


class LLMAuthenticationError(LLMError):
    """
    Authentication error with LLM provider.
    
    Raised when API key is invalid or missing.
    """
    pass


class RateLimitError(LLMError):
    """
    Rate limit exceeded.
    
    Raised when the LLM provider's rate limit is exceeded.
    
    Attributes:
        retry_after: Suggested wait time in seconds before retrying
    """
    
    def __init__(self, message: str, retry_after: int | None = None):
        super().__init__(message, {"retry_after": retry_after})
        self.retry_after = retry_after


class InvalidResponseError(LLMError):
    """
    Invalid response from LLM.
    
    Raised when the LLM response is empty or cannot be parsed.
    """
    
    def __init__(self, message: str, raw_response: str | None = None):
        super().__init__(message, {"raw_response": raw_response[:500] if raw_response else None})
        self.raw_response = raw_response


class ScenarioParseError(LLMError):
    """
    The prompt produced no usable actions.
    
    Raised when the response parsed correctly but contained no action
    with a recognized type.
    """
    
    def __init__(self, message: str, prompt: str | None = None):
        super().__init__(message, {"prompt": prompt})
        self.prompt = prompt
