"""
Base exceptions for Web Test Automation.
"""


class WebTestAutomationError(Exception):
    """
    Base exception for all Web Test Automation errors.
    
    All custom exceptions inherit from this class, making it easy
    to catch any error from the library.
    
    Attributes:
        message: Human-readable error message
        details: Optional additional error details
    """
    
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(WebTestAutomationError):
    """
    Error in configuration.
    
    Raised when there's an issue with settings, environment variables,
    or configuration files (e.g. a missing API key).
    """
    pass


class InitializationError(WebTestAutomationError):
    """
    Error during initialization.
    
    Raised when a component is used before it was set up, such as
    running a scenario without an open page.
    """
    pass
