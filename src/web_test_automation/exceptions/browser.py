"""
Browser-related exceptions.
"""

from web_test_automation.exceptions.base import WebTestAutomationError


class BrowserError(WebTestAutomationError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.
    
    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries
    - Invalid browser options
    - Resource constraints
    """
    pass


class BrowserConnectionError(BrowserError):
    """
    Error connecting to the browser.
    
    Raised when a page is requested from a browser that was never launched
    or has already been closed.
    """
    pass


class NavigationError(BrowserError):
    """
    Error during page navigation.
    
    Raised when navigation fails, such as:
    - Invalid URL
    - Network error
    - Navigation timeout
    """
    
    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url


class TimeoutError(BrowserError):
    """
    Operation timed out.
    
    Raised when a browser operation exceeds its timeout.
    """
    
    def __init__(self, message: str, timeout_ms: int | None = None, operation: str | None = None):
        super().__init__(message, {"timeout_ms": timeout_ms, "operation": operation})
        self.timeout_ms = timeout_ms
        self.operation = operation
