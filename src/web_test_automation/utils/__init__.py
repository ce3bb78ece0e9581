"""
Utilities module - Common utility functions.
"""

from web_test_automation.utils.logging import setup_logging, get_logger
from web_test_automation.utils.retry import retry_async, RetryPolicy
from web_test_automation.utils.rate_limiter import RateLimiter

__all__ = [
    "setup_logging",
    "get_logger",
    "retry_async",
    "RetryPolicy",
    "RateLimiter",
]
