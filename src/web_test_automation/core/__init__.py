"""
Core module - Session orchestration.
"""

from web_test_automation.core.session import TestSession

__all__ = [
    "TestSession",
]
