"""
Reporting module for web-test-automation.

Provides the execution log producer and the scenario reporter.
"""

from web_test_automation.reporting.step_logger import (
    LogLevel,
    LogSink,
    StepLogger,
)
from web_test_automation.reporting.test_reporter import (
    TestResult,
    TestReporter,
)

__all__ = [
    "LogLevel",
    "LogSink",
    "StepLogger",
    "TestResult",
    "TestReporter",
]
