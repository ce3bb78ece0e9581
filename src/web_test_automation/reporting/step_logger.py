"""
Step Logger - Timestamped execution log lines fanned out to sinks.
"""

from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)

LogSink = Callable[[str], None]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(Enum):
    """Log level for execution log entries."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class StepLogger:
    """
    Produces execution log entries for the engine.
    
    Every entry is formatted as ``[YYYY-MM-DD HH:MM:SS] message``, written to
    the standard logger and passed to each registered sink. The engine only
    writes entries; sinks (usually ``TestReporter.add_log``) own them.
    
    Example:
        >>> step_logger = StepLogger()
        >>> step_logger.add_sink(reporter.add_log)
        >>> step_logger.info("Looking for clickable element: Login")
    """
    
    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the step logger.
        
        Args:
            clock: Returns the current time, injectable for tests
        """
        self._sinks: List[LogSink] = []
        self._clock = clock or datetime.now
    
    def add_sink(self, sink: LogSink) -> None:
        """Register a callable that receives every formatted entry."""
        if sink not in self._sinks:
            self._sinks.append(sink)
    
    def remove_sink(self, sink: LogSink) -> None:
        """Stop sending entries to ``sink``."""
        if sink in self._sinks:
            self._sinks.remove(sink)
    
    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> str:
        """
        Add a log entry.
        
        Args:
            message: Log message
            level: Log level
            
        Returns:
            The formatted entry
        """
        entry = f"[{self._clock().strftime(TIMESTAMP_FORMAT)}] {message}"
        
        log_method = getattr(logger, level.value)
        log_method(message)
        
        for sink in list(self._sinks):
            sink(entry)
        return entry
    
    def debug(self, message: str) -> str:
        return self.log(message, LogLevel.DEBUG)
    
    def info(self, message: str) -> str:
        return self.log(message, LogLevel.INFO)
    
    def warning(self, message: str) -> str:
        return self.log(message, LogLevel.WARNING)
    
    def error(self, message: str) -> str:
        """Log an error; the entry is prefixed with ``ERROR:``."""
        return self.log(f"ERROR: {message}", LogLevel.ERROR)
