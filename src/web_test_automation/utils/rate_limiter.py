"""
Rate Limiter - serialize calls and keep a minimum spacing between them.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Mutual-exclusion gate with a minimum interval between acquisitions.
    
    Only one caller holds the gate at a time, and a new holder is let in
    no sooner than ``min_interval_s`` after the previous one entered.
    
    Example:
        >>> limiter = RateLimiter(min_interval_s=2.0)
        >>> async with limiter.acquire():
        ...     await client.post(...)
    """
    
    def __init__(
        self,
        min_interval_s: float = 2.0,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the limiter.
        
        Args:
            min_interval_s: Minimum seconds between two acquisitions
            clock: Monotonic clock, injectable for tests
        """
        if min_interval_s < 0:
            raise ValueError("min_interval_s must not be negative")
        self._min_interval = min_interval_s
        self._clock = clock or time.monotonic
        self._lock = asyncio.Lock()
        self._last_acquired: Optional[float] = None
    
    @property
    def min_interval_s(self) -> float:
        return self._min_interval
    
    def time_until_ready(self) -> float:
        """Seconds a caller would currently have to wait once it holds the lock."""
        if self._last_acquired is None:
            return 0.0
        elapsed = self._clock() - self._last_acquired
        return max(0.0, self._min_interval - elapsed)
    
    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[None]:
        """Block until spacing is satisfied, then hold the gate for the block."""
        async with self._lock:
            delay = self.time_until_ready()
            if delay > 0:
                logger.info(f"Rate limiting: waiting {delay:.1f}s before API call...")
                await asyncio.sleep(delay)
            self._last_acquired = self._clock()
            yield
