"""
Retry utilities - bounded attempts with a fixed or growing delay.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for retry behavior.
    
    A ``backoff_multiplier`` of 1.0 keeps the delay fixed, which is what
    navigation and clicks use.
    
    Attributes:
        max_attempts: Maximum number of attempts (including the first)
        delay_ms: Delay before the first retry
        backoff_multiplier: Multiplier applied to the delay after each retry
        max_delay_ms: Upper bound for the delay between retries
        retry_on: Exception types to retry on
        on_retry: Callback called with (attempt, exception) before each retry
    """
    max_attempts: int = 3
    delay_ms: int = 1000
    backoff_multiplier: float = 1.0
    max_delay_ms: int = 30000
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    on_retry: Optional[Callable[[int, BaseException], None]] = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Delay in milliseconds after the given failed attempt (1-based)."""
        delay = self.delay_ms * (self.backoff_multiplier ** (attempt - 1))
        return min(delay, self.max_delay_ms)


async def retry_async(
    func: Callable[..., Awaitable[T]],
    policy: RetryPolicy,
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Execute an async function with retry logic.
    
    Args:
        func: Async function to execute
        policy: Retry policy
        *args: Function arguments
        **kwargs: Function keyword arguments
        
    Returns:
        Function result
        
    Raises:
        The last exception if all attempts fail
    """
    last_exception: Optional[BaseException] = None
    
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await func(*args, **kwargs)
        except policy.retry_on as e:
            last_exception = e
            
            if attempt == policy.max_attempts:
                break
            
            delay_ms = policy.delay_for(attempt)
            logger.debug(
                f"Attempt {attempt}/{policy.max_attempts} failed: {e}. "
                f"Retrying in {delay_ms:.0f}ms..."
            )
            
            if policy.on_retry:
                policy.on_retry(attempt, e)
            
            await asyncio.sleep(delay_ms / 1000)
    
    raise last_exception  # type: ignore[misc]
