"""Rate-limited execution of remote calls.

A remote call that is rate limited is retried exactly once, after the wait
the server advised. There is no backoff and no state shared between calls.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from nmcp_obs.logging import get_logger
from nmcp_obs.metrics import rate_limit_retries_total
from nmcp_tools.errors import RateLimitError

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_AFTER_SECONDS = 5.0


class RateLimitedExecutor:
    """Runs a unit of remote work with a single retry on rate limiting."""

    def __init__(
        self,
        default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize executor.

        Args:
            default_retry_after: Wait (seconds) when the signal carries none
            sleep: Coroutine used to wait; swapped out in tests
        """
        self.default_retry_after = default_retry_after
        self._sleep = sleep

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Execute `operation`, retrying once if it is rate limited.

        Args:
            operation: Zero-argument coroutine function issuing the remote call

        Returns:
            Result of the first successful attempt

        Raises:
            RemoteError: Any non-rate-limit failure (no retry), or the failure
                of the second attempt, unmodified
        """
        try:
            return await operation()
        except RateLimitError as e:
            retry_after = e.retry_after
            if retry_after is None:
                retry_after = self.default_retry_after

            logger.warning("rate_limited_retrying", retry_after=retry_after, error=str(e))
            rate_limit_retries_total.inc()
            await self._sleep(retry_after)

        return await operation()
