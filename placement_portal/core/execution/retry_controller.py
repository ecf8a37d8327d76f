"""Retry controller for the portal client.

Bounded exponential backoff for transient failures.
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

from placement_portal.core.errors import ClassifiedError
from placement_portal.core.execution.models import RetryState
from placement_portal.core.logging import logger
from placement_portal.core.retry_config import RetryConfig

Sleeper = Callable[[float], Awaitable[None]]


class RetryController:
    """Decides whether a failed call is re-attempted and waits out the backoff.

    The wait is a plain ``await``, so cancelling the task running the call
    cancels the pending retry with it.
    """

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        sleep: Optional[Sleeper] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize RetryController.

        Args:
            config: RetryConfig with retry behavior settings
            sleep: Coroutine used to wait between attempts (defaults to asyncio.sleep)
            rng: Random source for jitter
        """
        self.config = config or RetryConfig()
        self._sleep = sleep or asyncio.sleep
        self._rng = rng or random.Random()

    def should_retry(self, error: ClassifiedError, state: RetryState) -> bool:
        if error.kind not in self.config.retry_on:
            return False
        return state.attempt < self.config.max_retries

    def compute_delay(self, retry_number: int) -> float:
        """Delay in seconds before retry ``retry_number`` (1-based).

        Uses exponential backoff: delay = initial_delay * (backoff_factor ^ (n - 1)),
        capped at max_delay, then jittered if configured.
        """
        delay = min(
            self.config.initial_delay * (self.config.backoff_factor ** (retry_number - 1)),
            self.config.max_delay,
        )
        if self.config.jitter:
            spread = delay * self.config.jitter
            delay = max(0.0, delay + self._rng.uniform(-spread, spread))
        return delay

    async def backoff(self, error: ClassifiedError, state: RetryState, label: str = "") -> float:
        """Wait before the next attempt and record it in the retry state.

        Returns:
            The delay waited, in seconds
        """
        delay = self.compute_delay(state.attempt + 1)
        logger.info(
            "request_retry_scheduled",
            request=label,
            kind=error.kind.value,
            status_code=error.status_code,
            retry=state.attempt + 1,
            max_retries=self.config.max_retries,
            delay_ms=int(delay * 1000),
        )
        await self._sleep(delay)
        state.record(delay)
        return delay
