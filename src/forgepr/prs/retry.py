"""Fixed-interval retry policy.

Attempts run strictly one after another with a constant delay between
them: no backoff growth, no jitter. When every attempt fails the error
from the last attempt is raised unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_DELAY_SECONDS = 0.5


@dataclass(frozen=True)
class RetryPolicy:
    """Retry an async operation a fixed number of times.

    Attributes:
        max_attempts: Total attempts including the first one.
        delay: Seconds to wait after a failed attempt before the next one.
        sleep: Awaitable sleep used between attempts (swappable in tests).
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float = DEFAULT_DELAY_SECONDS
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, compare=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {self.max_attempts}"
            raise ValueError(msg)
        if self.delay < 0:
            msg = f"delay must not be negative, got {self.delay}"
            raise ValueError(msg)

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        on_failure: Callable[[int, Exception], None] | None = None,
    ) -> T:
        """Run ``operation`` until it succeeds or attempts run out.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt.
            on_failure: Optional hook called with (attempt, error) after
                each failed attempt.

        Returns:
            The result of the first successful attempt.

        Raises:
            Exception: The error from the final attempt, unchanged.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                if on_failure is not None:
                    on_failure(attempt, e)
                if attempt >= self.max_attempts:
                    raise
                logger.debug(
                    "Attempt %d/%d failed: %s. Retrying in %.2f seconds",
                    attempt,
                    self.max_attempts,
                    e,
                    self.delay,
                )
                await self.sleep(self.delay)

        # max_attempts >= 1 is enforced, so the loop always returns or raises
        msg = "retry loop exited without a result"
        raise RuntimeError(msg)
