"""
Rate Governor - Domain Service

Enforces a minimum spacing between the *starts* of outbound provider calls,
shared by every caller in the process.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Optional, TypeVar

from src.shared import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class RateGovernor:
    """Serializes call start times; call bodies still run concurrently."""

    def __init__(
        self,
        min_interval_ms: int = 100,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self.min_interval_ms = min_interval_ms
        self._clock = clock or time.monotonic
        self._sleep = sleep or asyncio.sleep
        self._lock = asyncio.Lock()
        self._last_call: Optional[float] = None

    @property
    def last_call(self) -> Optional[float]:
        return self._last_call

    async def throttle(
        self,
        fn: Callable[[], Awaitable[T]],
        min_interval_ms: Optional[int] = None,
    ) -> T:
        """
        Wait until ``min_interval_ms`` has passed since the previous call
        start, then invoke ``fn``.

        The timestamp is recorded before ``fn`` runs, so a slow response does
        not stretch the spacing and does not hold up the next caller.
        """
        interval = (
            self.min_interval_ms if min_interval_ms is None else min_interval_ms
        ) / 1000

        async with self._lock:
            if self._last_call is not None:
                elapsed = self._clock() - self._last_call
                if elapsed < interval:
                    wait = interval - elapsed
                    logger.debug("rate_governor.wait", wait_ms=round(wait * 1000, 1))
                    await self._sleep(wait)
            self._last_call = self._clock()

        return await fn()

    def reset(self) -> None:
        self._last_call = None
