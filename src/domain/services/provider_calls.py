"""Retry around a governed provider call."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar

from src.domain.services.rate_governor import RateGovernor
from src.domain.services.retry_controller import RetryController

T = TypeVar("T")


class ProviderCallExecutor:
    """
    Runs one logical provider operation.

    Each attempt, first or retried, passes through the rate governor, so
    backoff retries are spaced like any other outbound call.
    """

    def __init__(
        self, retry_controller: RetryController, rate_governor: RateGovernor
    ) -> None:
        self.retry_controller = retry_controller
        self.rate_governor = rate_governor

    async def call(
        self,
        operation: str,
        fn: Callable[[], Awaitable[T]],
        context: Optional[Mapping[str, Any]] = None,
    ) -> T:
        return await self.retry_controller.run(
            operation, lambda: self.rate_governor.throttle(fn), context
        )
