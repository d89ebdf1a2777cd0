"""
Retry Controller - Domain Service

Bounded exponential-backoff retry for provider operations. Attempt state is
keyed by operation name plus a canonical fingerprint of the call context,
and runs for the same key never overlap.
"""

from __future__ import annotations

import asyncio
import json
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar

from src.domain.entities.errors import ProviderError
from src.shared import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


def canonical_key(operation: str, context: Optional[Mapping[str, Any]] = None) -> str:
    """Deterministic key for ``operation`` in ``context`` (sorted-key JSON)."""
    fingerprint = json.dumps(
        dict(context or {}), sort_keys=True, separators=(",", ":"), default=str
    )
    return f"{operation}:{fingerprint}"


def is_retryable(error: BaseException) -> bool:
    """Only tagged provider errors can be retried."""
    return isinstance(error, ProviderError) and error.retryable


@dataclass(slots=True)
class AttemptState:
    """Failures of one operation key since its last success."""

    attempts: int = 0
    first_failure_at: float = field(default_factory=time.monotonic)

    @property
    def seconds_since_success(self) -> float:
        return time.monotonic() - self.first_failure_at


class RetryController:
    """Runs coroutines with bounded exponential-backoff retry."""

    def __init__(
        self,
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 30000,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self._sleep = sleep or asyncio.sleep
        self._attempts: Dict[str, AttemptState] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        # Runs holding or awaiting each lock; the lock is dropped at zero
        self._waiters: Dict[str, int] = {}

    def delay_ms(self, attempt: int) -> int:
        """Backoff before retry number ``attempt`` (1-based)."""
        return min(self.base_delay_ms * 2 ** (attempt - 1), self.max_delay_ms)

    def attempt_state(
        self, operation: str, context: Optional[Mapping[str, Any]] = None
    ) -> Optional[AttemptState]:
        return self._attempts.get(canonical_key(operation, context))

    @property
    def pending_keys(self) -> list[str]:
        return sorted(self._attempts)

    async def run(
        self,
        operation: str,
        fn: Callable[[], Awaitable[T]],
        context: Optional[Mapping[str, Any]] = None,
    ) -> T:
        """
        Invoke ``fn`` until it succeeds, fails permanently or runs out of retries.

        Args:
            operation: Logical operation name, e.g. ``update_device_status``
            fn: Zero-argument coroutine factory, called once per attempt
            context: Small mapping distinguishing calls of the same operation

        Returns:
            Whatever ``fn`` returns on its successful attempt

        Raises:
            The last error raised by ``fn``.
        """
        key = canonical_key(operation, context)
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._waiters[key] = self._waiters.get(key, 0) + 1

        try:
            async with lock:
                return await self._run_locked(key, operation, fn, context)
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                self._locks.pop(key, None)

    async def _run_locked(
        self,
        key: str,
        operation: str,
        fn: Callable[[], Awaitable[T]],
        context: Optional[Mapping[str, Any]],
    ) -> T:
        while True:
            try:
                result = await fn()
            except Exception as error:
                state = self._attempts.setdefault(key, AttemptState())
                state.attempts += 1

                if state.attempts <= self.max_retries and is_retryable(error):
                    delay = self.delay_ms(state.attempts)
                    logger.warning(
                        "retry.scheduled",
                        operation=operation,
                        context=dict(context or {}),
                        attempt=state.attempts,
                        max_retries=self.max_retries,
                        delay_ms=delay,
                        error=str(error),
                    )
                    await self._sleep(delay / 1000)
                    continue

                self._attempts.pop(key, None)
                logger.error(
                    "retry.failed",
                    operation=operation,
                    context=dict(context or {}),
                    attempts=state.attempts,
                    retryable=is_retryable(error),
                    error=str(error),
                )
                raise

            state = self._attempts.pop(key, None)
            if state is not None and state.attempts > 0:
                logger.info(
                    "retry.recovered",
                    operation=operation,
                    context=dict(context or {}),
                    retries=state.attempts,
                    seconds_since_success=round(state.seconds_since_success, 3),
                )
            return result

    def reset(self) -> None:
        """Forget all attempt state; locks are released by their own runs."""
        self._attempts.clear()
