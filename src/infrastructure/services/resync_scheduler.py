"""Asyncio implementation of the post-command status refresh."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Set

from src.application.models.engine_context import EngineContext
from src.application.use_cases.device_use_cases import SyncDeviceStatusUseCase
from src.domain.ports.follow_up import IResyncScheduler
from src.shared import get_logger

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class AsyncioResyncScheduler(IResyncScheduler):
    """
    Runs one status sync of a device a fixed delay after a command.

    Failures of the follow-up are logged and never reach the command caller.
    Pending follow-ups are cancelled on shutdown.
    """

    def __init__(
        self,
        sync_device_status: SyncDeviceStatusUseCase,
        engine_context: EngineContext,
        delay_ms: int = 2000,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self._sync_device_status = sync_device_status
        self._context = engine_context
        self.delay_ms = delay_ms
        self._sleep = sleep or asyncio.sleep
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, device_id: str) -> None:
        if self._context.shutting_down:
            return
        task = asyncio.create_task(
            self._run(device_id), name=f"switchbot-resync-{device_id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, device_id: str) -> None:
        await self._sleep(self.delay_ms / 1000)
        if self._context.shutting_down:
            return
        try:
            await self._sync_device_status.execute(device_id)
        except Exception as e:
            logger.debug("resync.failed", device_id=device_id, error=str(e))

    async def wait_idle(self) -> None:
        """Wait for every scheduled follow-up to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
