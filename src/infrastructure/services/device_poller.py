"""
Device Poller - Infrastructure Service

Periodic status sweep over all physical devices, driven by an asyncio task.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from src.application.models.engine_context import EngineContext
from src.application.use_cases.device_use_cases import (
    DiscoverDevicesUseCase,
    SyncAllDevicesUseCase,
)
from src.shared import get_logger

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class DevicePoller:
    """
    Fires a sweep every ``interval_ms``.

    A tick is skipped while the engine is shutting down or while the
    previous sweep is still running. When the engine is disconnected the
    tick runs discovery instead of a sweep so the connection can recover.
    """

    def __init__(
        self,
        sync_all_devices: SyncAllDevicesUseCase,
        discover_devices: DiscoverDevicesUseCase,
        engine_context: EngineContext,
        interval_ms: int = 60000,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self._sync_all_devices = sync_all_devices
        self._discover_devices = discover_devices
        self._context = engine_context
        self.interval_ms = interval_ms
        self._sleep = sleep or asyncio.sleep
        self._task: Optional[asyncio.Task] = None
        self._sweeping = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.info("poller.started", interval_ms=self.interval_ms)
        self._task = asyncio.create_task(self._loop(), name="switchbot-poller")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("poller.stopped")

    async def tick(self) -> bool:
        """
        Run one poll cycle.

        Returns:
            bool: True when a sweep was performed
        """
        if self._context.shutting_down:
            logger.debug("poller.skip_shutdown")
            return False
        if self._sweeping:
            logger.warning("poller.skip_overlap")
            return False

        self._sweeping = True
        try:
            if not self._context.connected:
                logger.warning("poller.reconnecting")
                try:
                    await self._discover_devices.execute()
                except Exception as e:
                    logger.warning("poller.reconnect_failed", error=str(e))
                return False

            await self._sync_all_devices.execute()
            return True
        finally:
            self._sweeping = False

    async def _loop(self) -> None:
        while True:
            await self._sleep(self.interval_ms / 1000)
            try:
                await self.tick()
            except Exception as e:
                logger.error("poller.tick_failed", error=str(e))
