"""Mutable engine flags shared by reference across components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from src.domain.ports.state_store import IStateWriter
from src.shared import get_logger
from src.shared.consts import CONNECTION_STATE_PATH

logger = get_logger(__name__)


@dataclass
class EngineContext:
    """
    Connection and shutdown flags of one engine instance.

    ``connected`` reflects the last discovery or status exchange and is
    mirrored to the host as ``info.connection``.
    """

    connected: bool = False
    shutting_down: bool = False
    state_writer: Optional[IStateWriter] = field(default=None, repr=False)

    async def set_connected(self, value: bool) -> None:
        if value != self.connected:
            logger.info("engine.connection_changed", connected=value)
        self.connected = value
        if self.state_writer is not None:
            await self.state_writer.write_state(CONNECTION_STATE_PATH, value, True)

    @property
    def accepting_work(self) -> bool:
        return self.connected and not self.shutting_down
