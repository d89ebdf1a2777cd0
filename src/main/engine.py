"""
Sync Engine - Main Layer

Owns the wired components of one engine instance and exposes the host
lifecycle events (ready, state change, message, unload) as coroutines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.application.dtos.config_dto import EngineConfigDTO
from src.application.models.engine_context import EngineContext
from src.application.use_cases.command_use_cases import DispatchCommandUseCase
from src.application.use_cases.connection_use_cases import CheckCredentialsUseCase
from src.application.use_cases.device_use_cases import DiscoverDevicesUseCase
from src.domain.entities.device import CommandPayload
from src.domain.entities.errors import ConfigurationError
from src.domain.ports.responder import IMessageResponder, ResponseCallback
from src.domain.ports.state_store import ICommandSource, IStateWriter
from src.domain.repositories.device_registry import IDeviceRegistry
from src.domain.services.rate_governor import RateGovernor
from src.domain.services.retry_controller import RetryController
from src.infrastructure.services.device_poller import DevicePoller
from src.infrastructure.services.resync_scheduler import AsyncioResyncScheduler
from src.shared import get_logger
from src.shared.consts import CONNECTION_STATE_PATH

logger = get_logger(__name__)

TEST_CONNECTION_COMMAND = "testConnection"


@dataclass
class HostMessage:
    """A request sent to the engine by the host or its admin UI."""

    command: str
    message: Dict[str, Any] = field(default_factory=dict)
    sender: str = ""
    callback: Optional[ResponseCallback] = None


class SyncEngine:
    """Lifecycle entry point wiring discovery, polling and commands."""

    def __init__(
        self,
        token: str,
        secret: str,
        poll_interval_ms: int,
        engine_context: EngineContext,
        state_writer: IStateWriter,
        command_source: ICommandSource,
        responder: IMessageResponder,
        device_registry: IDeviceRegistry,
        retry_controller: RetryController,
        rate_governor: RateGovernor,
        discover_devices: DiscoverDevicesUseCase,
        dispatch_command_use_case: DispatchCommandUseCase,
        check_credentials: CheckCredentialsUseCase,
        device_poller: DevicePoller,
        resync_scheduler: AsyncioResyncScheduler,
    ) -> None:
        self._token = token
        self._secret = secret
        self._poll_interval_ms = poll_interval_ms
        self.context = engine_context
        self._state_writer = state_writer
        self._command_source = command_source
        self._responder = responder
        self._registry = device_registry
        self._retry = retry_controller
        self._governor = rate_governor
        self._discover_devices = discover_devices
        self._dispatch = dispatch_command_use_case
        self._check_credentials = check_credentials
        self._poller = device_poller
        self._resync = resync_scheduler
        self.config: Optional[EngineConfigDTO] = None

    async def on_ready(self) -> bool:
        """
        Start the engine.

        Returns:
            bool: True when devices were discovered and polling started
        """
        logger.info("engine.starting")
        self.context.shutting_down = False

        await self._state_writer.ensure_object(
            CONNECTION_STATE_PATH,
            {
                "type": "state",
                "common": {
                    "name": "Device or service connected",
                    "type": "boolean",
                    "role": "indicator.connected",
                    "read": True,
                    "write": False,
                    "def": False,
                },
            },
        )
        await self.context.set_connected(False)

        try:
            self.config = EngineConfigDTO.validate_settings(
                self._token, self._secret, self._poll_interval_ms
            )
        except ConfigurationError as e:
            logger.error(
                "engine.config_invalid",
                error=e.message,
                errors=e.details.get("errors", []),
            )
            return False

        self._command_source.subscribe(self.on_state_change)

        try:
            device_count = await self._discover_devices.execute()
        except Exception as e:
            logger.error("engine.startup_failed", error=str(e))
            return False

        self._poller.start()
        logger.info(
            "engine.ready",
            devices=device_count,
            poll_interval_ms=self.config.poll_interval_ms,
        )
        return True

    async def on_state_change(self, path: str, value: Any, ack: bool) -> None:
        """Handle a state write from the host; only user intents dispatch."""
        if ack:
            return
        if self.context.shutting_down or not self.context.connected:
            logger.debug("engine.state_change_ignored", path=path)
            return

        parts = path.split(".")
        if len(parts) < 2:
            logger.warning("engine.state_path_invalid", path=path)
            return
        device_id, command = parts[-2], parts[-1]

        try:
            await self._dispatch.execute(device_id, command, value)
        except Exception as e:
            logger.error(
                "engine.command_failed",
                device_id=device_id,
                command=command,
                error=str(e),
            )

    async def dispatch_command(
        self, device_id: str, command: str, value: Any = None
    ) -> CommandPayload:
        """Dispatch a command and let every failure reach the caller."""
        return await self._dispatch.execute(device_id, command, value)

    async def on_message(self, message: HostMessage) -> None:
        if message.command != TEST_CONNECTION_COMMAND:
            logger.warning("engine.unknown_message", command=message.command)
            return

        payload = message.message or {}
        result = await self._check_credentials.execute(
            payload.get("token"), payload.get("secret")
        )
        self._responder.send_to(
            message.sender, message.command, result.to_reply(), message.callback
        )

    async def on_unload(self) -> None:
        """Stop all background work; never raises."""
        logger.info("engine.stopping")
        self.context.shutting_down = True

        try:
            self._command_source.unsubscribe(self.on_state_change)
            await self._poller.stop()
            await self._resync.cancel_all()
            self._retry.reset()
            self._governor.reset()
            await self.context.set_connected(False)
            self._registry.clear()
        except Exception as e:
            logger.error("engine.unload_failed", error=str(e))

        logger.info("engine.stopped")
