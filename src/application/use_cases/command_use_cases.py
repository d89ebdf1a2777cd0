"""
Command Use Cases - Application Layer

Turns a local command intent into a provider command body, sends it and
schedules the follow-up status refresh for physical devices.
"""

from __future__ import annotations

from typing import Any, Optional

from src.application.models.engine_context import EngineContext
from src.domain.entities.device import CommandPayload, Device
from src.domain.entities.errors import (
    EngineUnavailableError,
    UnknownDeviceError,
    UnsupportedCommandError,
)
from src.domain.gateways.switchbot_gateway import ISwitchBotGateway
from src.domain.ports.follow_up import IResyncScheduler
from src.domain.repositories.device_registry import IDeviceRegistry
from src.domain.services.command_mapper import (
    INFRARED_COMMAND_STATE,
    UnmappedCommand,
    map_command,
    parse_infrared_command,
)
from src.domain.services.provider_calls import ProviderCallExecutor
from src.shared import get_logger

logger = get_logger(__name__)

COMMAND_OPERATION = "send_command"


def build_payload(device: Device, command: str, value: Any) -> CommandPayload:
    """
    Map ``command``/``value`` to the provider body for ``device``.

    Raises:
        UnsupportedCommandError: If the command has no mapping for the
            device category
    """
    if not device.is_physical:
        if command != INFRARED_COMMAND_STATE:
            raise UnsupportedCommandError(device.device_id, command)
        return parse_infrared_command(value)

    try:
        return map_command(command, value)
    except UnmappedCommand as e:
        raise UnsupportedCommandError(device.device_id, command) from e


class DispatchCommandUseCase:
    """Send one command to a registered device."""

    def __init__(
        self,
        switchbot_gateway: ISwitchBotGateway,
        device_registry: IDeviceRegistry,
        provider_calls: ProviderCallExecutor,
        engine_context: EngineContext,
        resync_scheduler: Optional[IResyncScheduler] = None,
    ) -> None:
        self._gateway = switchbot_gateway
        self._registry = device_registry
        self._calls = provider_calls
        self._context = engine_context
        self._resync = resync_scheduler

    async def execute(
        self, device_id: str, command: str, value: Any
    ) -> CommandPayload:
        """
        Dispatch a command.

        Args:
            device_id: Registered device identifier
            command: Command name; ``command`` for infrared remotes
            value: Command value (position, brightness, IR body...)

        Returns:
            The payload accepted by the provider

        Raises:
            EngineUnavailableError: If the engine is disconnected or unloading
            UnknownDeviceError: If the device is not registered
            UnsupportedCommandError: If the command cannot be mapped
            ProviderError: If the provider rejects the command
        """
        if self._context.shutting_down:
            raise EngineUnavailableError("shutting down")
        if not self._context.connected:
            raise EngineUnavailableError("not connected to SwitchBot API")

        device = self._registry.get(device_id)
        if device is None:
            raise UnknownDeviceError(device_id)

        payload = build_payload(device, command, value)

        await self._calls.call(
            COMMAND_OPERATION,
            lambda: self._gateway.send_command(device_id, payload),
            {"device_id": device_id, "command": payload.command},
        )
        logger.info(
            "command.sent",
            device_id=device_id,
            command=payload.command,
            parameter=payload.parameter,
        )

        if device.is_physical and self._resync is not None:
            self._resync.schedule(device_id)

        return payload
