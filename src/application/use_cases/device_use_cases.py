"""
Device Use Cases - Application Layer

This module defines the use cases that keep the device registry in step with
the SwitchBot cloud: discovery of the device list, status synchronization of
a single device and the periodic sweep over every physical device.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from src.application.dtos.device_dto import DeviceDTO, DevicesResponseDTO
from src.application.models.engine_context import EngineContext
from src.domain.entities.device import Device, DeviceCategory
from src.domain.entities.device_types import INFRARED_DESCRIPTOR, describe
from src.domain.entities.errors import ProviderError, UnknownDeviceError
from src.domain.gateways.switchbot_gateway import ISwitchBotGateway
from src.domain.ports.state_store import IStateWriter
from src.domain.repositories.device_registry import IDeviceRegistry
from src.domain.services.provider_calls import ProviderCallExecutor
from src.shared import get_logger

logger = get_logger(__name__)

DISCOVERY_OPERATION = "device_discovery"
STATUS_OPERATION = "update_device_status"


def build_device(entry: Mapping[str, Any], category: DeviceCategory) -> Device:
    """Create a registry record from one ``GET /devices`` list entry."""
    device_id = str(entry.get("deviceId", ""))
    device_type = str(entry.get("deviceType") or entry.get("remoteType") or "")
    if category == DeviceCategory.INFRARED:
        descriptor = INFRARED_DESCRIPTOR
    else:
        descriptor = describe(device_type)

    return Device(
        device_id=device_id,
        name=str(entry.get("deviceName") or device_id),
        category=category,
        device_type=device_type,
        descriptor=descriptor,
        hub_device_id=str(entry.get("hubDeviceId") or ""),
        cloud_service_enabled=bool(entry.get("enableCloudService", False)),
        native=dict(entry),
    )


class DiscoverDevicesUseCase:
    """Fetch the provider device list and (re)build the registry from it."""

    def __init__(
        self,
        switchbot_gateway: ISwitchBotGateway,
        device_registry: IDeviceRegistry,
        provider_calls: ProviderCallExecutor,
        engine_context: EngineContext,
        state_writer: IStateWriter,
    ) -> None:
        self._gateway = switchbot_gateway
        self._registry = device_registry
        self._calls = provider_calls
        self._context = engine_context
        self._state_writer = state_writer

    async def execute(self) -> int:
        """
        Run one discovery pass.

        Returns:
            int: Number of devices listed by the provider

        Raises:
            ProviderError: If the device list cannot be fetched; the engine
                is marked disconnected first.
        """
        logger.info("discovery.started")

        try:
            listing = await self._calls.call(
                DISCOVERY_OPERATION, self._gateway.get_devices
            )
        except Exception as e:
            await self._context.set_connected(False)
            logger.error(
                "discovery.failed",
                error=str(e),
                kind=getattr(getattr(e, "kind", None), "value", None),
            )
            raise

        await self._context.set_connected(True)

        for entry in listing.physical:
            await self._register(entry, DeviceCategory.PHYSICAL)
        for entry in listing.infrared:
            await self._register(entry, DeviceCategory.INFRARED)

        logger.info(
            "discovery.completed",
            physical=len(listing.physical),
            infrared=len(listing.infrared),
            registered=len(self._registry),
        )
        return listing.total

    async def _register(
        self, entry: Mapping[str, Any], category: DeviceCategory
    ) -> Optional[Device]:
        device = build_device(entry, category)
        if not device.device_id:
            logger.warning("discovery.entry_without_id", entry=dict(entry))
            return None

        if not device.is_supported_type:
            logger.warning(
                "discovery.unknown_type",
                device_id=device.device_id,
                device_type=device.device_type,
            )

        device = self._registry.upsert(device)
        await self._ensure_objects(device)
        return device

    async def _ensure_objects(self, device: Device) -> None:
        writer = self._state_writer
        device_id = device.device_id

        await writer.ensure_object(
            device_id,
            {
                "type": "channel",
                "common": {"name": device.name, "type": device.device_type},
                "native": dict(device.native),
            },
        )
        await writer.ensure_object(
            f"{device_id}.info",
            {"type": "channel", "common": {"name": "Device Information"}},
        )

        info_state = "deviceType" if device.is_physical else "remoteType"
        await writer.ensure_object(
            f"{device_id}.info.{info_state}",
            {
                "type": "state",
                "common": {
                    "name": "Device Type" if device.is_physical else "Remote Type",
                    "type": "string",
                    "role": "info.name",
                    "read": True,
                    "write": False,
                },
            },
        )
        await writer.write_state(f"{device_id}.info.{info_state}", device.device_type)

        for status_field in device.descriptor.status_fields:
            await writer.ensure_object(
                f"{device_id}.{status_field.name}",
                {
                    "type": "state",
                    "common": {
                        "name": status_field.name,
                        "type": status_field.type.value,
                        "role": status_field.role,
                        "read": True,
                        "write": False,
                        "unit": status_field.unit,
                    },
                },
            )

        for command in device.commands:
            await writer.ensure_object(
                f"{device_id}.{command}",
                {
                    "type": "state",
                    "common": {
                        "name": command,
                        "type": "string" if not device.is_physical else "mixed",
                        "role": "text" if not device.is_physical else "button",
                        "read": False,
                        "write": True,
                        "desc": (
                            f"Execute {command} command"
                            if device.is_physical
                            else "Send IR command (JSON format)"
                        ),
                    },
                },
            )


class SyncDeviceStatusUseCase:
    """Pull the authoritative status of one device into the registry."""

    def __init__(
        self,
        switchbot_gateway: ISwitchBotGateway,
        device_registry: IDeviceRegistry,
        provider_calls: ProviderCallExecutor,
        engine_context: EngineContext,
        state_writer: IStateWriter,
    ) -> None:
        self._gateway = switchbot_gateway
        self._registry = device_registry
        self._calls = provider_calls
        self._context = engine_context
        self._state_writer = state_writer

    async def execute(self, device_id: str) -> Optional[Device]:
        """
        Fetch and store the status of ``device_id``.

        Returns:
            The updated record, the unchanged record for infrared remotes,
            or None when the result arrived after shutdown began.

        Raises:
            UnknownDeviceError: If the device is not registered
            ProviderError: If the status cannot be fetched
        """
        device = self._registry.get(device_id)
        if device is None:
            raise UnknownDeviceError(device_id)
        if not device.is_physical:
            logger.debug("sync.skip_infrared", device_id=device_id)
            return device

        status = await self._calls.call(
            STATUS_OPERATION,
            lambda: self._gateway.get_device_status(device_id),
            {"device_id": device_id},
        )

        if self._context.shutting_down:
            logger.debug("sync.result_discarded", device_id=device_id)
            return None

        updated = self._registry.replace_status(device_id, status)
        for key, value in status.items():
            await self._state_writer.write_state(f"{device_id}.{key}", value, True)

        logger.debug("sync.device_updated", device_id=device_id, fields=len(status))
        return updated


@dataclass
class SyncReport:
    """Outcome of one sweep."""

    synced: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    critical: bool = False

    @property
    def attempted(self) -> int:
        return len(self.synced) + len(self.failed)


class SyncAllDevicesUseCase:
    """Sweep every physical device; one failure never aborts the others."""

    def __init__(
        self,
        device_registry: IDeviceRegistry,
        sync_device_status: SyncDeviceStatusUseCase,
        engine_context: EngineContext,
    ) -> None:
        self._registry = device_registry
        self._sync_device_status = sync_device_status
        self._context = engine_context

    async def execute(self) -> SyncReport:
        report = SyncReport()
        devices = self._registry.physical_devices()
        if not devices:
            logger.debug("sync.sweep_empty")
            return report

        logger.debug("sync.sweep_started", devices=len(devices))
        outcomes = await asyncio.gather(
            *(self._sync_one(device.device_id) for device in devices)
        )

        for device_id, error in outcomes:
            if error is None:
                report.synced.append(device_id)
                continue
            report.failed[device_id] = str(error)
            if isinstance(error, ProviderError) and error.critical:
                report.critical = True

        if not self._context.shutting_down:
            if report.critical or not report.synced:
                await self._context.set_connected(False)
            else:
                await self._context.set_connected(True)

        logger.info(
            "sync.sweep_completed",
            synced=len(report.synced),
            failed=len(report.failed),
        )
        return report

    async def _sync_one(self, device_id: str) -> tuple[str, Optional[Exception]]:
        try:
            await self._sync_device_status.execute(device_id)
        except Exception as e:
            logger.warning("sync.device_failed", device_id=device_id, error=str(e))
            return device_id, e
        return device_id, None


class GetDevicesUseCase:
    """Read-only snapshot of the registry."""

    def __init__(self, device_registry: IDeviceRegistry) -> None:
        self._registry = device_registry

    async def execute(self) -> DevicesResponseDTO:
        devices = [
            DeviceDTO.from_domain(device) for device in self._registry.list_all()
        ]
        return DevicesResponseDTO(count=len(devices), devices=devices)


class GetDeviceUseCase:
    """Read-only view of a single device."""

    def __init__(self, device_registry: IDeviceRegistry) -> None:
        self._registry = device_registry

    async def execute(self, device_id: str) -> DeviceDTO:
        device = self._registry.get(device_id)
        if device is None:
            raise UnknownDeviceError(device_id)
        return DeviceDTO.from_domain(device)
