"""In-process device registry."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from src.domain.entities.device import Device
from src.domain.repositories.device_registry import IDeviceRegistry
from src.shared import get_logger

logger = get_logger(__name__)


class InMemoryDeviceRegistry(IDeviceRegistry):
    """
    Dictionary-backed registry.

    Every mutation swaps a whole ``Device`` record, so concurrent writers
    (poll sweep and post-command resync) resolve as last-writer-wins without
    field-level locking.
    """

    def __init__(self) -> None:
        self._devices: Dict[str, Device] = {}

    def get(self, device_id: str) -> Optional[Device]:
        return self._devices.get(device_id)

    def upsert(self, device: Device) -> Device:
        existing = self._devices.get(device.device_id)
        if existing is not None:
            if existing.category != device.category:
                logger.warning(
                    "registry.category_change_ignored",
                    device_id=device.device_id,
                    category=existing.category.value,
                    listed_as=device.category.value,
                )
                device = replace(device, descriptor=existing.descriptor)
            device = replace(device, category=existing.category, status=existing.status)
        self._devices[device.device_id] = device
        return device

    def replace_status(
        self, device_id: str, status: Mapping[str, Any]
    ) -> Optional[Device]:
        existing = self._devices.get(device_id)
        if existing is None:
            return None
        updated = existing.with_status(status)
        self._devices[device_id] = updated
        return updated

    def list_all(self) -> List[Device]:
        return [self._devices[key] for key in sorted(self._devices)]

    def physical_devices(self) -> List[Device]:
        return [device for device in self.list_all() if device.is_physical]

    def clear(self) -> None:
        self._devices.clear()

    def __len__(self) -> int:
        return len(self._devices)
