"""
Device Registry Interface

The registry is the only source of observable device truth. Records are
replaced as a whole; the status map of a device is swapped atomically.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from src.domain.entities.device import Device


class IDeviceRegistry(ABC):
    """Interface for device registry implementations."""

    @abstractmethod
    def get(self, device_id: str) -> Optional[Device]:
        """
        Find a device by its provider identifier.

        Returns:
            The device if registered, None otherwise
        """
        pass

    @abstractmethod
    def upsert(self, device: Device) -> Device:
        """
        Create or replace a device record.

        An existing record keeps its category and its last synced status.

        Returns:
            The record now stored in the registry
        """
        pass

    @abstractmethod
    def replace_status(
        self, device_id: str, status: Mapping[str, Any]
    ) -> Optional[Device]:
        """Swap the whole status map of a device; None if it is unknown."""
        pass

    @abstractmethod
    def list_all(self) -> List[Device]:
        """Snapshot of every device, ordered by identifier."""
        pass

    @abstractmethod
    def physical_devices(self) -> List[Device]:
        """Snapshot of the devices whose status can be polled."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget every device."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
