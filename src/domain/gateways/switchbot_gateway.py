"""
SwitchBot Gateway Interface - Domain Layer

This module defines the contract for talking to the SwitchBot cloud API.
Implementations raise ``ProviderError`` subclasses for every failure.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from src.domain.entities.device import CommandPayload, DeviceListing, Scene


class ISwitchBotGateway(ABC):
    """Interface for the SwitchBot cloud gateway."""

    @abstractmethod
    async def get_devices(self) -> DeviceListing:
        """
        Retrieve the physical and infrared device lists.

        Returns:
            DeviceListing: raw listing entries split by category

        Raises:
            ProviderError: If the request fails at either status layer
        """
        pass

    @abstractmethod
    async def get_device_status(self, device_id: str) -> Dict[str, Any]:
        """Retrieve the current status fields of one physical device."""
        pass

    @abstractmethod
    async def send_command(
        self, device_id: str, payload: CommandPayload
    ) -> Dict[str, Any]:
        """Send a command to a device."""
        pass

    @abstractmethod
    async def get_scenes(self) -> List[Scene]:
        """Retrieve the manual scenes of the account."""
        pass

    @abstractmethod
    async def execute_scene(self, scene_id: str) -> Dict[str, Any]:
        """Execute a manual scene."""
        pass
