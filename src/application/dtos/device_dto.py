"""
Device DTOs - Application Layer

Data Transfer Objects for registry snapshots and command requests exchanged
between the application layer and the presentation layer (API).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from src.domain.entities.device import CommandPayload, Device, DeviceCategory


class StatusFieldDTO(BaseModel):
    """DTO for one declared status field of a device type."""

    name: str = Field(description="Status field name as reported by the provider")
    type: str = Field(description="boolean, number or string")
    unit: str = Field(default="", description="Display unit")


class DeviceDTO(BaseModel):
    """DTO for a registered device."""

    device_id: str = Field(description="Provider device identifier")
    name: str = Field(description="Human readable name")
    category: DeviceCategory = Field(description="physical or infrared")
    device_type: str = Field(description="Provider device or remote type")
    supported: bool = Field(description="Whether the type has a known descriptor")
    commands: List[str] = Field(default_factory=list, description="Accepted commands")
    status_fields: List[StatusFieldDTO] = Field(
        default_factory=list, description="Declared status fields"
    )
    status: Dict[str, Any] = Field(
        default_factory=dict, description="Last synchronized status values"
    )
    hub_device_id: Optional[str] = Field(default=None, description="Parent hub")

    @classmethod
    def from_domain(cls, device: Device) -> "DeviceDTO":
        return cls(
            device_id=device.device_id,
            name=device.name,
            category=device.category,
            device_type=device.device_type,
            supported=device.is_supported_type,
            commands=list(device.commands),
            status_fields=[
                StatusFieldDTO(name=item.name, type=item.type.value, unit=item.unit)
                for item in device.descriptor.status_fields
            ],
            status=dict(device.status),
            hub_device_id=device.hub_device_id or None,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "device_id": "C271111EC0AB",
                "name": "Living room curtain",
                "category": "physical",
                "device_type": "Curtain",
                "supported": True,
                "commands": ["turnOn", "turnOff", "setPosition"],
                "status_fields": [
                    {"name": "slidePosition", "type": "number", "unit": "%"}
                ],
                "status": {"slidePosition": 50, "moving": False, "battery": 90},
                "hub_device_id": "E2F6032048AB",
            }
        }
    }


class DevicesResponseDTO(BaseModel):
    """DTO for the registry snapshot."""

    count: int = Field(description="Number of registered devices")
    devices: List[DeviceDTO] = Field(description="Devices ordered by identifier")


class CommandRequestDTO(BaseModel):
    """DTO for a command intent issued through the API."""

    command: str = Field(description="Command name, or 'command' for IR remotes")
    value: Union[Dict[str, Any], str, int, float, bool, None] = Field(
        default=None, description="Command value (position, brightness, IR body)"
    )

    model_config = {
        "json_schema_extra": {"example": {"command": "setPosition", "value": 50}}
    }


class CommandResultDTO(BaseModel):
    """DTO describing the body that was accepted by the provider."""

    device_id: str = Field(description="Target device")
    command: str = Field(description="Provider command name")
    parameter: Any = Field(description="Provider command parameter")
    body: Dict[str, Any] = Field(description="Exact body sent to the provider")

    @classmethod
    def from_payload(
        cls, device_id: str, payload: CommandPayload
    ) -> "CommandResultDTO":
        return cls(
            device_id=device_id,
            command=payload.command,
            parameter=payload.parameter,
            body=payload.to_body(),
        )
