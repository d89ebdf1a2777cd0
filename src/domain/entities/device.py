"""Domain entities for SwitchBot cloud devices."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Tuple


class DeviceCategory(str, Enum):
    """Where a device was listed by the provider."""

    PHYSICAL = "physical"
    INFRARED = "infrared"


class StatusFieldType(str, Enum):
    """Semantic type of an observable status field."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


@dataclass(frozen=True, slots=True)
class StatusField:
    """A named, typed value reported by the device status endpoint."""

    name: str
    type: StatusFieldType
    role: str = "state"
    unit: str = ""


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Capabilities of one provider device type."""

    slug: str
    commands: Tuple[str, ...] = ()
    status_fields: Tuple[StatusField, ...] = ()

    @property
    def status_types(self) -> Dict[str, StatusFieldType]:
        return {status.name: status.type for status in self.status_fields}


EMPTY_DESCRIPTOR = TypeDescriptor(slug="unknown")


@dataclass(frozen=True, slots=True)
class Device:
    """
    A device known to the registry.

    Records are immutable; status updates produce a new record through
    :meth:`with_status` so that the whole status map is swapped at once.
    """

    device_id: str
    name: str
    category: DeviceCategory
    device_type: str
    descriptor: TypeDescriptor = EMPTY_DESCRIPTOR
    status: Dict[str, Any] = field(default_factory=dict)
    hub_device_id: str = ""
    cloud_service_enabled: bool = False
    native: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_physical(self) -> bool:
        return self.category == DeviceCategory.PHYSICAL

    @property
    def is_supported_type(self) -> bool:
        return self.descriptor is not EMPTY_DESCRIPTOR

    @property
    def commands(self) -> Tuple[str, ...]:
        return self.descriptor.commands

    def with_status(self, status: Mapping[str, Any]) -> "Device":
        return replace(self, status=dict(status))


@dataclass(frozen=True, slots=True)
class CommandPayload:
    """Body of ``POST /devices/{id}/commands``."""

    command: str
    parameter: Any = "default"
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CommandPayload":
        """Keep every key of an already structured command body."""
        extra = {
            key: value
            for key, value in data.items()
            if key not in ("command", "parameter")
        }
        return cls(
            command=str(data.get("command", "")),
            parameter=data.get("parameter", "default"),
            extra=extra,
        )

    def to_body(self) -> Dict[str, Any]:
        return {"command": self.command, "parameter": self.parameter, **self.extra}


@dataclass(frozen=True, slots=True)
class DeviceListing:
    """Raw ``GET /devices`` body split by category."""

    physical: Tuple[Dict[str, Any], ...] = ()
    infrared: Tuple[Dict[str, Any], ...] = ()

    @property
    def total(self) -> int:
        return len(self.physical) + len(self.infrared)


@dataclass(frozen=True, slots=True)
class Scene:
    """A manual scene configured in the SwitchBot app."""

    scene_id: str
    scene_name: str
