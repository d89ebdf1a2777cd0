"""
Device Type Table - Domain Layer

Static capability table keyed by the provider's ``deviceType`` string.
Types missing from the table are still registered, with an empty
descriptor, and are passed through untouched.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from src.domain.entities.device import (
    EMPTY_DESCRIPTOR,
    StatusField,
    StatusFieldType,
    TypeDescriptor,
)

BOOLEAN = StatusFieldType.BOOLEAN
NUMBER = StatusFieldType.NUMBER
STRING = StatusFieldType.STRING

STATUS_ROLES: Mapping[str, str] = MappingProxyType(
    {
        "power": "switch.power",
        "temperature": "value.temperature",
        "humidity": "value.humidity",
        "battery": "value.battery",
        "brightness": "level.dimmer",
        "slidePosition": "level.blind",
        "lockState": "sensor.lock",
        "moveDetected": "sensor.motion",
        "openState": "sensor.door",
        "CO2": "value.co2",
    }
)

STATUS_UNITS: Mapping[str, str] = MappingProxyType(
    {
        "temperature": "°C",
        "humidity": "%",
        "battery": "%",
        "brightness": "%",
        "slidePosition": "%",
        "voltage": "V",
        "weight": "kg",
        "electricityOfDay": "kWh",
        "CO2": "ppm",
    }
)


def _fields(**types: StatusFieldType) -> Tuple[StatusField, ...]:
    return tuple(
        StatusField(
            name=name,
            type=field_type,
            role=STATUS_ROLES.get(name, "state"),
            unit=STATUS_UNITS.get(name, ""),
        )
        for name, field_type in types.items()
    )


def _descriptor(
    slug: str, commands: Tuple[str, ...], **types: StatusFieldType
) -> TypeDescriptor:
    return TypeDescriptor(slug=slug, commands=commands, status_fields=_fields(**types))


_ON_OFF = ("turnOn", "turnOff")
_LOCK = ("lock", "unlock")
_CLIMATE = {"temperature": NUMBER, "humidity": NUMBER, "battery": NUMBER}
_CURTAIN = {"slidePosition": NUMBER, "moving": BOOLEAN, "battery": NUMBER}
_LOCK_STATE = {"lockState": STRING, "battery": NUMBER}

_TABLE: Dict[str, TypeDescriptor] = {
    "Bot": _descriptor(
        "bot", ("turnOn", "turnOff", "press"), power=BOOLEAN, battery=NUMBER
    ),
    "Curtain": _descriptor("curtain", (*_ON_OFF, "setPosition"), **_CURTAIN),
    "Curtain3": _descriptor("curtain3", (*_ON_OFF, "setPosition"), **_CURTAIN),
    "Smart Lock": _descriptor("lock", _LOCK, **_LOCK_STATE),
    "Smart Lock Pro": _descriptor("lockpro", _LOCK, **_LOCK_STATE),
    "Smart Lock Ultra": _descriptor("lockultra", _LOCK, **_LOCK_STATE),
    "Meter": _descriptor("meter", (), **_CLIMATE),
    "MeterPlus": _descriptor("meterplus", (), **_CLIMATE),
    "Meter Pro": _descriptor("meterpro", (), **_CLIMATE),
    "MeterPro": _descriptor("meterpro", (), **_CLIMATE),
    "MeterPro(CO2)": _descriptor("meterproco2", (), CO2=NUMBER, **_CLIMATE),
    "WoIOSensor": _descriptor("outdoormeter", (), **_CLIMATE),
    "Outdoor Meter": _descriptor("outdoormeter", (), **_CLIMATE),
    "Plug": _descriptor(
        "plug",
        _ON_OFF,
        power=BOOLEAN,
        voltage=NUMBER,
        weight=NUMBER,
        electricityOfDay=NUMBER,
    ),
    "Plug Mini (US)": _descriptor("plugminius", _ON_OFF, power=BOOLEAN),
    "Plug Mini (JP)": _descriptor("plugminijp", _ON_OFF, power=BOOLEAN),
    "Plug Mini (EU)": _descriptor("plugminieu", _ON_OFF, power=BOOLEAN),
    "Color Bulb": _descriptor(
        "colorbulb",
        (*_ON_OFF, "setBrightness", "setColor", "setColorTemperature"),
        power=BOOLEAN,
        brightness=NUMBER,
        color=STRING,
        colorTemperature=NUMBER,
    ),
    "Strip Light": _descriptor(
        "striplight",
        (*_ON_OFF, "setBrightness", "setColor"),
        power=BOOLEAN,
        brightness=NUMBER,
        color=STRING,
    ),
    "Humidifier": _descriptor(
        "humidifier",
        (*_ON_OFF, "setMode"),
        power=BOOLEAN,
        humidity=NUMBER,
        temperature=NUMBER,
        nebulizationEfficiency=NUMBER,
        auto=BOOLEAN,
        childLock=BOOLEAN,
        sound=BOOLEAN,
        lackWater=BOOLEAN,
    ),
    "Motion Sensor": _descriptor(
        "motionsensor", (), moveDetected=BOOLEAN, brightness=STRING, battery=NUMBER
    ),
    "Contact Sensor": _descriptor(
        "contactsensor",
        (),
        openState=STRING,
        moveDetected=BOOLEAN,
        brightness=STRING,
        battery=NUMBER,
    ),
}

DEVICE_TYPES: Mapping[str, TypeDescriptor] = MappingProxyType(_TABLE)

# Infrared remotes have no pollable status and a single free-form command.
INFRARED_DESCRIPTOR = TypeDescriptor(slug="infrared", commands=("command",))


def describe(device_type: str) -> TypeDescriptor:
    """Return the descriptor for ``device_type`` or the empty descriptor."""
    return DEVICE_TYPES.get(device_type, EMPTY_DESCRIPTOR)
