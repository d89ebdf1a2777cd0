"""
Command Mapping - Domain Service

Translates local command intents into the provider's command bodies.
Both functions are pure.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from src.domain.entities.device import CommandPayload

DEFAULT_PARAMETER = "default"
INFRARED_COMMAND_STATE = "command"

_PARAMETERLESS = frozenset({"turnOn", "turnOff", "press", "lock", "unlock"})
_RAW_VALUE = frozenset({"setBrightness", "setColor", "setColorTemperature"})

SUPPORTED_COMMANDS = frozenset(_PARAMETERLESS | _RAW_VALUE | {"setPosition"})


class UnmappedCommand(ValueError):
    """``command`` is not part of the supported physical command set."""


def map_command(command: str, value: Any = None) -> CommandPayload:
    """
    Build the body for a physical device command.

    >>> map_command("setPosition", 50).to_body()
    {'command': 'setPosition', 'parameter': '0,ff,50'}
    """
    if command in _PARAMETERLESS:
        return CommandPayload(command=command, parameter=DEFAULT_PARAMETER)
    if command == "setPosition":
        # index 0, mode ff (default speed), position 0-100
        return CommandPayload(command=command, parameter=f"0,ff,{value}")
    if command in _RAW_VALUE:
        return CommandPayload(command=command, parameter=value)
    raise UnmappedCommand(command)


def parse_infrared_command(value: Any) -> CommandPayload:
    """
    Build the body for an infrared remote command.

    Strings are parsed as JSON when possible; anything that is not a JSON
    object is treated as a bare button name.
    """
    if isinstance(value, Mapping):
        return CommandPayload.from_mapping(value)
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            parsed = None
        if isinstance(parsed, Mapping):
            return CommandPayload.from_mapping(parsed)
    return CommandPayload(command=str(value), parameter=DEFAULT_PARAMETER)
