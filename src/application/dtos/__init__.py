"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .config_dto import EngineConfigDTO
from .connection_dto import (
    ConnectionTestRequestDTO,
    ConnectionTestResultDTO,
    EngineStatusDTO,
)
from .device_dto import (
    CommandRequestDTO,
    CommandResultDTO,
    DeviceDTO,
    DevicesResponseDTO,
    StatusFieldDTO,
)
from .scene_dto import SceneDTO, SceneExecutionDTO, ScenesResponseDTO

__all__ = [
    "EngineConfigDTO",
    "ConnectionTestRequestDTO",
    "ConnectionTestResultDTO",
    "EngineStatusDTO",
    "CommandRequestDTO",
    "CommandResultDTO",
    "DeviceDTO",
    "DevicesResponseDTO",
    "StatusFieldDTO",
    "SceneDTO",
    "SceneExecutionDTO",
    "ScenesResponseDTO",
]
