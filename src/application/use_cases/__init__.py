"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data between the
SwitchBot gateway, the device registry and the host state store.
"""

from .command_use_cases import DispatchCommandUseCase, build_payload
from .connection_use_cases import CheckCredentialsUseCase, GetEngineStatusUseCase
from .device_use_cases import (
    DiscoverDevicesUseCase,
    GetDevicesUseCase,
    GetDeviceUseCase,
    SyncAllDevicesUseCase,
    SyncDeviceStatusUseCase,
    SyncReport,
    build_device,
)
from .scene_use_cases import ExecuteSceneUseCase, GetScenesUseCase

__all__ = [
    "DiscoverDevicesUseCase",
    "SyncDeviceStatusUseCase",
    "SyncAllDevicesUseCase",
    "SyncReport",
    "GetDevicesUseCase",
    "GetDeviceUseCase",
    "DispatchCommandUseCase",
    "GetScenesUseCase",
    "ExecuteSceneUseCase",
    "GetEngineStatusUseCase",
    "CheckCredentialsUseCase",
    "build_device",
    "build_payload",
]
