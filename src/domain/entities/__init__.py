"""
Domain Entities Package

This package contains the device model, the static type table and the
error taxonomy shared by every layer.
"""

from .device import (
    CommandPayload,
    Device,
    DeviceCategory,
    DeviceListing,
    Scene,
    StatusField,
    StatusFieldType,
    TypeDescriptor,
)
from .device_types import DEVICE_TYPES, INFRARED_DESCRIPTOR, describe
from .errors import (
    AuthenticationFailedError,
    ConfigurationError,
    DomainError,
    EngineUnavailableError,
    ErrorKind,
    ForbiddenError,
    InvalidRequestError,
    MalformedResponseError,
    ProviderApiError,
    ProviderError,
    ProviderNetworkError,
    RateLimitedError,
    RequestTimeoutError,
    UnknownDeviceError,
    UnsupportedCommandError,
)

__all__ = [
    "CommandPayload",
    "Device",
    "DeviceCategory",
    "DeviceListing",
    "Scene",
    "StatusField",
    "StatusFieldType",
    "TypeDescriptor",
    "DEVICE_TYPES",
    "INFRARED_DESCRIPTOR",
    "describe",
    "DomainError",
    "ConfigurationError",
    "EngineUnavailableError",
    "ErrorKind",
    "ProviderError",
    "AuthenticationFailedError",
    "ForbiddenError",
    "InvalidRequestError",
    "RateLimitedError",
    "RequestTimeoutError",
    "ProviderNetworkError",
    "ProviderApiError",
    "MalformedResponseError",
    "UnknownDeviceError",
    "UnsupportedCommandError",
]
