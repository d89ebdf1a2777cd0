"""
Repositories Package

This package contains interfaces defining repository contracts
for device records. Specific implementations are provided
by the infrastructure layer.
"""

from .device_registry import IDeviceRegistry

__all__ = ["IDeviceRegistry"]
