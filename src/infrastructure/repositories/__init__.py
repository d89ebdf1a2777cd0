"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer.
"""

from .device_registry import InMemoryDeviceRegistry

__all__ = ["InMemoryDeviceRegistry"]
