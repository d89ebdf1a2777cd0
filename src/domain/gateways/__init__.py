"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .switchbot_gateway import ISwitchBotGateway

__all__ = ["ISwitchBotGateway"]
