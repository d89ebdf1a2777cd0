"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of external service communications.
"""

from .switchbot_gateway import SwitchBotGateway, sign_request

__all__ = ["SwitchBotGateway", "sign_request"]
