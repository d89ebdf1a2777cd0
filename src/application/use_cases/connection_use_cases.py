"""Use cases for engine status and credential checks."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from src.application.dtos.connection_dto import (
    ConnectionTestResultDTO,
    EngineStatusDTO,
)
from src.application.models.engine_context import EngineContext
from src.domain.entities.errors import ErrorKind, ProviderError
from src.domain.gateways.switchbot_gateway import ISwitchBotGateway
from src.domain.repositories.device_registry import IDeviceRegistry
from src.domain.services.retry_controller import RetryController
from src.shared import get_logger

logger = get_logger(__name__)

GatewayFactory = Callable[..., ISwitchBotGateway]

FRIENDLY_ERRORS: Mapping[ErrorKind, str] = {
    ErrorKind.AUTH_FAILED: (
        "Authentication failed. Please verify your token and secret are correct."
    ),
    ErrorKind.NETWORK_ERROR: (
        "Network error. Please check your internet connection and try again."
    ),
    ErrorKind.TIMEOUT: "Connection timeout. SwitchBot API is not responding.",
    ErrorKind.RATE_LIMITED: (
        "Rate limit exceeded. Please wait a moment before testing again."
    ),
}


class GetEngineStatusUseCase:
    """Use case responsible for returning the engine status."""

    def __init__(
        self,
        engine_context: EngineContext,
        device_registry: IDeviceRegistry,
        retry_controller: RetryController,
    ) -> None:
        self._context = engine_context
        self._registry = device_registry
        self._retry = retry_controller

    async def execute(self) -> EngineStatusDTO:
        return EngineStatusDTO(
            connected=self._context.connected,
            shutting_down=self._context.shutting_down,
            device_count=len(self._registry),
            physical_count=len(self._registry.physical_devices()),
            pending_retries=len(self._retry.pending_keys),
        )


class CheckCredentialsUseCase:
    """
    Probe a token/secret pair with a throwaway gateway.

    The running engine, its registry and its connection flag are never
    touched; one unretried ``GET /devices`` is issued.
    """

    def __init__(self, gateway_factory: GatewayFactory) -> None:
        self._gateway_factory = gateway_factory

    async def execute(self, token: Any, secret: Any) -> ConnectionTestResultDTO:
        if not token or not secret:
            return ConnectionTestResultDTO(
                success=False,
                error="Token and secret are required for connection test",
            )
        if not isinstance(token, str) or not isinstance(secret, str):
            return ConnectionTestResultDTO(
                success=False, error="Token and secret must be strings"
            )

        logger.debug("connection_test.started")
        try:
            gateway = self._gateway_factory(
                token=token.strip(), secret=secret.strip()
            )
            listing = await gateway.get_devices()
        except ProviderError as e:
            message = FRIENDLY_ERRORS.get(e.kind, str(e))
            logger.warning("connection_test.failed", kind=e.kind.value, error=message)
            return ConnectionTestResultDTO(success=False, error=message)
        except Exception as e:
            # The host callback must always get an answer
            logger.error("connection_test.unexpected_error", error=str(e))
            return ConnectionTestResultDTO(success=False, error=str(e))

        logger.info("connection_test.succeeded", device_count=listing.total)
        return ConnectionTestResultDTO(
            success=True,
            device_count=listing.total,
            message=f"Successfully connected! Found {listing.total} devices.",
        )
