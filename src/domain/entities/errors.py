"""
Domain Errors

This module defines the error taxonomy shared by the gateway, the retry
controller and the use cases. Every provider-facing failure is a
``ProviderError`` tagged with an ``ErrorKind``; retry eligibility is decided
from that tag, never from message text.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    AUTH_FAILED = "AuthFailed"
    FORBIDDEN = "Forbidden"
    INVALID_REQUEST = "InvalidRequest"
    UNKNOWN_DEVICE = "UnknownDevice"
    UNSUPPORTED_COMMAND = "UnsupportedCommand"
    RATE_LIMITED = "RateLimited"
    TIMEOUT = "Timeout"
    NETWORK_ERROR = "NetworkError"
    API_ERROR = "ApiError"
    MALFORMED_RESPONSE = "MalformedResponse"


RETRYABLE_KINDS = frozenset(
    {ErrorKind.TIMEOUT, ErrorKind.RATE_LIMITED, ErrorKind.NETWORK_ERROR}
)

CRITICAL_KINDS = frozenset({ErrorKind.AUTH_FAILED, ErrorKind.FORBIDDEN})


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DomainError):
    """Raised when the engine configuration is unusable."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class EngineUnavailableError(DomainError):
    """Raised when a command arrives while disconnected or shutting down."""

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Engine unavailable: {reason}", details)


class ProviderError(DomainError):
    """Failure talking to, or interpreting, the SwitchBot cloud API."""

    kind: ErrorKind = ErrorKind.API_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)

    @property
    def retryable(self) -> bool:
        if self.kind in RETRYABLE_KINDS:
            return True
        # Server-side HTTP failures are transient; logical status codes are not.
        return (
            self.kind == ErrorKind.API_ERROR
            and self.status_code is not None
            and self.status_code >= 500
        )

    @property
    def critical(self) -> bool:
        return self.kind in CRITICAL_KINDS


class AuthenticationFailedError(ProviderError):
    kind = ErrorKind.AUTH_FAILED

    def __init__(
        self,
        message: str = "Authentication failed. Check token and secret.",
        **kwargs: Any,
    ):
        super().__init__(message, status_code=401, **kwargs)


class ForbiddenError(ProviderError):
    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Access forbidden. Check your API permissions.",
        **kwargs: Any,
    ):
        super().__init__(message, status_code=403, **kwargs)


class InvalidRequestError(ProviderError):
    kind = ErrorKind.INVALID_REQUEST

    def __init__(
        self,
        message: str = "Invalid request. Check the device ID or command.",
        **kwargs: Any,
    ):
        super().__init__(message, status_code=422, **kwargs)


class RateLimitedError(ProviderError):
    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str = "Rate limit exceeded. Reduce request frequency.",
        **kwargs: Any,
    ):
        super().__init__(message, status_code=429, **kwargs)


class RequestTimeoutError(ProviderError):
    kind = ErrorKind.TIMEOUT


class ProviderNetworkError(ProviderError):
    kind = ErrorKind.NETWORK_ERROR


class ProviderApiError(ProviderError):
    """Non-2xx transport status or a logical status code other than 100."""

    kind = ErrorKind.API_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        provider_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.provider_status = provider_status
        super().__init__(message, status_code=status_code, details=details)


class MalformedResponseError(ProviderError):
    kind = ErrorKind.MALFORMED_RESPONSE


class UnknownDeviceError(ProviderError):
    kind = ErrorKind.UNKNOWN_DEVICE

    def __init__(self, device_id: str, details: Optional[Dict[str, Any]] = None):
        self.device_id = device_id
        super().__init__(f"Unknown device: {device_id}", details=details)


class UnsupportedCommandError(ProviderError):
    kind = ErrorKind.UNSUPPORTED_COMMAND

    def __init__(
        self, device_id: str, command: str, details: Optional[Dict[str, Any]] = None
    ):
        self.device_id = device_id
        self.command = command
        super().__init__(
            f"Unsupported command {command!r} for device {device_id}", details=details
        )
