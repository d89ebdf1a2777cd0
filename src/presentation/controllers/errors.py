"""Translation of domain errors into HTTP errors."""

from fastapi import HTTPException, status

from src.domain.entities.errors import (
    DomainError,
    EngineUnavailableError,
    InvalidRequestError,
    ProviderError,
    RateLimitedError,
    RequestTimeoutError,
    UnknownDeviceError,
    UnsupportedCommandError,
)

_STATUS_BY_ERROR = (
    (UnknownDeviceError, status.HTTP_404_NOT_FOUND),
    (UnsupportedCommandError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidRequestError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (EngineUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (RequestTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (ProviderError, status.HTTP_502_BAD_GATEWAY),
)


def http_error(error: DomainError) -> HTTPException:
    """Build the HTTPException matching ``error``."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
