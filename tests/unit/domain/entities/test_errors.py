from __future__ import annotations

import pytest

from src.domain.entities.errors import (
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


@pytest.mark.parametrize(
    "error, kind, retryable",
    [
        (AuthenticationFailedError(), ErrorKind.AUTH_FAILED, False),
        (ForbiddenError(), ErrorKind.FORBIDDEN, False),
        (InvalidRequestError(), ErrorKind.INVALID_REQUEST, False),
        (UnknownDeviceError("X"), ErrorKind.UNKNOWN_DEVICE, False),
        (UnsupportedCommandError("X", "fly"), ErrorKind.UNSUPPORTED_COMMAND, False),
        (RateLimitedError(), ErrorKind.RATE_LIMITED, True),
        (RequestTimeoutError("slow"), ErrorKind.TIMEOUT, True),
        (ProviderNetworkError("down"), ErrorKind.NETWORK_ERROR, True),
        (MalformedResponseError("bad"), ErrorKind.MALFORMED_RESPONSE, False),
    ],
)
def test_error_kinds_and_retryability(error, kind, retryable) -> None:
    assert isinstance(error, ProviderError)
    assert error.kind is kind
    assert error.retryable is retryable


def test_api_error_retryable_only_for_server_failures() -> None:
    assert ProviderApiError("boom", status_code=500).retryable
    assert ProviderApiError("boom", status_code=503).retryable
    assert not ProviderApiError("bad", status_code=400).retryable
    assert not ProviderApiError(
        "logical", status_code=200, provider_status=190
    ).retryable


def test_critical_kinds() -> None:
    assert AuthenticationFailedError().critical
    assert ForbiddenError().critical
    assert not RateLimitedError().critical


def test_http_status_codes_are_attached() -> None:
    assert AuthenticationFailedError().status_code == 401
    assert ForbiddenError().status_code == 403
    assert InvalidRequestError().status_code == 422
    assert RateLimitedError().status_code == 429


def test_non_provider_errors() -> None:
    unavailable = EngineUnavailableError("shutting down")
    config_error = ConfigurationError("bad", details={"errors": ["token"]})

    assert isinstance(unavailable, DomainError)
    assert not isinstance(unavailable, ProviderError)
    assert unavailable.message == "Engine unavailable: shutting down"
    assert config_error.details == {"errors": ["token"]}


def test_unknown_device_message() -> None:
    error = UnknownDeviceError("ABC")
    assert error.device_id == "ABC"
    assert "ABC" in str(error)
