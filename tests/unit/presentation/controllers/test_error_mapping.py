from __future__ import annotations

import pytest

from src.domain.entities.errors import (
    ConfigurationError,
    EngineUnavailableError,
    MalformedResponseError,
    ProviderApiError,
    RateLimitedError,
    RequestTimeoutError,
    UnknownDeviceError,
    UnsupportedCommandError,
)
from src.presentation.controllers.errors import http_error


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (UnknownDeviceError("X"), 404),
        (UnsupportedCommandError("X", "fly"), 422),
        (RateLimitedError(), 429),
        (EngineUnavailableError("shutting down"), 503),
        (RequestTimeoutError("too slow"), 504),
        (MalformedResponseError("not json"), 502),
        (ProviderApiError("boom", status_code=500), 502),
    ],
)
def test_http_error_maps_domain_errors(error, status_code) -> None:
    exc = http_error(error)

    assert exc.status_code == status_code
    assert exc.detail == error.message


def test_http_error_hides_unexpected_errors() -> None:
    exc = http_error(ConfigurationError("bad token"))

    assert exc.status_code == 500
    assert exc.detail == "Internal server error"
