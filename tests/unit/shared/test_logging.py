from __future__ import annotations

import logging
from dataclasses import dataclass

from src.shared.logging import (
    configure_logging,
    get_logger,
    mask_secret,
    mask_sensitive_values,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "bridge.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING

    logger = get_logger(__name__)
    logger.info("structured log test", token="abcdefghijklmnop")


@dataclass
class _LoggingSettings:
    level: str = "WARNING"
    format: str = "%(message)s"
    file_path: str | None = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: str = "production"


def test_update_logging_from_settings_applies_configuration() -> None:
    settings = _Settings(logging=_LoggingSettings(level="ERROR"))

    update_logging_from_settings(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR


def test_mask_secret_keeps_prefix_only() -> None:
    assert mask_secret("0123456789abcdef") == "01234567..."
    assert mask_secret("short") == "***"


def test_mask_sensitive_values_hides_credentials() -> None:
    event = {
        "event": "switchbot.request.signed",
        "token": "0123456789abcdef",
        "sign": "SIGNATURESIGNATURE",
        "headers": {"Authorization": "0123456789abcdef", "nonce": "n-1"},
        "device_id": "C271111EC0AB",
    }

    masked = mask_sensitive_values(None, "info", event)

    assert masked["token"] == "01234567..."
    assert masked["sign"] == "SIGNATUR..."
    assert masked["headers"]["Authorization"] == "01234567..."
    assert masked["headers"]["nonce"] == "n-1"
    assert masked["device_id"] == "C271111EC0AB"
