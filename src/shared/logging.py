"""
Logging Configuration - Shared Layer

This module wires structlog on top of the standard logging module so that
every layer of the bridge emits structured, dotted event names. Credentials
are masked by a processor before any renderer sees the event.
"""

import logging
import os
import sys
from typing import Any, List, MutableMapping, Optional

import structlog
from structlog.types import Processor

from src.shared.consts import SENSITIVE_LOG_KEYS, EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MASK_VISIBLE_CHARS = 8

# Third-party loggers that repeat what the gateway already logs
_NOISY_LOGGERS = ("httpx", "httpcore")


def mask_secret(value: Any) -> str:
    """Keep only the first characters of a credential-like value."""
    text = str(value)
    if len(text) <= MASK_VISIBLE_CHARS:
        return "***"
    return f"{text[:MASK_VISIBLE_CHARS]}..."


def _is_sensitive(key: Any, value: Any) -> bool:
    return bool(value) and str(key).lower() in SENSITIVE_LOG_KEYS


def mask_sensitive_values(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor hiding credentials, including inside header dicts."""
    for key, value in list(event_dict.items()):
        if _is_sensitive(key, value):
            event_dict[key] = mask_secret(value)
        elif isinstance(value, dict):
            event_dict[key] = {
                inner_key: (
                    mask_secret(inner_value)
                    if _is_sensitive(inner_key, inner_value)
                    else inner_value
                )
                for inner_key, inner_value in value.items()
            }
    return event_dict


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _build_handlers(file_path: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path:
        handlers.append(logging.FileHandler(file_path))
    return handlers


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure stdlib logging and structlog for the whole process.

    Values not passed explicitly fall back to ``LOG_LEVEL`` and
    ``LOG_FILE_PATH``, so logging works before settings are loaded.

    Args:
        level: Log level name, e.g. ``DEBUG``
        format_string: Accepted for settings compatibility; rendering is
            done by structlog
        file_path: Optional log file written next to stdout
        environment: ``production`` renders JSON, anything else the console
    """
    log_level = level or os.environ.get("LOG_LEVEL") or "INFO"
    log_file = file_path or os.environ.get("LOG_FILE_PATH")
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )

    handlers = _build_handlers(log_file)
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            mask_sensitive_values,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    get_logger(__name__).debug(
        "logging.configured", level=log_level, file_path=log_file
    )


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging once the pydantic settings object is available.

    Args:
        settings: The application settings object.
    """
    try:
        configure_logging(
            level=_enum_value(settings.logging.level),
            format_string=settings.logging.format,
            file_path=settings.logging.file_path,
            environment=_enum_value(settings.environment),
        )
    except Exception as e:
        logging.error(f"Failed to update logging from settings: {e}")
        return

    get_logger(__name__).info(
        "logging.updated", environment=_enum_value(settings.environment)
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
