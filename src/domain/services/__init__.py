"""Domain services: resilience primitives and command mapping."""

from .command_mapper import (
    SUPPORTED_COMMANDS,
    UnmappedCommand,
    map_command,
    parse_infrared_command,
)
from .provider_calls import ProviderCallExecutor
from .rate_governor import RateGovernor
from .retry_controller import RetryController, canonical_key, is_retryable

__all__ = [
    "SUPPORTED_COMMANDS",
    "UnmappedCommand",
    "map_command",
    "parse_infrared_command",
    "ProviderCallExecutor",
    "RateGovernor",
    "RetryController",
    "canonical_key",
    "is_retryable",
]
