"""Validated engine configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.domain.entities.errors import ConfigurationError

MIN_POLL_INTERVAL_MS = 10000


class EngineConfigDTO(BaseModel):
    """Subset of settings the engine refuses to start without."""

    token: str = Field(description="API token")
    secret: str = Field(description="API secret")
    poll_interval_ms: int = Field(default=60000, description="Status poll interval")

    @field_validator("token", "secret")
    @classmethod
    def _non_empty(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"API {info.field_name} is required and must be non-empty")
        return value.strip()

    @field_validator("poll_interval_ms")
    @classmethod
    def _poll_floor(cls, value: int) -> int:
        if value < MIN_POLL_INTERVAL_MS:
            raise ValueError(
                f"Poll interval must be at least {MIN_POLL_INTERVAL_MS}ms (10 seconds)"
            )
        return value

    @classmethod
    def validate_settings(
        cls, token: object, secret: object, poll_interval_ms: object
    ) -> "EngineConfigDTO":
        """Validate raw values, folding every problem into one ConfigurationError."""
        try:
            return cls.model_validate(
                {
                    "token": token,
                    "secret": secret,
                    "poll_interval_ms": poll_interval_ms,
                }
            )
        except ValidationError as exc:
            problems = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            ]
            raise ConfigurationError(
                f"Configuration validation failed: {', '.join(problems)}",
                details={"errors": problems},
            ) from exc
