"""DTOs for engine status and credential checks."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class EngineStatusDTO(BaseModel):
    """DTO representing the /health response payload."""

    connected: bool = Field(description="Last discovery/status exchange succeeded")
    shutting_down: bool = Field(description="Engine is unloading")
    device_count: int = Field(description="Registered devices")
    physical_count: int = Field(description="Devices polled for status")
    pending_retries: int = Field(description="Operations currently mid-retry")

    model_config = {
        "json_schema_extra": {
            "example": {
                "connected": True,
                "shutting_down": False,
                "device_count": 4,
                "physical_count": 3,
                "pending_retries": 0,
            }
        }
    }


class ConnectionTestRequestDTO(BaseModel):
    """Credentials to probe without touching the running engine."""

    token: str = Field(description="SwitchBot open token")
    secret: str = Field(description="SwitchBot client secret")


class ConnectionTestResultDTO(BaseModel):
    """Outcome of a credential probe."""

    success: bool = Field(description="Whether the device list could be fetched")
    device_count: Optional[int] = Field(
        default=None, serialization_alias="deviceCount", description="Devices found"
    )
    message: Optional[str] = Field(default=None, description="Success message")
    error: Optional[str] = Field(default=None, description="User facing error")

    def to_reply(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
