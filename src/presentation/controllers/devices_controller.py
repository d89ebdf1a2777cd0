"""
Devices Router - Presentation Layer

This module defines the FastAPI router for device endpoints.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from src.application.dtos.device_dto import (
    CommandRequestDTO,
    CommandResultDTO,
    DeviceDTO,
    DevicesResponseDTO,
)
from src.application.use_cases.command_use_cases import DispatchCommandUseCase
from src.application.use_cases.device_use_cases import (
    GetDevicesUseCase,
    GetDeviceUseCase,
    SyncDeviceStatusUseCase,
)
from src.domain.entities.errors import DomainError
from src.shared import get_logger

from .errors import http_error

logger = get_logger(__name__)

router = APIRouter(prefix="/devices", tags=["Devices"])


@router.get("/", response_model=DevicesResponseDTO)
@inject
async def get_devices(
    get_devices_use_case: GetDevicesUseCase = Depends(Provide["get_devices_use_case"]),
) -> DevicesResponseDTO:
    """
    Get every registered device with its last synchronized status.

    Infrared remotes are listed too; they carry no status.
    """
    devices_response = await get_devices_use_case.execute()
    logger.debug("devices.retrieved", device_count=devices_response.count)
    return devices_response


@router.get("/{device_id}", response_model=DeviceDTO)
@inject
async def get_device(
    device_id: str,
    get_device_use_case: GetDeviceUseCase = Depends(Provide["get_device_use_case"]),
) -> DeviceDTO:
    """Get one registered device."""
    try:
        return await get_device_use_case.execute(device_id)
    except DomainError as e:
        raise http_error(e) from e


@router.post("/{device_id}/commands", response_model=CommandResultDTO)
@inject
async def send_command(
    device_id: str,
    request: CommandRequestDTO,
    dispatch_command_use_case: DispatchCommandUseCase = Depends(
        Provide["dispatch_command_use_case"]
    ),
) -> CommandResultDTO:
    """
    Send a command to a device.

    Physical devices accept their type's commands (``turnOn``,
    ``setPosition``...). Infrared remotes accept ``command`` with either a
    button name or a JSON command body as value. A status refresh of
    physical devices follows shortly after success.

    Raises:
        HTTPException: 404 unknown device, 422 unsupported command,
            503 engine unavailable, 429/502/504 provider failures
    """
    logger.info(
        "devices.command_requested", device_id=device_id, command=request.command
    )
    try:
        payload = await dispatch_command_use_case.execute(
            device_id, request.command, request.value
        )
    except DomainError as e:
        logger.warning(
            "devices.command_failed",
            device_id=device_id,
            command=request.command,
            error=str(e),
        )
        raise http_error(e) from e

    return CommandResultDTO.from_payload(device_id, payload)


@router.post("/{device_id}/refresh", response_model=DeviceDTO)
@inject
async def refresh_device(
    device_id: str,
    sync_device_status_use_case: SyncDeviceStatusUseCase = Depends(
        Provide["sync_device_status_use_case"]
    ),
) -> DeviceDTO:
    """Fetch the device status from the cloud now and return the updated record."""
    try:
        device = await sync_device_status_use_case.execute(device_id)
    except DomainError as e:
        raise http_error(e) from e

    if device is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Engine is shutting down",
        )
    return DeviceDTO.from_domain(device)
