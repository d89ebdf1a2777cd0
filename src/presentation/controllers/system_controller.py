"""System endpoints exposing engine health and credential checks."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from src.application.dtos.connection_dto import (
    ConnectionTestRequestDTO,
    ConnectionTestResultDTO,
    EngineStatusDTO,
)
from src.application.use_cases.connection_use_cases import (
    CheckCredentialsUseCase,
    GetEngineStatusUseCase,
)
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=EngineStatusDTO)
@inject
async def health(
    get_engine_status_use_case: GetEngineStatusUseCase = Depends(
        Provide["get_engine_status_use_case"]
    ),
) -> EngineStatusDTO:
    """Return the connection state and registry counts of the engine."""
    engine_status = await get_engine_status_use_case.execute()
    logger.debug("health.check", connected=engine_status.connected)
    return engine_status


@router.post(
    "/connection/test",
    response_model=ConnectionTestResultDTO,
    response_model_exclude_none=True,
)
@inject
async def check_connection(
    request: ConnectionTestRequestDTO,
    check_credentials_use_case: CheckCredentialsUseCase = Depends(
        Provide["check_credentials_use_case"]
    ),
) -> ConnectionTestResultDTO:
    """
    Probe a token/secret pair without touching the running engine.

    Always answers 200; ``success`` tells whether the device list could be
    fetched and ``error`` carries a user-friendly reason otherwise.
    """
    return await check_credentials_use_case.execute(request.token, request.secret)
