"""
Scenes Router - Presentation Layer

This module defines the FastAPI router for manual scene endpoints.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from src.application.dtos.scene_dto import SceneExecutionDTO, ScenesResponseDTO
from src.application.use_cases.scene_use_cases import (
    ExecuteSceneUseCase,
    GetScenesUseCase,
)
from src.domain.entities.errors import DomainError
from src.shared import get_logger

from .errors import http_error

logger = get_logger(__name__)

router = APIRouter(prefix="/scenes", tags=["Scenes"])


@router.get("/", response_model=ScenesResponseDTO)
@inject
async def get_scenes(
    get_scenes_use_case: GetScenesUseCase = Depends(Provide["get_scenes_use_case"]),
) -> ScenesResponseDTO:
    """List the manual scenes configured in the SwitchBot app."""
    try:
        return await get_scenes_use_case.execute()
    except DomainError as e:
        logger.error("scenes.retrieval_failed", error=str(e))
        raise http_error(e) from e


@router.post("/{scene_id}/execute", response_model=SceneExecutionDTO)
@inject
async def execute_scene(
    scene_id: str,
    execute_scene_use_case: ExecuteSceneUseCase = Depends(
        Provide["execute_scene_use_case"]
    ),
) -> SceneExecutionDTO:
    try:
        await execute_scene_use_case.execute(scene_id)
    except DomainError as e:
        logger.error("scenes.execution_failed", scene_id=scene_id, error=str(e))
        raise http_error(e) from e
    return SceneExecutionDTO(scene_id=scene_id)
