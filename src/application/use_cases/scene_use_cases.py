"""Use cases for SwitchBot manual scenes."""

from __future__ import annotations

from src.application.dtos.scene_dto import SceneDTO, ScenesResponseDTO
from src.application.models.engine_context import EngineContext
from src.domain.entities.errors import EngineUnavailableError
from src.domain.gateways.switchbot_gateway import ISwitchBotGateway
from src.domain.services.provider_calls import ProviderCallExecutor
from src.shared import get_logger

logger = get_logger(__name__)


class GetScenesUseCase:
    """List the manual scenes of the account."""

    def __init__(
        self,
        switchbot_gateway: ISwitchBotGateway,
        provider_calls: ProviderCallExecutor,
    ) -> None:
        self._gateway = switchbot_gateway
        self._calls = provider_calls

    async def execute(self) -> ScenesResponseDTO:
        scenes = await self._calls.call("get_scenes", self._gateway.get_scenes)
        items = [SceneDTO.from_domain(scene) for scene in scenes]
        return ScenesResponseDTO(count=len(items), scenes=items)


class ExecuteSceneUseCase:
    """Run a manual scene."""

    def __init__(
        self,
        switchbot_gateway: ISwitchBotGateway,
        provider_calls: ProviderCallExecutor,
        engine_context: EngineContext,
    ) -> None:
        self._gateway = switchbot_gateway
        self._calls = provider_calls
        self._context = engine_context

    async def execute(self, scene_id: str) -> None:
        if self._context.shutting_down:
            raise EngineUnavailableError("shutting down")

        await self._calls.call(
            "execute_scene",
            lambda: self._gateway.execute_scene(scene_id),
            {"scene_id": scene_id},
        )
        logger.info("scene.executed", scene_id=scene_id)
