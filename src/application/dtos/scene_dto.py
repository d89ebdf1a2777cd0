"""Scene DTOs - Application Layer."""

from typing import List

from pydantic import BaseModel, Field

from src.domain.entities.device import Scene


class SceneDTO(BaseModel):
    """DTO for a manual scene."""

    scene_id: str = Field(description="Provider scene identifier")
    scene_name: str = Field(description="Scene name shown in the app")

    @classmethod
    def from_domain(cls, scene: Scene) -> "SceneDTO":
        return cls(scene_id=scene.scene_id, scene_name=scene.scene_name)


class ScenesResponseDTO(BaseModel):
    """DTO for the scene list."""

    count: int = Field(default=0, description="Number of scenes")
    scenes: List[SceneDTO] = Field(default_factory=list, description="Scenes")


class SceneExecutionDTO(BaseModel):
    """DTO acknowledging a scene run."""

    scene_id: str = Field(description="Executed scene")
    executed: bool = Field(default=True, description="Accepted by the provider")
