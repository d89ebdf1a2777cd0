from __future__ import annotations

import pytest
from fastapi import HTTPException

from src.application.use_cases.scene_use_cases import (
    ExecuteSceneUseCase,
    GetScenesUseCase,
)
from src.domain.entities.errors import AuthenticationFailedError
from src.presentation.controllers.scenes_controller import execute_scene, get_scenes


@pytest.mark.asyncio
async def test_get_scenes_lists_manual_scenes(fake_gateway, provider_calls) -> None:
    response = await get_scenes(
        get_scenes_use_case=GetScenesUseCase(fake_gateway, provider_calls)
    )

    assert response.count == 1
    assert response.scenes[0].scene_name == "Good night"


@pytest.mark.asyncio
async def test_get_scenes_auth_failure_returns_502(
    fake_gateway, provider_calls
) -> None:
    fake_gateway.fail("scenes", AuthenticationFailedError())

    with pytest.raises(HTTPException) as exc:
        await get_scenes(
            get_scenes_use_case=GetScenesUseCase(fake_gateway, provider_calls)
        )

    assert exc.value.status_code == 502
    assert "Authentication failed" in exc.value.detail


@pytest.mark.asyncio
async def test_execute_scene_acknowledges(
    fake_gateway, provider_calls, engine_context
) -> None:
    result = await execute_scene(
        "T01",
        execute_scene_use_case=ExecuteSceneUseCase(
            fake_gateway, provider_calls, engine_context
        ),
    )

    assert result.scene_id == "T01"
    assert result.executed is True
    assert fake_gateway.calls == [("execute_scene", "T01")]


@pytest.mark.asyncio
async def test_execute_scene_during_shutdown_returns_503(
    fake_gateway, provider_calls, engine_context
) -> None:
    engine_context.shutting_down = True

    with pytest.raises(HTTPException) as exc:
        await execute_scene(
            "T01",
            execute_scene_use_case=ExecuteSceneUseCase(
                fake_gateway, provider_calls, engine_context
            ),
        )

    assert exc.value.status_code == 503
    assert fake_gateway.calls == []
