"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.models import EngineContext
from src.application.use_cases.command_use_cases import DispatchCommandUseCase
from src.application.use_cases.connection_use_cases import (
    CheckCredentialsUseCase,
    GetEngineStatusUseCase,
)
from src.application.use_cases.device_use_cases import (
    DiscoverDevicesUseCase,
    GetDevicesUseCase,
    GetDeviceUseCase,
    SyncAllDevicesUseCase,
    SyncDeviceStatusUseCase,
)
from src.application.use_cases.scene_use_cases import (
    ExecuteSceneUseCase,
    GetScenesUseCase,
)
from src.domain.services.provider_calls import ProviderCallExecutor
from src.domain.services.rate_governor import RateGovernor
from src.domain.services.retry_controller import RetryController
from src.infrastructure.gateways.switchbot_gateway import SwitchBotGateway
from src.infrastructure.repositories.device_registry import InMemoryDeviceRegistry
from src.infrastructure.services.device_poller import DevicePoller
from src.infrastructure.services.resync_scheduler import AsyncioResyncScheduler
from src.infrastructure.services.responder import CallbackResponder
from src.infrastructure.services.state_store import InMemoryStateStore
from src.shared import get_logger

from .config import AppSettings
from .engine import SyncEngine

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Host ports
    state_store = providers.Singleton(InMemoryStateStore)
    responder = providers.Singleton(CallbackResponder)

    engine_context = providers.Singleton(EngineContext, state_writer=state_store)

    # Infrastructure
    device_registry = providers.Singleton(InMemoryDeviceRegistry)

    switchbot_gateway = providers.Singleton(
        SwitchBotGateway,
        token=config.switchbot.token,
        secret=config.switchbot.secret,
        base_url=config.switchbot.base_url,
        timeout=config.switchbot.request_timeout_s,
    )

    # Throwaway gateways for credential checks; token/secret given per call
    probe_gateway = providers.Factory(
        SwitchBotGateway,
        base_url=config.switchbot.base_url,
        timeout=config.switchbot.request_timeout_s,
    )

    # Domain services
    retry_controller = providers.Singleton(
        RetryController,
        max_retries=config.retry.max_retries,
        base_delay_ms=config.retry.base_delay_ms,
        max_delay_ms=config.retry.max_delay_ms,
    )

    rate_governor = providers.Singleton(
        RateGovernor,
        min_interval_ms=config.switchbot.min_request_interval_ms,
    )

    provider_calls = providers.Singleton(
        ProviderCallExecutor,
        retry_controller=retry_controller,
        rate_governor=rate_governor,
    )

    # Application (use cases)
    discover_devices_use_case = providers.Factory(
        DiscoverDevicesUseCase,
        switchbot_gateway=switchbot_gateway,
        device_registry=device_registry,
        provider_calls=provider_calls,
        engine_context=engine_context,
        state_writer=state_store,
    )

    sync_device_status_use_case = providers.Factory(
        SyncDeviceStatusUseCase,
        switchbot_gateway=switchbot_gateway,
        device_registry=device_registry,
        provider_calls=provider_calls,
        engine_context=engine_context,
        state_writer=state_store,
    )

    sync_all_devices_use_case = providers.Factory(
        SyncAllDevicesUseCase,
        device_registry=device_registry,
        sync_device_status=sync_device_status_use_case,
        engine_context=engine_context,
    )

    resync_scheduler = providers.Singleton(
        AsyncioResyncScheduler,
        sync_device_status=sync_device_status_use_case,
        engine_context=engine_context,
        delay_ms=config.switchbot.command_resync_delay_ms,
    )

    dispatch_command_use_case = providers.Factory(
        DispatchCommandUseCase,
        switchbot_gateway=switchbot_gateway,
        device_registry=device_registry,
        provider_calls=provider_calls,
        engine_context=engine_context,
        resync_scheduler=resync_scheduler,
    )

    get_devices_use_case = providers.Factory(
        GetDevicesUseCase,
        device_registry=device_registry,
    )

    get_device_use_case = providers.Factory(
        GetDeviceUseCase,
        device_registry=device_registry,
    )

    get_scenes_use_case = providers.Factory(
        GetScenesUseCase,
        switchbot_gateway=switchbot_gateway,
        provider_calls=provider_calls,
    )

    execute_scene_use_case = providers.Factory(
        ExecuteSceneUseCase,
        switchbot_gateway=switchbot_gateway,
        provider_calls=provider_calls,
        engine_context=engine_context,
    )

    get_engine_status_use_case = providers.Factory(
        GetEngineStatusUseCase,
        engine_context=engine_context,
        device_registry=device_registry,
        retry_controller=retry_controller,
    )

    check_credentials_use_case = providers.Factory(
        CheckCredentialsUseCase,
        gateway_factory=probe_gateway.provider,
    )

    # Background services
    device_poller = providers.Singleton(
        DevicePoller,
        sync_all_devices=sync_all_devices_use_case,
        discover_devices=discover_devices_use_case,
        engine_context=engine_context,
        interval_ms=config.switchbot.poll_interval_ms,
    )

    sync_engine = providers.Singleton(
        SyncEngine,
        token=config.switchbot.token,
        secret=config.switchbot.secret,
        poll_interval_ms=config.switchbot.poll_interval_ms,
        engine_context=engine_context,
        state_writer=state_store,
        command_source=state_store,
        responder=responder,
        device_registry=device_registry,
        retry_controller=retry_controller,
        rate_governor=rate_governor,
        discover_devices=discover_devices_use_case,
        dispatch_command_use_case=dispatch_command_use_case,
        check_credentials=check_credentials_use_case,
        device_poller=device_poller,
        resync_scheduler=resync_scheduler,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for the sync engine.

    This async context manager is used in the FastAPI lifespan and by the
    headless runner. The engine is started on entry and unloaded on exit,
    whatever happens in between.
    """
    container = get_container()
    engine = container.sync_engine()

    try:
        logger.info("container.engine.start")
        await engine.on_ready()
        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.engine.stop")
        await engine.on_unload()
        logger.info("container.resources.shutdown")
