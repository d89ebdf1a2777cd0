from __future__ import annotations

import pytest

from src.application.use_cases.device_use_cases import (
    DiscoverDevicesUseCase,
    GetDevicesUseCase,
    GetDeviceUseCase,
    SyncAllDevicesUseCase,
    SyncDeviceStatusUseCase,
)
from src.domain.entities.device import DeviceCategory
from src.domain.entities.errors import (
    AuthenticationFailedError,
    InvalidRequestError,
    RateLimitedError,
    RequestTimeoutError,
    UnknownDeviceError,
)

CURTAIN = "C271111EC0AB"
BOT = "D8A5B1C2E3F4"
TV = "02-202008110034-13"


@pytest.fixture()
def discover(use_case_kwargs) -> DiscoverDevicesUseCase:
    return DiscoverDevicesUseCase(**use_case_kwargs())


@pytest.fixture()
def sync_device(use_case_kwargs) -> SyncDeviceStatusUseCase:
    return SyncDeviceStatusUseCase(**use_case_kwargs())


@pytest.fixture()
def sync_all(registry, sync_device, engine_context) -> SyncAllDevicesUseCase:
    return SyncAllDevicesUseCase(registry, sync_device, engine_context)


@pytest.mark.asyncio
async def test_discovery_registers_devices_and_objects(
    discover, registry, state_store, engine_context
) -> None:
    total = await discover.execute()

    assert total == 3
    assert engine_context.connected is True
    assert [device.device_id for device in registry.list_all()] == [TV, CURTAIN, BOT]

    curtain = registry.get(CURTAIN)
    tv = registry.get(TV)
    assert curtain.category is DeviceCategory.PHYSICAL
    assert curtain.hub_device_id == "E2F6032048AB"
    assert tv.category is DeviceCategory.INFRARED
    assert tv.device_type == "TV"

    assert state_store.get_object(CURTAIN)["common"]["type"] == "Curtain"
    assert state_store.get_object(f"{CURTAIN}.slidePosition")["common"]["unit"] == "%"
    assert state_store.get_object(f"{CURTAIN}.setPosition")["common"]["write"] is True
    assert state_store.get_state(f"{CURTAIN}.info.deviceType").val == "Curtain"
    assert state_store.get_object(f"{TV}.command")["common"]["role"] == "text"
    assert state_store.get_state(f"{TV}.info.remoteType").val == "TV"
    assert state_store.get_state("info.connection").val is True


@pytest.mark.asyncio
async def test_discovery_is_idempotent(discover, registry, state_store) -> None:
    await discover.execute()
    first_snapshot = registry.list_all()
    first_objects = state_store.object_ids()

    await discover.execute()

    assert registry.list_all() == first_snapshot
    assert state_store.object_ids() == first_objects


@pytest.mark.asyncio
async def test_rediscovery_keeps_synced_status(discover, registry) -> None:
    await discover.execute()
    registry.replace_status(CURTAIN, {"slidePosition": 70})

    await discover.execute()

    assert registry.get(CURTAIN).status == {"slidePosition": 70}


@pytest.mark.asyncio
async def test_unknown_type_is_registered_without_capabilities(
    use_case_kwargs, fake_gateway, registry
) -> None:
    fake_gateway.physical = [
        {"deviceId": "VAC1", "deviceName": "Vacuum", "deviceType": "Robot Vacuum"}
    ]
    fake_gateway.infrared = []

    assert await DiscoverDevicesUseCase(**use_case_kwargs()).execute() == 1

    vacuum = registry.get("VAC1")
    assert vacuum is not None
    assert vacuum.is_supported_type is False
    assert vacuum.commands == ()


@pytest.mark.asyncio
async def test_entries_without_id_are_skipped(
    use_case_kwargs, fake_gateway, registry
) -> None:
    fake_gateway.physical = [{"deviceName": "Ghost", "deviceType": "Bot"}]
    fake_gateway.infrared = []

    await DiscoverDevicesUseCase(**use_case_kwargs()).execute()

    assert len(registry) == 0


@pytest.mark.asyncio
async def test_discovery_auth_failure_is_not_retried(
    discover, fake_gateway, engine_context, recording_sleep
) -> None:
    engine_context.connected = True
    fake_gateway.fail("devices", AuthenticationFailedError())

    with pytest.raises(AuthenticationFailedError):
        await discover.execute()

    assert fake_gateway.count("get_devices") == 1
    assert recording_sleep.calls == []
    assert engine_context.connected is False


@pytest.mark.asyncio
async def test_discovery_retries_transient_failures(
    discover, fake_gateway, recording_sleep
) -> None:
    fake_gateway.fail("devices", RequestTimeoutError("slow"), RateLimitedError())

    assert await discover.execute() == 3
    assert fake_gateway.count("get_devices") == 3
    assert recording_sleep.calls == [1.0, 2.0]


@pytest.mark.asyncio
async def test_discovery_gives_up_after_four_attempts(
    discover, fake_gateway, engine_context
) -> None:
    fake_gateway.fail("devices", *(RequestTimeoutError("slow") for _ in range(5)))

    with pytest.raises(RequestTimeoutError):
        await discover.execute()

    assert fake_gateway.count("get_devices") == 4
    assert engine_context.connected is False


@pytest.mark.asyncio
async def test_sync_device_writes_status(
    discover, sync_device, registry, state_store
) -> None:
    await discover.execute()

    updated = await sync_device.execute(CURTAIN)

    assert updated.status == {"slidePosition": 40, "moving": False, "battery": 88}
    assert registry.get(CURTAIN).status == updated.status
    state = state_store.get_state(f"{CURTAIN}.slidePosition")
    assert state.val == 40 and state.ack is True


@pytest.mark.asyncio
async def test_sync_unknown_device_raises(sync_device) -> None:
    with pytest.raises(UnknownDeviceError):
        await sync_device.execute("missing")


@pytest.mark.asyncio
async def test_sync_never_polls_infrared(discover, sync_device, fake_gateway) -> None:
    await discover.execute()

    device = await sync_device.execute(TV)

    assert device.device_id == TV
    assert fake_gateway.count("get_device_status") == 0


@pytest.mark.asyncio
async def test_sync_result_discarded_after_shutdown(
    discover, sync_device, fake_gateway, registry, engine_context
) -> None:
    await discover.execute()

    async def status_then_shutdown(device_id: str) -> dict:
        engine_context.shutting_down = True
        return {"power": "on"}

    fake_gateway.get_device_status = status_then_shutdown

    assert await sync_device.execute(BOT) is None
    assert registry.get(BOT).status == {}


@pytest.mark.asyncio
async def test_sweep_isolates_failures(
    discover, sync_all, fake_gateway, registry, engine_context
) -> None:
    await discover.execute()
    fake_gateway.fail(f"status:{CURTAIN}", InvalidRequestError())

    report = await sync_all.execute()

    assert report.synced == [BOT]
    assert list(report.failed) == [CURTAIN]
    assert report.attempted == 2
    assert registry.get(BOT).status == {"power": "off", "battery": 95}
    assert engine_context.connected is True
    polled = [arg for name, arg in fake_gateway.calls if name == "get_device_status"]
    assert sorted(polled) == [CURTAIN, BOT]


@pytest.mark.asyncio
async def test_sweep_all_failed_disconnects(
    discover, sync_all, fake_gateway, engine_context
) -> None:
    await discover.execute()
    fake_gateway.fail(f"status:{CURTAIN}", InvalidRequestError())
    fake_gateway.fail(f"status:{BOT}", InvalidRequestError())

    report = await sync_all.execute()

    assert report.synced == []
    assert engine_context.connected is False


@pytest.mark.asyncio
async def test_sweep_auth_failure_disconnects(
    discover, sync_all, fake_gateway, engine_context
) -> None:
    await discover.execute()
    fake_gateway.fail(f"status:{CURTAIN}", AuthenticationFailedError())

    report = await sync_all.execute()

    assert report.critical is True
    assert report.synced == [BOT]
    assert engine_context.connected is False


@pytest.mark.asyncio
async def test_sweep_with_no_devices(sync_all, engine_context) -> None:
    report = await sync_all.execute()

    assert report.attempted == 0
    assert engine_context.connected is False


@pytest.mark.asyncio
async def test_get_devices_and_device(discover, registry) -> None:
    await discover.execute()

    listing = await GetDevicesUseCase(registry).execute()
    single = await GetDeviceUseCase(registry).execute(CURTAIN)

    assert listing.count == 3
    assert [device.device_id for device in listing.devices] == [TV, CURTAIN, BOT]
    assert single.device_type == "Curtain"

    with pytest.raises(UnknownDeviceError):
        await GetDeviceUseCase(registry).execute("missing")
