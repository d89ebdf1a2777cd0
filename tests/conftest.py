from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.application.models.engine_context import EngineContext  # noqa: E402
from src.domain.entities.device import (  # noqa: E402
    CommandPayload,
    DeviceListing,
    Scene,
)
from src.domain.gateways.switchbot_gateway import ISwitchBotGateway  # noqa: E402
from src.domain.services.provider_calls import ProviderCallExecutor  # noqa: E402
from src.domain.services.rate_governor import RateGovernor  # noqa: E402
from src.domain.services.retry_controller import RetryController  # noqa: E402
from src.infrastructure.repositories.device_registry import (  # noqa: E402
    InMemoryDeviceRegistry,
)
from src.infrastructure.services.state_store import InMemoryStateStore  # noqa: E402

PHYSICAL_ENTRIES = [
    {
        "deviceId": "C271111EC0AB",
        "deviceName": "Living room curtain",
        "deviceType": "Curtain",
        "hubDeviceId": "E2F6032048AB",
        "enableCloudService": True,
    },
    {
        "deviceId": "D8A5B1C2E3F4",
        "deviceName": "Desk bot",
        "deviceType": "Bot",
        "hubDeviceId": "E2F6032048AB",
        "enableCloudService": True,
    },
]

INFRARED_ENTRIES = [
    {
        "deviceId": "02-202008110034-13",
        "deviceName": "Living room TV",
        "remoteType": "TV",
        "hubDeviceId": "E2F6032048AB",
    }
]


class RecordingSleep:
    """Awaitable replacement for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeClock:
    """Monotonic clock advanced by the fake sleep it hands out."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeGateway(ISwitchBotGateway):
    """
    Scripted provider.

    ``failures`` maps an operation key (``devices``, ``status:<id>``,
    ``command:<id>``, ``scenes``, ``scene:<id>``) to a list of exceptions raised
    in order before the call starts succeeding.
    """

    def __init__(
        self,
        physical: Optional[List[Dict[str, Any]]] = None,
        infrared: Optional[List[Dict[str, Any]]] = None,
        statuses: Optional[Dict[str, Dict[str, Any]]] = None,
        scenes: Optional[List[Scene]] = None,
    ) -> None:
        self.physical = list(PHYSICAL_ENTRIES if physical is None else physical)
        self.infrared = list(INFRARED_ENTRIES if infrared is None else infrared)
        self.statuses = statuses or {
            "C271111EC0AB": {"slidePosition": 40, "moving": False, "battery": 88},
            "D8A5B1C2E3F4": {"power": "off", "battery": 95},
        }
        self.scenes = scenes or [Scene(scene_id="T01", scene_name="Good night")]
        self.failures: Dict[str, List[Exception]] = {}
        self.calls: List[Tuple[str, Any]] = []

    def fail(self, key: str, *errors: Exception) -> None:
        self.failures.setdefault(key, []).extend(errors)

    def _maybe_fail(self, key: str) -> None:
        pending = self.failures.get(key)
        if pending:
            raise pending.pop(0)

    def count(self, name: str) -> int:
        return sum(1 for call_name, _ in self.calls if call_name == name)

    async def get_devices(self) -> DeviceListing:
        self.calls.append(("get_devices", None))
        self._maybe_fail("devices")
        return DeviceListing(
            physical=tuple(self.physical), infrared=tuple(self.infrared)
        )

    async def get_device_status(self, device_id: str) -> Dict[str, Any]:
        self.calls.append(("get_device_status", device_id))
        self._maybe_fail(f"status:{device_id}")
        return dict(self.statuses.get(device_id, {}))

    async def send_command(
        self, device_id: str, payload: CommandPayload
    ) -> Dict[str, Any]:
        self.calls.append(("send_command", (device_id, payload.to_body())))
        self._maybe_fail(f"command:{device_id}")
        return {"statusCode": 100, "message": "success", "body": {}}

    async def get_scenes(self) -> List[Scene]:
        self.calls.append(("get_scenes", None))
        self._maybe_fail("scenes")
        return list(self.scenes)

    async def execute_scene(self, scene_id: str) -> Dict[str, Any]:
        self.calls.append(("execute_scene", scene_id))
        self._maybe_fail(f"scene:{scene_id}")
        return {"statusCode": 100, "message": "success", "body": {}}


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture()
def registry() -> InMemoryDeviceRegistry:
    return InMemoryDeviceRegistry()


@pytest.fixture()
def engine_context(state_store: InMemoryStateStore) -> EngineContext:
    return EngineContext(state_writer=state_store)


@pytest.fixture()
def retry_controller(recording_sleep: RecordingSleep) -> RetryController:
    return RetryController(sleep=recording_sleep)


@pytest.fixture()
def provider_calls(retry_controller: RetryController) -> ProviderCallExecutor:
    # Zero spacing keeps use case tests independent of the wall clock
    return ProviderCallExecutor(retry_controller, RateGovernor(min_interval_ms=0))


@pytest.fixture()
def use_case_kwargs(
    fake_gateway: FakeGateway,
    registry: InMemoryDeviceRegistry,
    provider_calls: ProviderCallExecutor,
    engine_context: EngineContext,
    state_store: InMemoryStateStore,
) -> Callable[..., Dict[str, Any]]:
    def build(**overrides: Any) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "switchbot_gateway": fake_gateway,
            "device_registry": registry,
            "provider_calls": provider_calls,
            "engine_context": engine_context,
            "state_writer": state_store,
        }
        kwargs.update(overrides)
        return kwargs

    return build


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()
