from __future__ import annotations

import asyncio

import pytest

from src.domain.entities.errors import (
    AuthenticationFailedError,
    InvalidRequestError,
    ProviderApiError,
    ProviderNetworkError,
    RateLimitedError,
    RequestTimeoutError,
)
from src.domain.services.retry_controller import (
    RetryController,
    canonical_key,
    is_retryable,
)


class _Scripted:
    """Raises the scripted errors in order, then returns ``result``."""

    def __init__(self, *errors: Exception, result: object = "ok") -> None:
        self._errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        if self._errors:
            raise self._errors.pop(0)
        return self.result


def test_canonical_key_is_order_independent() -> None:
    first = canonical_key("update_device_status", {"device_id": "A", "extra": 1})
    second = canonical_key("update_device_status", {"extra": 1, "device_id": "A"})

    assert first == second
    assert first == 'update_device_status:{"device_id":"A","extra":1}'
    assert canonical_key("device_discovery") == "device_discovery:{}"


def test_delay_schedule_is_capped() -> None:
    controller = RetryController()

    assert [controller.delay_ms(k) for k in range(1, 7)] == [
        1000,
        2000,
        4000,
        8000,
        16000,
        30000,
    ]


def test_is_retryable() -> None:
    assert is_retryable(RateLimitedError())
    assert is_retryable(ProviderApiError("boom", status_code=502))
    assert not is_retryable(AuthenticationFailedError())
    assert not is_retryable(ValueError("not a provider error"))


@pytest.mark.asyncio
async def test_recovers_after_rate_limits(recording_sleep) -> None:
    controller = RetryController(sleep=recording_sleep)
    fn = _Scripted(RateLimitedError(), RateLimitedError(), result={"power": "on"})

    result = await controller.run("update_device_status", fn, {"device_id": "A"})

    assert result == {"power": "on"}
    assert fn.calls == 3
    assert recording_sleep.calls == [1.0, 2.0]
    assert controller.attempt_state("update_device_status", {"device_id": "A"}) is None


@pytest.mark.asyncio
async def test_gives_up_after_max_retries(recording_sleep) -> None:
    controller = RetryController(sleep=recording_sleep)
    fn = _Scripted(*(RequestTimeoutError("slow") for _ in range(10)))

    with pytest.raises(RequestTimeoutError):
        await controller.run("device_discovery", fn)

    assert fn.calls == 4
    assert recording_sleep.calls == [1.0, 2.0, 4.0]
    assert controller.pending_keys == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        AuthenticationFailedError(),
        InvalidRequestError(),
        ProviderApiError("logical", status_code=200, provider_status=190),
        ValueError("bug"),
    ],
)
async def test_non_retryable_errors_invoke_once(recording_sleep, error) -> None:
    controller = RetryController(sleep=recording_sleep)
    fn = _Scripted(error)

    with pytest.raises(type(error)):
        await controller.run("send_command", fn, {"device_id": "A"})

    assert fn.calls == 1
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_custom_limits(recording_sleep) -> None:
    controller = RetryController(
        max_retries=1, base_delay_ms=500, max_delay_ms=500, sleep=recording_sleep
    )
    fn = _Scripted(ProviderNetworkError("down"), ProviderNetworkError("down"))

    with pytest.raises(ProviderNetworkError):
        await controller.run("device_discovery", fn)

    assert fn.calls == 2
    assert recording_sleep.calls == [0.5]


@pytest.mark.asyncio
async def test_attempt_state_is_tracked_while_waiting() -> None:
    observed = {}

    async def sleep(seconds: float) -> None:
        state = controller.attempt_state("update_device_status", {"device_id": "A"})
        observed["attempts"] = state.attempts
        observed["keys"] = controller.pending_keys

    controller = RetryController(sleep=sleep)
    await controller.run(
        "update_device_status", _Scripted(RateLimitedError()), {"device_id": "A"}
    )

    assert observed["attempts"] == 1
    assert observed["keys"] == ['update_device_status:{"device_id":"A"}']


@pytest.mark.asyncio
async def test_same_key_runs_are_serialized() -> None:
    controller = RetryController()
    active = 0
    peak = 0

    async def fn() -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0)
        active -= 1

    await asyncio.gather(
        controller.run("update_device_status", fn, {"device_id": "A"}),
        controller.run("update_device_status", fn, {"device_id": "A"}),
    )

    assert peak == 1


@pytest.mark.asyncio
async def test_different_keys_run_concurrently() -> None:
    controller = RetryController()
    active = 0
    peak = 0

    async def fn() -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0)
        active -= 1

    await asyncio.gather(
        controller.run("update_device_status", fn, {"device_id": "A"}),
        controller.run("update_device_status", fn, {"device_id": "B"}),
    )

    assert peak == 2


def test_reset_clears_state() -> None:
    controller = RetryController()
    controller._attempts["x:{}"] = object()  # type: ignore[assignment]

    controller.reset()

    assert controller.pending_keys == []


@pytest.mark.asyncio
async def test_locks_are_released_after_runs_finish() -> None:
    controller = RetryController()

    async def ok() -> str:
        return "ok"

    for index in range(50):
        await controller.run(
            "send_command", ok, {"device_id": "IR1", "command": f"btn{index}"}
        )

    assert controller.pending_keys == []
    assert controller._locks == {}
    assert controller._waiters == {}


@pytest.mark.asyncio
async def test_locks_are_released_after_final_failure(recording_sleep) -> None:
    controller = RetryController(sleep=recording_sleep)

    async def fail() -> None:
        raise AuthenticationFailedError()

    with pytest.raises(AuthenticationFailedError):
        await controller.run("execute_scene", fail, {"scene_id": "T01"})

    assert controller._locks == {}


@pytest.mark.asyncio
async def test_reset_keeps_same_key_runs_serialized() -> None:
    controller = RetryController()
    release = asyncio.Event()
    active = 0
    peak = 0

    async def fn() -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await release.wait()
        active -= 1

    first = asyncio.create_task(controller.run("sync", fn, {"device_id": "A"}))
    await asyncio.sleep(0)

    # Unload while the first run still holds the lock, then restart
    controller.reset()
    second = asyncio.create_task(controller.run("sync", fn, {"device_id": "A"}))
    await asyncio.sleep(0)
    assert peak == 1

    release.set()
    await asyncio.gather(first, second)

    assert peak == 1
    assert controller._locks == {}
