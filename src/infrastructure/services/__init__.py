"""Infrastructure services package."""

from .device_poller import DevicePoller
from .resync_scheduler import AsyncioResyncScheduler
from .responder import CallbackResponder
from .state_store import InMemoryStateStore, StateValue

__all__ = [
    "AsyncioResyncScheduler",
    "CallbackResponder",
    "DevicePoller",
    "InMemoryStateStore",
    "StateValue",
]
