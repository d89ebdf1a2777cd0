"""In-memory stand-in for the host object/state database."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from src.domain.ports.state_store import StateChangeListener
from src.shared import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class StateValue:
    """A stored value with its acknowledgement flag."""

    val: Any
    ack: bool
    ts: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryStateStore:
    """
    Object tree and state values kept in dictionaries.

    Acknowledged writes come from the engine. Unacknowledged writes are
    command intents and are forwarded to the subscribed listeners.
    """

    def __init__(self, namespace: str = "switchbot.0") -> None:
        self.namespace = namespace
        self._objects: Dict[str, Dict[str, Any]] = {}
        self._states: Dict[str, StateValue] = {}
        self._listeners: List[StateChangeListener] = []

    def full_path(self, path: str) -> str:
        return f"{self.namespace}.{path}" if self.namespace else path

    async def ensure_object(self, path: str, descriptor: Dict[str, Any]) -> None:
        key = self.full_path(path)
        if key in self._objects:
            return
        self._objects[key] = copy.deepcopy(descriptor)
        logger.debug(
            "state_store.object_created", path=key, type=descriptor.get("type")
        )

    async def write_state(self, path: str, value: Any, ack: bool = True) -> None:
        key = self.full_path(path)
        self._states[key] = StateValue(val=value, ack=ack)
        if ack:
            return
        for listener in list(self._listeners):
            await listener(key, value, ack)

    def subscribe(self, listener: StateChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StateChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_object(self, path: str) -> Optional[Dict[str, Any]]:
        return self._objects.get(self.full_path(path))

    def get_state(self, path: str) -> Optional[StateValue]:
        return self._states.get(self.full_path(path))

    def object_ids(self) -> List[str]:
        return sorted(self._objects)
