"""Host object/state store abstractions."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Protocol

StateChangeListener = Callable[[str, Any, bool], Awaitable[None]]


class IStateWriter(Protocol):
    """Narrow view of the host store the engine writes observable state to."""

    async def ensure_object(self, path: str, descriptor: Dict[str, Any]) -> None:
        """Create the object at ``path`` unless it already exists."""
        ...

    async def write_state(self, path: str, value: Any, ack: bool = True) -> None:
        """Write a value; ``ack`` marks it as authoritative device state."""
        ...


class ICommandSource(Protocol):
    """Host side that reports user-issued (unacknowledged) state changes."""

    def subscribe(self, listener: StateChangeListener) -> None:
        """Call ``listener(path, value, ack)`` for every command intent."""
        ...

    def unsubscribe(self, listener: StateChangeListener) -> None:
        ...
