"""Host request/response abstraction."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol

ResponseCallback = Callable[[Dict[str, Any]], Any]


class IMessageResponder(Protocol):
    """Delivers the answer to a message sent to the engine by the host."""

    def send_to(
        self,
        recipient: str,
        command: str,
        payload: Dict[str, Any],
        callback: Optional[ResponseCallback] = None,
    ) -> None:
        """Reply to ``recipient`` for ``command``."""
        ...
