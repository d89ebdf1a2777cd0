"""Message responder that hands replies to in-process callbacks."""

from __future__ import annotations

from typing import Any, Dict, Optional

from src.domain.ports.responder import ResponseCallback
from src.shared import get_logger

logger = get_logger(__name__)


class CallbackResponder:
    """Delivers replies by calling the callback attached to the message."""

    def send_to(
        self,
        recipient: str,
        command: str,
        payload: Dict[str, Any],
        callback: Optional[ResponseCallback] = None,
    ) -> None:
        logger.debug(
            "responder.reply",
            recipient=recipient,
            command=command,
            success=payload.get("success"),
        )
        if callback is None:
            return
        callback(payload)
