"""Port for deferred work scheduled after a successful command."""

from __future__ import annotations

from typing import Protocol


class IResyncScheduler(Protocol):
    """Schedules a one-shot status refresh of a device."""

    def schedule(self, device_id: str) -> None:
        ...
