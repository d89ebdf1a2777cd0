"""Runtime structures consumed by the application layer."""

from .engine_context import EngineContext

__all__ = ["EngineContext"]
