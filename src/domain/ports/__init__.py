"""Domain ports package."""

from .follow_up import IResyncScheduler
from .responder import IMessageResponder, ResponseCallback
from .state_store import ICommandSource, IStateWriter, StateChangeListener

__all__ = [
    "ICommandSource",
    "IMessageResponder",
    "IResyncScheduler",
    "IStateWriter",
    "ResponseCallback",
    "StateChangeListener",
]
