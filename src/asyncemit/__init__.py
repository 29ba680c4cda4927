"""Typed publish/subscribe registry for asyncio programs."""

from asyncemit.core.events import (
    AsyncEventEmitter,
    CompositeHandler,
    EventHandler,
    Listener,
    LoggingHandler,
    MetricsHandler,
)
from asyncemit.core.models.config import EmitterConfig

__version__ = "0.1.0"

__all__ = [
    "AsyncEventEmitter",
    "CompositeHandler",
    "EmitterConfig",
    "EventHandler",
    "Listener",
    "LoggingHandler",
    "MetricsHandler",
    "__version__",
]
