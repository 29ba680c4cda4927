"""Event system for decoupled communication."""

from asyncemit.core.events.emitter import AsyncEventEmitter
from asyncemit.core.events.handlers import (
    CompositeHandler,
    EventHandler,
    LoggingHandler,
    MetricsHandler,
)
from asyncemit.core.events.types import EventT, Listener

__all__ = [
    "AsyncEventEmitter",
    "CompositeHandler",
    "EventHandler",
    "EventT",
    "Listener",
    "LoggingHandler",
    "MetricsHandler",
]
