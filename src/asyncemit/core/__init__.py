"""Core module - emitter, listener helpers and configuration."""

from asyncemit.core.events.emitter import AsyncEventEmitter
from asyncemit.core.models.config import EmitterConfig

__all__ = [
    "AsyncEventEmitter",
    "EmitterConfig",
]
