"""Base event handler classes."""

from __future__ import annotations

import asyncio
import functools
from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from asyncemit.core.events.emitter import AsyncEventEmitter
    from asyncemit.core.events.types import Listener


class EventHandler(ABC):
    """
    Base class for class-based listeners.

    A handler declares the events it processes and registers one listener
    per event on any number of emitters.
    """

    def __init__(self) -> None:
        self._registrations: list[tuple[AsyncEventEmitter[Any], Hashable, Listener]] = []

    @property
    @abstractmethod
    def handled_events(self) -> list[Hashable]:
        """List of event names this handler processes."""
        ...

    @abstractmethod
    async def handle(self, event: Hashable, *args: Any, **kwargs: Any) -> Any:
        """
        Handle an event.

        Args:
            event: Name of the emitted event
            *args: Positional arguments passed to emit
            **kwargs: Keyword arguments passed to emit
        """
        ...

    def attach(self, emitter: AsyncEventEmitter[Any]) -> None:
        """Register this handler for each of its events on an emitter."""
        for event in self.handled_events:
            listener = functools.partial(self.handle, event)
            emitter.on(event, listener)
            self._registrations.append((emitter, event, listener))

    def detach(self, emitter: AsyncEventEmitter[Any]) -> None:
        """Remove every listener this handler registered on an emitter."""
        remaining = []
        for registered_on, event, listener in self._registrations:
            if registered_on is emitter:
                emitter.remove_listener(event, listener)
            else:
                remaining.append((registered_on, event, listener))
        self._registrations = remaining


class LoggingHandler(EventHandler):
    """Handler that logs the events it receives."""

    def __init__(self, event_names: list[Hashable]) -> None:
        """
        Initialize logging handler.

        Args:
            event_names: Event names to log
        """
        super().__init__()
        self._event_names = list(event_names)
        self._logger = structlog.get_logger(__name__)

    @property
    def handled_events(self) -> list[Hashable]:
        """Return handled event names."""
        return self._event_names

    async def handle(self, event: Hashable, *args: Any, **kwargs: Any) -> None:
        """Log the event."""
        self._logger.info(
            "Event received",
            event_name=event,
            args=args,
            kwargs=kwargs,
        )


class MetricsHandler(EventHandler):
    """Handler that counts emissions per event."""

    def __init__(self, event_names: list[Hashable]) -> None:
        """Initialize metrics handler."""
        super().__init__()
        self._event_names = list(event_names)
        self._counters: dict[Hashable, int] = {}

    @property
    def handled_events(self) -> list[Hashable]:
        """Return handled event names."""
        return self._event_names

    async def handle(self, event: Hashable, *args: Any, **kwargs: Any) -> None:
        """Increment counter for the event."""
        self._counters[event] = self._counters.get(event, 0) + 1

    def get_metrics(self) -> dict[Hashable, int]:
        """Get collected metrics."""
        return self._counters.copy()

    def reset(self) -> None:
        """Reset all counters."""
        self._counters.clear()


class CompositeHandler(EventHandler):
    """Handler that delegates to multiple handlers."""

    def __init__(self, handlers: list[EventHandler]) -> None:
        """
        Initialize composite handler.

        Args:
            handlers: List of handlers to delegate to
        """
        super().__init__()
        self._handlers = handlers

    @property
    def handled_events(self) -> list[Hashable]:
        """Return all handled event names from all handlers, in order."""
        events: list[Hashable] = []
        for handler in self._handlers:
            for event in handler.handled_events:
                if event not in events:
                    events.append(event)
        return events

    async def handle(self, event: Hashable, *args: Any, **kwargs: Any) -> None:
        """Delegate to the handlers that process this event."""
        tasks = [
            handler.handle(event, *args, **kwargs)
            for handler in self._handlers
            if event in handler.handled_events
        ]
        await asyncio.gather(*tasks, return_exceptions=True)
