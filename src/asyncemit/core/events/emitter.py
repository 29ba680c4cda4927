"""Async event emitter for decoupled communication."""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable
from typing import Any, Generic

import structlog

from asyncemit.core.events.types import EventT, Listener
from asyncemit.core.models.config import EmitterConfig

logger = structlog.get_logger(__name__)

# Default of listeners(); None stays usable as an event name
_ALL_EVENTS: Any = object()


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


class AsyncEventEmitter(Generic[EventT]):
    """
    Registry of named-event listeners with sync and async dispatch.

    Listeners for each event are kept in registration order. ``emit`` fires
    them without waiting; ``emit_and_get_all_return_values`` runs them
    concurrently and collects their results.
    """

    def __init__(self, config: EmitterConfig | None = None) -> None:
        """
        Initialize the emitter.

        Args:
            config: Emitter configuration (defaults when omitted)
        """
        self.config = config or EmitterConfig()
        self._listeners: dict[EventT, list[Listener]] = {}
        self._pending: set[asyncio.Future[Any]] = set()
        self._warned: set[EventT] = set()
        self._stats = {
            "events_emitted": 0,
            "listeners_invoked": 0,
            "listener_errors": 0,
        }

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_listener(self, event: EventT, listener: Listener) -> AsyncEventEmitter[EventT]:
        """Append a listener to the end of the event's listener list."""
        self._listeners.setdefault(event, []).append(listener)
        self._registered(event, listener)
        return self

    def on(self, event: EventT, listener: Listener) -> AsyncEventEmitter[EventT]:
        """Alias of :meth:`add_listener`."""
        return self.add_listener(event, listener)

    def prepend_listener(self, event: EventT, listener: Listener) -> AsyncEventEmitter[EventT]:
        """Insert a listener at the head of the event's listener list."""
        self._listeners.setdefault(event, []).insert(0, listener)
        self._registered(event, listener)
        return self

    def once(self, event: EventT, listener: Listener) -> AsyncEventEmitter[EventT]:
        """Append a listener that removes itself before its first call."""
        return self.on(event, self._once_wrapper(event, listener))

    def prepend_once_listener(self, event: EventT, listener: Listener) -> AsyncEventEmitter[EventT]:
        """Prepend a listener that removes itself before its first call."""
        return self.prepend_listener(event, self._once_wrapper(event, listener))

    def remove_listener(self, event: EventT, listener: Listener) -> AsyncEventEmitter[EventT]:
        """
        Remove every registration of ``listener`` for ``event``.

        Listeners are matched by identity. Unknown events and listeners
        are ignored.
        """
        listeners = self._listeners.get(event)
        if listeners:
            remaining = [cb for cb in listeners if cb is not listener]
            self._listeners[event] = remaining
            if len(remaining) < len(listeners):
                logger.debug("Listener removed", event_name=event, listener=_listener_name(listener))
        return self

    def off(self, event: EventT, listener: Listener) -> AsyncEventEmitter[EventT]:
        """Alias of :meth:`remove_listener`."""
        return self.remove_listener(event, listener)

    def remove_all_listeners(self, event: EventT) -> AsyncEventEmitter[EventT]:
        """Clear the event's listeners; the event name stays known."""
        self._listeners[event] = []
        self._warned.discard(event)
        return self

    def _registered(self, event: EventT, listener: Listener) -> None:
        logger.debug("Listener added", event_name=event, listener=_listener_name(listener))

        limit = self.config.max_listeners
        count = len(self._listeners[event])
        if limit and count > limit and event not in self._warned:
            self._warned.add(event)
            logger.warning(
                "Possible listener leak detected",
                event_name=event,
                count=count,
                max_listeners=limit,
            )

    def _once_wrapper(self, event: EventT, listener: Listener) -> Listener:
        @functools.wraps(listener)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            self.remove_listener(event, wrapper)
            return listener(*args, **kwargs)

        return wrapper

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def listeners(self, event: Any = _ALL_EVENTS) -> list[Listener]:
        """
        Get registered listeners.

        Args:
            event: Event name; omit it for the listeners of every event

        Returns:
            A new list; later registrations do not affect it
        """
        if event is _ALL_EVENTS:
            return [cb for name in self._listeners for cb in self._listeners[name]]
        return list(self._listeners.get(event, ()))

    def listener_count(self, event: EventT) -> int:
        """Number of listeners registered for an event."""
        return len(self._listeners.get(event, ()))

    def event_names(self) -> list[EventT]:
        """Event names in first-registration order, including emptied ones."""
        return list(self._listeners)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def emit(self, event: EventT, *args: Any, **kwargs: Any) -> bool:
        """
        Call every listener for an event without waiting for them.

        Awaitable results are scheduled as tasks on the running loop.
        Listener failures are logged and never reach the caller.

        Returns:
            False if the event has no listeners, True otherwise
        """
        listeners = self._listeners.get(event)
        if not listeners:
            return False

        self._stats["events_emitted"] += 1
        for listener in list(listeners):
            self._stats["listeners_invoked"] += 1
            try:
                result = listener(*args, **kwargs)
            except Exception as e:
                self._listener_failed(event, listener, e)
                continue

            if inspect.isawaitable(result):
                self._schedule(event, listener, result)

        return True

    async def emit_and_get_all_return_values(
        self,
        event: EventT,
        *args: Any,
        **kwargs: Any,
    ) -> list[Any] | None:
        """
        Run every listener for an event concurrently and collect results.

        Returns:
            Results in listener order, or None if the event has no listeners

        Raises:
            Exception: The first failure raised by a listener
        """
        listeners = self._listeners.get(event)
        if not listeners:
            return None

        self._stats["events_emitted"] += 1
        loop = asyncio.get_running_loop()
        # Every listener is called before the first await
        futures = [self._call(loop, listener, args, kwargs) for listener in list(listeners)]
        results = await asyncio.gather(*futures)
        return list(results)

    async def emit_and_get_return_value(self, event: EventT, *args: Any, **kwargs: Any) -> Any:
        """
        Run every listener for an event and return the first non-None result.

        Returns:
            First result that is not None, in listener order, else None
        """
        results = await self.emit_and_get_all_return_values(event, *args, **kwargs)
        for value in results or ():
            if value is not None:
                return value
        return None

    def _call(
        self,
        loop: asyncio.AbstractEventLoop,
        listener: Listener,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> asyncio.Future[Any]:
        """Invoke a listener now and wrap its outcome in a future."""
        self._stats["listeners_invoked"] += 1
        try:
            result = listener(*args, **kwargs)
        except Exception as e:
            failed = loop.create_future()
            failed.set_exception(e)
            return failed

        if inspect.isawaitable(result):
            return asyncio.ensure_future(result, loop=loop)

        done = loop.create_future()
        done.set_result(result)
        return done

    def _schedule(self, event: EventT, listener: Listener, result: Awaitable[Any]) -> None:
        """Run an awaitable result as a detached task."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            if inspect.iscoroutine(result):
                result.close()
            logger.warning(
                "No running event loop, dropping async listener",
                event_name=event,
                listener=_listener_name(listener),
            )
            self._listener_failed(event, listener, e)
            return

        task = asyncio.ensure_future(result, loop=loop)
        self._pending.add(task)
        task.add_done_callback(functools.partial(self._task_done, event, listener))

    def _task_done(self, event: EventT, listener: Listener, task: asyncio.Future[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._listener_failed(event, listener, error)

    def _listener_failed(self, event: EventT, listener: Listener, error: BaseException) -> None:
        self._stats["listener_errors"] += 1
        if self.config.log_listener_errors:
            logger.error(
                "Listener error",
                event_name=event,
                listener=_listener_name(listener),
                error=str(error),
                exc_info=error,
            )

    async def wait_for_pending(self) -> None:
        """Wait for all fire-and-forget listener tasks to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def stats(self) -> dict[str, int]:
        """Get emitter statistics."""
        return self._stats.copy()

    @property
    def pending_tasks(self) -> int:
        """Number of fire-and-forget listener tasks still running."""
        return len(self._pending)


__all__ = ["AsyncEventEmitter"]
