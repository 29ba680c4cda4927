"""Global test fixtures for asyncemit."""

from __future__ import annotations

from typing import Any

import pytest

from asyncemit.core.events.emitter import AsyncEventEmitter
from asyncemit.core.models.config import EmitterConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ASYNCEMIT_* variables from the host out of the tests."""
    monkeypatch.delenv("ASYNCEMIT_MAX_LISTENERS", raising=False)
    monkeypatch.delenv("ASYNCEMIT_LOG_LISTENER_ERRORS", raising=False)


@pytest.fixture
def emitter() -> AsyncEventEmitter[str]:
    """Fresh emitter with default configuration."""
    return AsyncEventEmitter()


@pytest.fixture
def quiet_emitter() -> AsyncEventEmitter[str]:
    """Emitter that does not log swallowed listener errors."""
    return AsyncEventEmitter(EmitterConfig(log_listener_errors=False))


class Recorder:
    """Callable that records every call it receives."""

    def __init__(self, return_value: Any = None) -> None:
        self.calls: list[tuple[tuple[Any, ...], dict[str, Any]]] = []
        self.return_value = return_value

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((args, kwargs))
        return self.return_value


@pytest.fixture
def recorder() -> type[Recorder]:
    """Factory for call-recording listeners."""
    return Recorder
