"""Type definitions shared by the emitter and its listeners."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any, TypeVar

# Event names are any hashable key: plain strings, str-valued enums, ...
EventT = TypeVar("EventT", bound=Hashable)

# Listeners may be plain functions or coroutine functions
Listener = Callable[..., Any]

__all__ = ["EventT", "Listener"]
