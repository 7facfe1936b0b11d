"""In-process notifications about dispatched window actions.

The dispatcher emits one event per target window; the audit logger is the
only built-in subscriber.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

DispatchHandler = Callable[[dict[str, Any]], None]

DISPATCH_COMPLETED = "dispatch.completed"
DISPATCH_FAILED = "dispatch.failed"
DISPATCH_EVENTS = (DISPATCH_COMPLETED, DISPATCH_FAILED)


class EventBus:
    """Routes dispatch outcomes to subscribers in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[DispatchHandler]] = {name: [] for name in DISPATCH_EVENTS}

    def subscribe(self, event_name: str, handler: DispatchHandler) -> None:
        if event_name not in self._handlers:
            raise ValueError(f"unknown dispatch event: {event_name}")
        self._handlers[event_name].append(handler)

    def subscribe_all(self, handler: Callable[[str, dict[str, Any]], None]) -> None:
        """Receive every dispatch event together with its name."""
        for name in DISPATCH_EVENTS:
            self._handlers[name].append(lambda payload, name=name: handler(name, payload))

    def emit_outcome(self, success: bool, payload: dict[str, Any]) -> None:
        """Publish one window's dispatch outcome."""
        event_name = DISPATCH_COMPLETED if success else DISPATCH_FAILED
        for handler in self._handlers[event_name]:
            handler(payload)
