"""Request lifecycle events.

Listeners subscribe with ``Mock.on(event, listener)`` and receive a payload
dict. Emitted per request, in order:

- ``request:start``    — ``method``, ``path``
- ``request:match``    — ``method``, ``path``, ``route_path``, ``params``
- ``request:notfound`` — ``method``, ``path``
- ``request:end``      — ``method``, ``path``, ``status``, ``duration_ms``

plus ``error`` (``error``, ``event``) when a listener itself raises.
Listener failures are logged and never affect the request.
"""

import logging
import threading
from typing import Any

from fauxapi._internal.invoke import invoke
from fauxapi._internal.types import Listener

logger = logging.getLogger("fauxapi.engine")

EVENTS: frozenset[str] = frozenset(
    {"request:start", "request:match", "request:notfound", "request:end", "error"}
)


class EventBus:
    """Per-engine listener registry.

    Free-threading safety:
        The listener map is guarded by a Lock; ``emit`` iterates a snapshot,
        so listeners may subscribe or unsubscribe while an event is in flight.
    """

    __slots__ = ("_listeners", "_lock")

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._lock = threading.Lock()

    def on(self, event: str, listener: Listener) -> None:
        _check_event(event)
        with self._lock:
            self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Listener) -> None:
        """Remove one registration of *listener*. Unknown listeners are ignored."""
        _check_event(event)
        with self._lock:
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._listeners.get(event, []))

    async def emit(self, event: str, data: dict[str, Any]) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event, []))
        for listener in listeners:
            try:
                await invoke(listener, data)
            except Exception as exc:
                logger.warning("Listener for %r failed: %s", event, exc)
                if event != "error":
                    await self.emit("error", {"error": exc, "event": event})


def _check_event(event: str) -> None:
    if event not in EVENTS:
        msg = f"Unknown event {event!r}. Expected one of: {', '.join(sorted(EVENTS))}"
        raise ValueError(msg)
