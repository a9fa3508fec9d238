"""Process-wide event bus.

Synchronous publish/subscribe channel shared by all dialogs and the
host presentation layer (``modal-close``, ``form-success``, ...).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

BusHandler = Callable[..., Any]


class EventBus:
    """Named-event bus with synchronous delivery.

    Handlers run in subscription order. A failing handler is logged and
    does not prevent delivery to the remaining handlers.

    Examples:
        >>> bus = EventBus()
        >>> seen = []
        >>> bus.on("form-success", lambda source, form_id: seen.append(form_id))
        >>> bus.emit("form-success", None, "loginForm")
        >>> seen
        ['loginForm']
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[BusHandler]] = {}

    def on(self, name: str, handler: BusHandler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def off(self, name: str, handler: BusHandler) -> None:
        """Remove one subscription; unknown handlers are ignored."""
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, name: str, *args: Any) -> None:
        """Deliver ``args`` to every subscriber of ``name``."""
        for handler in list(self._subscribers.get(name, [])):
            try:
                handler(*args)
            except Exception:
                logger.exception(f"Bus handler for {name!r} raised")

    def subscriber_count(self, name: str | None = None) -> int:
        if name is not None:
            return len(self._subscribers.get(name, []))
        return sum(len(handlers) for handlers in self._subscribers.values())

    def clear(self) -> None:
        """Remove all subscribers."""
        self._subscribers.clear()
