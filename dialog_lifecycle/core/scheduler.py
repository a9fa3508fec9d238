"""Single-shot deferred actions.

Schedulers run a callback once after a delay on the host's single
control thread. ``AsyncioScheduler`` rides the running asyncio loop;
``ManualClock`` is a virtual clock for hosts that drive their own ticks
(and for tests).
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class DeferredAction:
    """Handle for a scheduled single-shot callback.

    Attributes:
        delay: Delay in seconds the action was scheduled with.
        name: Label used in log messages.
    """

    def __init__(self, callback: Callable[[], Any], delay: float, name: str = "") -> None:
        self.delay = delay
        self.name = name or getattr(callback, "__name__", "action")
        self._callback = callback
        self._cancelled = False
        self._fired = False
        self._timer: asyncio.TimerHandle | None = None

    def __repr__(self) -> str:
        return f"<DeferredAction {self.name} delay={self.delay} fired={self._fired}>"

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> bool:
        """Cancel the action if it has not fired yet.

        Returns:
            True if the action was pending and is now cancelled.
        """
        if not self.pending:
            return False
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        logger.debug(f"Cancelled {self!r}")
        return True

    def run(self) -> None:
        """Fire the callback once; later calls and cancelled actions are no-ops."""
        if not self.pending:
            return
        self._fired = True
        self._callback()


class Scheduler(Protocol):
    """Something that can run a callback once after a delay."""

    def call_later(
        self, delay: float, callback: Callable[[], Any], name: str = ""
    ) -> DeferredAction: ...


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``.

    Args:
        loop: Event loop to use. Defaults to the loop running when the
            first action is scheduled.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[[], Any], name: str = ""
    ) -> DeferredAction:
        loop = self._loop or asyncio.get_running_loop()
        action = DeferredAction(callback, delay, name)
        action._timer = loop.call_later(delay, action.run)
        return action


class ManualClock:
    """Virtual clock; actions fire only when :meth:`advance` passes their deadline.

    Examples:
        >>> clock = ManualClock()
        >>> fired = []
        >>> _ = clock.call_later(0.3, lambda: fired.append(clock.now))
        >>> clock.advance(0.2)
        >>> fired
        []
        >>> clock.advance(0.1)
        >>> fired
        [0.3]
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self._queue: list[tuple[float, int, DeferredAction]] = []
        self._sequence = itertools.count()

    def call_later(
        self, delay: float, callback: Callable[[], Any], name: str = ""
    ) -> DeferredAction:
        action = DeferredAction(callback, delay, name)
        heapq.heappush(self._queue, (self.now + delay, next(self._sequence), action))
        return action

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, action in self._queue if action.pending)

    def advance(self, seconds: float) -> None:
        """Move time forward, firing due actions in deadline order.

        Actions scheduled while advancing fire too if their deadline
        falls inside the window.
        """
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")
        target = self.now + seconds
        # Small tolerance so 0.1 + 0.2 style sums still reach their deadline.
        while self._queue and self._queue[0][0] <= target + 1e-9:
            deadline, _, action = heapq.heappop(self._queue)
            self.now = max(self.now, deadline)
            action.run()
        self.now = target

    def run_all(self) -> None:
        """Advance until no action is pending."""
        while self._queue:
            self.advance(max(0.0, self._queue[0][0] - self.now))
