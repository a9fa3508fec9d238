"""Modal lifecycle management.

Handles the life of a modal from construction through the close request
to its deferred teardown. A modal opens synchronously on construction,
closes at most once, and is destroyed only by its scheduled teardown.
"""

from __future__ import annotations

import enum
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from dialog_lifecycle.core import signals
from dialog_lifecycle.core.bridge import EventBridge
from dialog_lifecycle.core.bus import EventBus
from dialog_lifecycle.core.element import DomEvent, Element, ScopedElementController
from dialog_lifecycle.core.notification import BusNotificationRedirect, NotificationRedirect
from dialog_lifecycle.core.registry import InstanceRegistry
from dialog_lifecycle.core.scheduler import DeferredAction, Scheduler
from dialog_lifecycle.core.teardown import TeardownScheduler
from dialog_lifecycle.utils.constant import (
    CLOSE_DELAY_SEC,
    ESC_KEY_CODE,
    FORM_SUCCESS_CLOSE_DELAY_SEC,
)
from dialog_lifecycle.validation.schemas import DialogOptions, resolve_options

logger = logging.getLogger(__name__)


class DialogState(str, enum.Enum):  # noqa: UP042
    """State of a modal.

    Transitions only move forward, one step at a time.

    Attributes:
        OPENING: Being constructed.
        OPEN: Visible and interactive.
        CLOSING: Close requested, teardown pending.
        DESTROYED: Torn down; terminal.
    """

    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"
    DESTROYED = "destroyed"


_STATE_ORDER: tuple[DialogState, ...] = tuple(DialogState)


class InvalidTransition(RuntimeError):
    """Raised when a state change would skip a step or move backwards."""


class ModalDialog:
    """A modal with a single implicit dismissal action.

    Attributes:
        instance_id: Unique id of this modal for the process lifetime.
        options: Resolved, frozen options.
        state: Current lifecycle state.

    Examples:
        >>> modal = ModalDialog(element, {"title": "X"}, bus=bus,
        ...                     registry=registry, scheduler=clock)
        >>> modal.state
        <DialogState.OPEN: 'open'>
        >>> modal.close()
        >>> clock.advance(0.3)
        >>> modal.state
        <DialogState.DESTROYED: 'destroyed'>
    """

    def __init__(
        self,
        handled_element: Element,
        raw_options: Mapping[str, Any],
        *,
        bus: EventBus,
        registry: InstanceRegistry,
        scheduler: Scheduler,
        notifier: NotificationRedirect | None = None,
    ) -> None:
        """Resolve options, open the modal and wire its events.

        Args:
            handled_element: The modal's wrapper (backdrop) element.
            raw_options: Caller options, merged over the defaults.
            bus: Process-wide event bus.
            registry: Registry of child instances to unmount on teardown.
            scheduler: Runs the deferred close and teardown actions.
            notifier: Redirect target for notify-user events. Defaults to
                re-emitting them on the bus.

        Raises:
            InvalidOptions: If the options are invalid; nothing is created.
        """
        self.options: DialogOptions = resolve_options(raw_options)
        self.instance_id = "id" + uuid.uuid4().hex
        self.state = DialogState.OPENING

        self._bus = bus
        self._scheduler = scheduler
        self._teardown = TeardownScheduler(scheduler, registry)
        self._pending_close: DeferredAction | None = None
        self._teardown_action: DeferredAction | None = None
        self._callback_invoked = False

        self._controller = ScopedElementController(handled_element, bus)
        # Structural signals of nested modals must reach the page too
        self._controller.publish_event(signals.MODAL_OPEN)
        self._controller.publish_event(signals.MODAL_CLOSE)
        self._bridge = EventBridge(
            self, self._controller, notifier or BusNotificationRedirect(bus)
        )

        self._open(handled_element)
        self._bridge.attach()

    def __repr__(self) -> str:
        return f"<ModalDialog {self.instance_id} state={self.state.value}>"

    # Accessors

    @property
    def controller(self) -> ScopedElementController:
        return self._controller

    @property
    def bridge(self) -> EventBridge:
        return self._bridge

    @property
    def is_open(self) -> bool:
        return self.state is DialogState.OPEN

    @property
    def close_pending(self) -> bool:
        """True while a form-success close is waiting to run."""
        return self._pending_close is not None and self._pending_close.pending

    @property
    def teardown_action(self) -> DeferredAction | None:
        return self._teardown_action

    def get_element(self) -> Element:
        return self._controller.get_element()

    # Transitions

    def _transition(self, new_state: DialogState) -> None:
        current = _STATE_ORDER.index(self.state)
        if _STATE_ORDER.index(new_state) != current + 1:
            raise InvalidTransition(
                f"Modal {self.instance_id}: {self.state.value} -> {new_state.value}"
            )
        logger.debug(f"Modal {self.instance_id}: {self.state.value} -> {new_state.value}")
        self.state = new_state

    def _open(self, handled_element: Element) -> None:
        self._transition(DialogState.OPEN)
        self._controller.trigger(signals.MODAL_OPEN, handled_element)

    def close(self) -> DeferredAction | None:
        """Start closing the modal.

        Raises the ``modal-close`` structural signal, notifies the
        presentation layer on the bus and schedules the teardown. Only
        the first request has any effect.

        Returns:
            The scheduled teardown, or None if the modal was not open.
        """
        if self.state is not DialogState.OPEN:
            logger.debug(f"Ignoring close of modal {self.instance_id} in state {self.state.value}")
            return None

        # Scheduled first: if no timer can be had the modal stays open
        self._teardown_action = self._teardown.schedule_teardown(self, CLOSE_DELAY_SEC)

        if self._pending_close is not None:
            self._pending_close.cancel()
            self._pending_close = None

        self._transition(DialogState.CLOSING)
        self._controller.trigger(signals.MODAL_CLOSE)
        if self.options.dialog_props:
            self._bus.emit(signals.BUS_DIALOG_CLOSE)
        else:
            self._bus.emit(signals.BUS_MODAL_CLOSE, {"modalId": self.instance_id})
        return self._teardown_action

    def close_soon(self, delay: float = FORM_SUCCESS_CLOSE_DELAY_SEC) -> DeferredAction | None:
        """Announce an upcoming close and close after ``delay`` seconds.

        Returns:
            The pending close action, or None if the modal is not open or
            a close is already pending.
        """
        if self.state is not DialogState.OPEN or self.close_pending:
            return None
        self._pending_close = self._scheduler.call_later(
            delay, self.close, name=f"close-{self.instance_id}"
        )
        self._bus.emit(signals.BUS_MODAL_CLOSE_SOON, {"modalId": self.instance_id})
        return self._pending_close

    def handle_wrapper_event(self, calling_context: Element, event: DomEvent, *_args: Any) -> None:
        """Process events that reach the wrapper element.

        Extra event arguments are ignored. Never stops propagation;
        nested forms rely on their events continuing to bubble.
        """
        # Click directly on the backdrop, not on the modal content
        if event.type == signals.CLICK and event.target is calling_context:
            if self.options.can_close:
                self.close()
            return

        # ESC key presses that have bubbled up
        if event.type == signals.KEYUP and event.which == ESC_KEY_CODE:
            self.close()

    # Teardown hooks

    def invoke_close_callback(self) -> None:
        """Run the close callback once, if one was configured."""
        if self._callback_invoked or self.options.close_callback is None:
            return
        self._callback_invoked = True
        self.options.close_callback()

    def mark_destroyed(self) -> None:
        self._transition(DialogState.DESTROYED)


def create(
    handled_element: Element,
    raw_options: Mapping[str, Any],
    *,
    bus: EventBus,
    registry: InstanceRegistry,
    scheduler: Scheduler,
    notifier: NotificationRedirect | None = None,
) -> ModalDialog:
    """Create and open a modal on ``handled_element``.

    Raises:
        InvalidOptions: If the options are invalid.
    """
    return ModalDialog(
        handled_element,
        raw_options,
        bus=bus,
        registry=registry,
        scheduler=scheduler,
        notifier=notifier,
    )
