"""Event bridge between a modal's scope and the host.

Outbound, child events that the opener must see are published across
the modal's boundary. Inbound, bus and element signals are routed to
the modal: notify-user to the notification redirect, matching
form-success notices to a delayed close, and backdrop clicks and ESC
key presses to the wrapper handler.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from dialog_lifecycle.core import signals
from dialog_lifecycle.utils.constant import PUBLISHED_EVENTS

if TYPE_CHECKING:
    from dialog_lifecycle.core.element import DomEvent, Element, ScopedElementController
    from dialog_lifecycle.core.lifecycle import ModalDialog
    from dialog_lifecycle.core.notification import NotificationRedirect

logger = logging.getLogger(__name__)


class EventBridge:
    """Wires one modal to its element and to the global bus.

    Args:
        dialog: Modal being bridged.
        controller: Scoped controller of the modal's element.
        notifier: Target for redirected notify-user events.
        published_events: Child events allowed to leave the modal.
    """

    def __init__(
        self,
        dialog: ModalDialog,
        controller: ScopedElementController,
        notifier: NotificationRedirect,
        published_events: Iterable[str] = PUBLISHED_EVENTS,
    ) -> None:
        self._dialog = dialog
        self._controller = controller
        self._notifier = notifier
        self._published_events = tuple(published_events)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        """Publish child events and subscribe to inbound signals."""
        if self._attached:
            return
        for event_type in self._published_events:
            self._controller.publish_event(event_type)

        self._controller.bind(signals.NOTIFY_USER, self._redirect_notify_user)
        self._controller.bind(signals.CLICK, self._dialog.handle_wrapper_event)
        self._controller.bind(signals.KEYUP, self._dialog.handle_wrapper_event)
        self._controller.bind_global(signals.FORM_SUCCESS, self._on_form_success)
        self._attached = True

    def detach(self) -> None:
        """Drop the inbound subscriptions; published events stay published."""
        if not self._attached:
            return
        self._controller.unbind(signals.NOTIFY_USER, self._redirect_notify_user)
        self._controller.unbind(signals.CLICK, self._dialog.handle_wrapper_event)
        self._controller.unbind(signals.KEYUP, self._dialog.handle_wrapper_event)
        self._controller.unbind_global(signals.FORM_SUCCESS, self._on_form_success)
        self._attached = False

    def _redirect_notify_user(
        self,
        source_element: Element,
        event: DomEvent,
        trigger_element: Element | None = None,
    ) -> bool:
        self._notifier.redirect(self._dialog, trigger_element)
        # Redirected, so the notice must not also reach the page
        return False

    def _on_form_success(self, source: Any, form_id: str | None) -> None:
        expected = self._dialog.options.close_on_form_success_id
        if expected and expected == form_id:
            logger.debug(f"Form {form_id!r} succeeded inside modal {self._dialog.instance_id}")
            self._dialog.close_soon()
