"""Notification redirect capability.

Routes a ``notify-user`` event raised inside a modal to whatever widget
renders notifications for the page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dialog_lifecycle.core.bus import EventBus
    from dialog_lifecycle.core.element import Element
    from dialog_lifecycle.core.lifecycle import ModalDialog

logger = logging.getLogger(__name__)


class NotificationRedirect(Protocol):
    def redirect(self, handler: ModalDialog, trigger_element: Element | None) -> None: ...


class BusNotificationRedirect:
    """Re-emit notify-user notices on the bus for a page-level notifier.

    Subscribers receive ``(modal_id, trigger_element)``.
    """

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus

    def redirect(self, handler: ModalDialog, trigger_element: Element | None) -> None:
        logger.debug(f"Redirecting notify-user from modal {handler.instance_id}")
        self._bus.emit("notify-user", handler.instance_id, trigger_element)
