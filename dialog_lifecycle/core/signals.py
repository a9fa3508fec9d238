"""Event and bus signal names shared by the modal components."""

from __future__ import annotations

from typing import Final

# Structural signals raised on the handled element
MODAL_OPEN: Final[str] = "modal-open"
MODAL_CLOSE: Final[str] = "modal-close"

# Bus notices for the presentation layer
BUS_DIALOG_CLOSE: Final[str] = "dialog-close"
BUS_MODAL_CLOSE: Final[str] = "modal-close"
BUS_MODAL_CLOSE_SOON: Final[str] = "modal-close-soon"

# Inbound signals
NOTIFY_USER: Final[str] = "notify-user"
FORM_SUCCESS: Final[str] = "form-success"
CLICK: Final[str] = "click"
KEYUP: Final[str] = "keyup"
