"""Core modal lifecycle components.

This package contains:
- The modal lifecycle controller and its state machine
- The event bridge between a modal and the host
- Deferred teardown and the scheduler primitives it runs on
- Host capabilities: element tree, event bus, instance registry
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__all__ = [
    "AsyncioScheduler",
    "DialogState",
    "Element",
    "EventBus",
    "InstanceRegistry",
    "ManualClock",
    "ModalDialog",
    "create",
]

if TYPE_CHECKING:
    from dialog_lifecycle.core.bus import EventBus
    from dialog_lifecycle.core.element import Element
    from dialog_lifecycle.core.lifecycle import DialogState, ModalDialog, create
    from dialog_lifecycle.core.registry import InstanceRegistry
    from dialog_lifecycle.core.scheduler import AsyncioScheduler, ManualClock

_LOCATIONS = {
    "AsyncioScheduler": "dialog_lifecycle.core.scheduler",
    "DialogState": "dialog_lifecycle.core.lifecycle",
    "Element": "dialog_lifecycle.core.element",
    "EventBus": "dialog_lifecycle.core.bus",
    "InstanceRegistry": "dialog_lifecycle.core.registry",
    "ManualClock": "dialog_lifecycle.core.scheduler",
    "ModalDialog": "dialog_lifecycle.core.lifecycle",
    "create": "dialog_lifecycle.core.lifecycle",
}


def __getattr__(name: str) -> object:  # type: ignore[no-untyped-def]
    """Lazy import to avoid loading pydantic until needed.

    Args:
        name: Attribute name to import.

    Returns:
        Requested module attribute.

    Raises:
        AttributeError: If attribute name not found.
    """
    if name in _LOCATIONS:
        from importlib import import_module

        return getattr(import_module(_LOCATIONS[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
