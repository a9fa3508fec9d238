"""Element tree and scoped element controller.

A small host-side element model with bubbling event dispatch, plus the
``ScopedElementController`` capability (bind, unbind, trigger,
get_element) that widget controllers such as the modal are composed
from.

Custom (widget) events raised inside a controller's subtree stop at the
controller's element unless the controller publishes them. Native input
events (clicks, key presses, form submits) are never contained.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dialog_lifecycle.core.bus import EventBus

logger = logging.getLogger(__name__)

HANDLER_KEY = "handler"

NATIVE_EVENTS: frozenset[str] = frozenset({
    "blur",
    "change",
    "click",
    "focus",
    "input",
    "keydown",
    "keyup",
    "submit",
})

ElementHandler = Callable[..., Any]


@dataclass(eq=False)
class DomEvent:
    """Event travelling up the element tree.

    Attributes:
        type: Event name.
        target: Element the event was raised on.
        which: Key code for keyboard events.
        args: Extra positional arguments passed to handlers.
        current_target: Element whose handlers are running.
        propagation_stopped: Set once a handler stops bubbling.
    """

    type: str
    target: Element
    which: int | None = None
    args: tuple[Any, ...] = field(default_factory=tuple)
    current_target: Element | None = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        """Prevent the event from reaching further ancestors."""
        self.propagation_stopped = True


class Element:
    """A node in the host element tree.

    Handlers are called as ``handler(element, event, *event.args)``;
    returning ``False`` stops propagation.

    Examples:
        >>> page = Element("body")
        >>> modal = page.append(Element("div", "modal"))
        >>> modal.parent is page
        True
    """

    def __init__(self, tag: str = "div", element_id: str | None = None) -> None:
        self.tag = tag
        self.element_id = element_id
        self.parent: Element | None = None
        self.children: list[Element] = []
        self.data: dict[str, Any] = {}
        self.scope: ScopedElementController | None = None
        self._handlers: dict[str, list[ElementHandler]] = {}

    def __repr__(self) -> str:
        suffix = f"#{self.element_id}" if self.element_id else ""
        return f"<Element {self.tag}{suffix}>"

    # Tree

    def append(self, child: Element) -> Element:
        """Attach ``child`` as the last child, moving it if needed.

        Returns:
            The appended child.
        """
        child.detach()
        child.parent = self
        self.children.append(child)
        return child

    def detach(self) -> None:
        """Remove this element from its parent, keeping its own subtree."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def empty(self) -> None:
        """Remove all children, dropping their handlers and data."""
        for child in list(self.children):
            for node in [child, *child.descendants()]:
                node._handlers.clear()
                node.data.clear()
            child.detach()

    def descendants(self) -> Iterator[Element]:
        """Yield all descendants depth-first."""
        for child in self.children:
            yield child
            yield from child.descendants()

    def contains(self, other: Element) -> bool:
        """Return True when ``other`` is a strict descendant."""
        node = other.parent
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def find(self, tag: str) -> Element | None:
        """Return the first descendant with the given tag."""
        return next((node for node in self.descendants() if node.tag == tag), None)

    @property
    def is_attached(self) -> bool:
        return self.parent is not None

    # Events

    def on(self, event_type: str, handler: ElementHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def off(self, event_type: str | None = None, handler: ElementHandler | None = None) -> None:
        """Remove handlers.

        Args:
            event_type: Restrict to this event type; all types when None.
            handler: Remove only this handler; all handlers when None.
        """
        if event_type is None:
            self._handlers.clear()
            return
        if handler is None:
            self._handlers.pop(event_type, None)
            return
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def has_handlers(self, event_type: str | None = None) -> bool:
        if event_type is None:
            return any(self._handlers.values())
        return bool(self._handlers.get(event_type))

    def trigger(self, event_type: str, *args: Any, which: int | None = None) -> DomEvent:
        """Raise an event on this element and bubble it to the root.

        Returns:
            The dispatched event.
        """
        event = DomEvent(type=event_type, target=self, which=which, args=args)
        self.dispatch(event)
        return event

    def dispatch(self, event: DomEvent, *, bubble: bool = True) -> None:
        """Run handlers from ``event.target`` upwards."""
        node: Element | None = event.target
        while node is not None:
            event.current_target = node
            node._run_handlers(event)
            if event.propagation_stopped or not bubble:
                return
            if node.scope is not None and not node.scope.lets_through(event):
                return
            node = node.parent

    def _run_handlers(self, event: DomEvent) -> None:
        for handler in list(self._handlers.get(event.type, [])):
            if handler(self, event, *event.args) is False:
                event.stop_propagation()


def get_handler(element: Element) -> ScopedElementController | None:
    """Return the controller attached to ``element``, if any."""
    return element.data.get(HANDLER_KEY)


class ScopedElementController:
    """Controller attached to one element for its whole life.

    Owns the element's event bindings and global bus subscriptions and
    releases all of them in :meth:`remove`.

    Args:
        element: Element to control.
        bus: Process-wide event bus for global subscriptions.

    Raises:
        RuntimeError: If the element already has a controller.
    """

    def __init__(self, element: Element, bus: EventBus) -> None:
        if get_handler(element) is not None:
            raise RuntimeError(f"{element!r} already has a handler attached")
        self._element = element
        self._bus = bus
        self._published: set[str] = set()
        self._global_handlers: list[tuple[str, Callable[..., Any]]] = []
        self._removed = False
        element.data[HANDLER_KEY] = self
        element.scope = self

    def get_element(self) -> Element:
        return self._element

    @property
    def published_events(self) -> frozenset[str]:
        return frozenset(self._published)

    def publish_event(self, event_type: str) -> None:
        """Let ``event_type`` cross this controller's boundary."""
        self._published.add(event_type)

    def lets_through(self, event: DomEvent) -> bool:
        """Whether ``event`` may bubble past the controlled element."""
        if event.target is self._element or event.type in NATIVE_EVENTS:
            return True
        return event.type in self._published

    def bind(self, event_type: str, handler: ElementHandler) -> None:
        self._element.on(event_type, handler)

    def unbind(self, event_type: str, handler: ElementHandler | None = None) -> None:
        self._element.off(event_type, handler)

    def unbind_partial(self, element: Element) -> None:
        """Remove every element handler in ``element``'s subtree, itself included."""
        for node in [element, *element.descendants()]:
            node.off()

    def trigger(self, event_type: str, *args: Any) -> DomEvent:
        """Raise an event on the controlled element.

        Bubbles to ancestors; use :meth:`publish_event` for events raised
        by descendants that must cross the boundary.
        """
        return self._element.trigger(event_type, *args)

    def bind_global(self, name: str, handler: Callable[..., Any]) -> None:
        self._bus.on(name, handler)
        self._global_handlers.append((name, handler))

    def unbind_global(self, name: str, handler: Callable[..., Any]) -> None:
        if (name, handler) in self._global_handlers:
            self._global_handlers.remove((name, handler))
            self._bus.off(name, handler)

    def unbind_global_all(self) -> None:
        for name, handler in self._global_handlers:
            self._bus.off(name, handler)
        self._global_handlers.clear()

    @property
    def removed(self) -> bool:
        return self._removed

    def remove(self) -> None:
        """Release the controller: subscriptions, registration and element."""
        if self._removed:
            return
        self.unbind_global_all()
        self._element.off()
        self._element.data.pop(HANDLER_KEY, None)
        self._element.scope = None
        self._element.detach()
        self._removed = True
        logger.debug(f"Handler removed from {self._element!r}")
