"""Shared test fixtures for the dialog_lifecycle test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from dialog_lifecycle.core.bus import EventBus
from dialog_lifecycle.core.element import Element
from dialog_lifecycle.core.lifecycle import ModalDialog, create
from dialog_lifecycle.core.registry import InstanceRegistry
from dialog_lifecycle.core.scheduler import ManualClock


class FakeComponent:
    """Child component recording unmount calls and the modal's attachment."""

    def __init__(self, element: Element | None = None) -> None:
        self.element = element
        self.unmount_calls = 0
        self.element_attached_at_unmount: bool | None = None

    def unmount(self) -> None:
        self.unmount_calls += 1
        if self.element is not None:
            self.element_attached_at_unmount = self.element.is_attached


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def registry() -> InstanceRegistry:
    return InstanceRegistry()


@pytest.fixture
def page() -> Element:
    return Element("body")


@pytest.fixture
def wrapper(page: Element) -> Element:
    """Modal wrapper (backdrop) holding a form with a submit button."""
    modal = page.append(Element("div", "modal"))
    form = modal.append(Element("form", "loginForm"))
    form.append(Element("button", "submit"))
    return modal


@pytest.fixture
def make_modal(
    wrapper: Element,
    bus: EventBus,
    registry: InstanceRegistry,
    clock: ManualClock,
) -> Callable[..., ModalDialog]:
    """Factory creating a modal on the ``wrapper`` fixture."""

    def _make(raw_options: dict[str, Any] | None = None, **kwargs: Any) -> ModalDialog:
        return create(
            kwargs.pop("element", wrapper),
            {} if raw_options is None else raw_options,
            bus=bus,
            registry=registry,
            scheduler=clock,
            **kwargs,
        )

    return _make


@pytest.fixture
def fake_component() -> type[FakeComponent]:
    """The recording child component class."""
    return FakeComponent
