"""Unit tests for the external instance registry."""

from __future__ import annotations

import pytest

from dialog_lifecycle.core.registry import InstanceRegistry


class _Component:
    def __init__(self) -> None:
        self.unmounted = 0

    def unmount(self) -> None:
        self.unmounted += 1


def test_register_and_lookup() -> None:
    registry = InstanceRegistry()
    component = _Component()

    registry.register("files", component)

    assert registry.lookup("files") is component
    assert "files" in registry
    assert len(registry) == 1


def test_lookup_missing__returns_none() -> None:
    assert InstanceRegistry().lookup("missing") is None


def test_register_duplicate__raises() -> None:
    registry = InstanceRegistry()
    registry.register("files", _Component())

    with pytest.raises(KeyError):
        registry.register("files", _Component())


def test_unmount__calls_component_and_forgets_it() -> None:
    registry = InstanceRegistry()
    component = _Component()
    registry.register("files", component)

    registry.unmount(component)
    registry.unmount(component)

    assert component.unmounted == 1
    assert "files" not in registry


def test_unmount_unknown__noop() -> None:
    component = _Component()

    InstanceRegistry().unmount(component)

    assert component.unmounted == 0
