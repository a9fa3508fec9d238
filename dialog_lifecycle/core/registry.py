"""External instance registry.

Table of mounted child UI components owned by the host mounting layer.
Dialogs only hold the ids and ask the registry to unmount them.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Protocol

logger = logging.getLogger(__name__)

InstanceId = Hashable


class MountedComponent(Protocol):
    """Child UI component that can be unmounted."""

    def unmount(self) -> None: ...


class InstanceRegistry:
    """Registry of mounted components keyed by instance id.

    Examples:
        >>> registry = InstanceRegistry()
        >>> registry.register("files-list", component)
        >>> registry.lookup("files-list") is component
        True
        >>> registry.lookup("missing") is None
        True
    """

    def __init__(self) -> None:
        self._instances: dict[InstanceId, MountedComponent] = {}

    def register(self, instance_id: InstanceId, component: MountedComponent) -> None:
        """Register a mounted component.

        Raises:
            KeyError: If the id is already registered.
        """
        if instance_id in self._instances:
            raise KeyError(f"Instance already registered: {instance_id!r}")
        self._instances[instance_id] = component

    def lookup(self, instance_id: InstanceId) -> MountedComponent | None:
        return self._instances.get(instance_id)

    def unmount(self, component: MountedComponent) -> None:
        """Unmount ``component`` and drop it from the table.

        Unknown components are ignored, so repeated calls are harmless.
        """
        for instance_id, registered in list(self._instances.items()):
            if registered is component:
                del self._instances[instance_id]
                component.unmount()
                logger.debug(f"Unmounted instance {instance_id!r}")
                return

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)
