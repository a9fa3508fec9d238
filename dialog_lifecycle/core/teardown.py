"""Deferred teardown of a closing modal.

Waits for the exit transition, then releases everything the modal holds:
registered child instances, element bindings, the element subtree and
the handler registration, and finally runs the close callback.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dialog_lifecycle.utils.constant import CLOSE_DELAY_SEC

if TYPE_CHECKING:
    from dialog_lifecycle.core.lifecycle import ModalDialog
    from dialog_lifecycle.core.registry import InstanceRegistry
    from dialog_lifecycle.core.scheduler import DeferredAction, Scheduler

logger = logging.getLogger(__name__)


class TeardownScheduler:
    """Schedules exactly one teardown per modal.

    Args:
        scheduler: Deferred-action scheduler (asyncio or manual clock).
        registry: Registry resolving ``close_clean_instance_ids``.
    """

    def __init__(self, scheduler: Scheduler, registry: InstanceRegistry) -> None:
        self._scheduler = scheduler
        self._registry = registry
        self._pending: dict[str, DeferredAction] = {}

    def is_scheduled(self, dialog: ModalDialog) -> bool:
        return dialog.instance_id in self._pending

    def schedule_teardown(
        self, dialog: ModalDialog, delay: float = CLOSE_DELAY_SEC
    ) -> DeferredAction:
        """Schedule the teardown of ``dialog`` after ``delay`` seconds.

        Raises:
            RuntimeError: If a teardown is already pending for the modal.
        """
        if self.is_scheduled(dialog):
            raise RuntimeError(f"Teardown already scheduled for modal {dialog.instance_id}")
        action = self._scheduler.call_later(
            delay,
            lambda: self._run(dialog),
            name=f"teardown-{dialog.instance_id}",
        )
        self._pending[dialog.instance_id] = action
        logger.debug(f"Teardown of modal {dialog.instance_id} scheduled in {delay}s")
        return action

    def _run(self, dialog: ModalDialog) -> None:
        self._pending.pop(dialog.instance_id, None)
        try:
            self._release(dialog)
            dialog.invoke_close_callback()
        except Exception:
            logger.exception(f"Teardown of modal {dialog.instance_id} raised")
            raise
        finally:
            # A closing modal always ends destroyed, whatever failed above
            dialog.mark_destroyed()
        logger.info(f"Modal {dialog.instance_id} destroyed")

    def _release(self, dialog: ModalDialog) -> None:
        element = dialog.get_element()

        # Children first: they may still reach into the modal's elements.
        for instance_id in dialog.options.close_clean_instance_ids:
            component = self._registry.lookup(instance_id)
            if component is None:
                continue
            try:
                self._registry.unmount(component)
            except Exception:
                logger.exception(
                    f"Unmounting instance {instance_id!r} of modal {dialog.instance_id} failed"
                )

        dialog.controller.unbind_partial(element)
        element.empty()
        dialog.controller.remove()
