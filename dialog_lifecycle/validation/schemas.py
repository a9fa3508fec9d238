"""Pydantic validation schemas for modal options.

Resolves caller-supplied modal options against the default table and
validates them before a dialog instance is allowed to exist.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Hashable, Mapping
from typing import Any

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from dialog_lifecycle.utils.constant import DEFAULT_MODAL_WIDTH

# Multi-button configuration key; this modal type only supports a single
# implicit dismissal action.
MULTI_BUTTON_KEY = "buttons"


class InvalidOptions(ValueError):
    """Raised when modal options are missing or invalid."""


class PositionSpec(BaseModel):
    """Placement of the modal relative to the viewport.

    Defaults to centered with a slight upward offset.
    """

    model_config = ConfigDict(frozen=True)

    my: str = "center"
    at: str = "center center-10%"
    of: str = "window"


class DialogOptions(BaseModel):
    """Resolved modal options.

    Accepts camelCase keys (``canClose``, ``closeOnFormSuccessId``) as
    well as field names. Unknown keys are kept but never interpreted.

    Attributes:
        auto_open: Open immediately on construction.
        width: Modal width.
        modal: Block interaction with the page behind the modal.
        draggable: Allow dragging (unused by the lifecycle).
        resizable: Allow resizing (unused by the lifecycle).
        position: Placement of the modal.
        can_close: Whether a click on the backdrop dismisses the modal.
        title: Modal title.
        title_icon: Icon shown beside the title.
        text_title: Plain-text title variant.
        close_callback: Called once, without arguments, after teardown.
        close_on_form_success_id: Form id whose success closes the modal.
        close_clean_instance_ids: Registry ids unmounted on teardown.
        dialog_props: Present for the dialog presentation variant.

    Examples:
        >>> options = resolve_options({"title": "X"})
        >>> options.width
        710
        >>> options.can_close
        True
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=AliasGenerator(validation_alias=to_camel),
        arbitrary_types_allowed=True,
    )

    auto_open: bool = True
    width: int | float = DEFAULT_MODAL_WIDTH
    modal: bool = True
    draggable: bool = False
    resizable: bool = False
    position: PositionSpec = Field(default_factory=PositionSpec)
    can_close: bool = True
    title: str = ""
    title_icon: str = ""
    text_title: str | None = None
    close_callback: Callable[[], Any] | None = None
    close_on_form_success_id: str | None = None
    close_clean_instance_ids: tuple[Hashable, ...] = ()
    dialog_props: dict[str, Any] | None = None

    @field_validator("close_callback", mode="before")
    @classmethod
    def normalize_close_callback(cls, value: Any) -> Any:
        """Treat ``False``/``None`` as "no callback".

        Args:
            value: Raw callback value.

        Returns:
            The callable, or None.

        Raises:
            ValueError: If a truthy non-callable is given.
        """
        if value is None or value is False:
            return None
        if not callable(value):
            raise ValueError("close callback must be callable")
        return value


DEFAULT_OPTIONS: dict[str, Any] = {
    "autoOpen": True,
    "width": DEFAULT_MODAL_WIDTH,
    "modal": True,
    "draggable": False,
    "resizable": False,
    "position": {"my": "center", "at": "center center-10%", "of": "window"},
    "canClose": True,
    "closeCallback": None,
    "closeCleanInstanceIds": [],
}


def check_options(raw_options: object) -> bool:
    """Return True when ``raw_options`` is a mapping without a buttons key."""
    return isinstance(raw_options, Mapping) and MULTI_BUTTON_KEY not in raw_options


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested mappings are merged key by key; any other value replaces the
    base value. Neither input is mutated.

    Args:
        base: Default values.
        override: Caller values.

    Returns:
        New merged dictionary.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _copy_options(raw_options: Mapping[str, Any]) -> dict[str, Any]:
    # Field names are folded onto their camelCase aliases so they override
    # the defaults; callables are shared, everything else is cloned.
    copied: dict[str, Any] = {}
    for key, value in raw_options.items():
        if key in DialogOptions.model_fields:
            key = to_camel(key)
        copied[key] = value if callable(value) else copy.deepcopy(value)
    return copied


def resolve_options(raw_options: object) -> DialogOptions:
    """Validate caller options and merge them over the defaults.

    Args:
        raw_options: Caller-supplied options mapping.

    Returns:
        Frozen DialogOptions.

    Raises:
        InvalidOptions: If the options are not a mapping, contain a
            multi-button configuration, or fail validation.
    """
    if not check_options(raw_options):
        raise InvalidOptions("Missing or invalid modal options!")

    merged = deep_merge(DEFAULT_OPTIONS, _copy_options(raw_options))
    try:
        return DialogOptions.model_validate(merged)
    except ValidationError as exc:
        raise InvalidOptions(f"Invalid modal options: {exc}") from exc
