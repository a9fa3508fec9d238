"""Option validation layer.

This package resolves caller-supplied modal options against the
defaults using Pydantic schemas.
"""

from __future__ import annotations

__all__ = [
    "DialogOptions",
    "InvalidOptions",
    "resolve_options",
]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    """Lazy import to avoid loading pydantic until needed.

    Args:
        name: Attribute name to import.

    Returns:
        Requested module attribute.

    Raises:
        AttributeError: If attribute name not found.
    """
    if name in __all__:
        from dialog_lifecycle.validation import schemas

        return getattr(schemas, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
