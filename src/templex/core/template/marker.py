"""Marker shared by Template instances, checked by ``is_template``."""

from typing import Any

TEMPLATE_MARKER = object()


def is_template(value: Any) -> bool:
    """True for Template instances, recognised through the class marker."""
    if value is None:
        return False
    return getattr(type(value), "__templex_template__", None) is TEMPLATE_MARKER
