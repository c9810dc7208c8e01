"""
Value display serializer.

Converts resolved values to text when a template interpolates more than one
segment. A template made of a single expression returns the raw value and
never goes through here.
"""

from __future__ import annotations

import inspect
import math
from collections.abc import Mapping, Set
from typing import Any

from templex.core.template.marker import is_template

CIRCULAR = "[Circular]"


def format_number(value: int | float) -> str:
    """Render a number the way templates print it: 2.0 -> "2", inf -> "Infinity"."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def display(value: Any, seen: set[int] | None = None) -> str:
    """Convert any value to text.

    Containers are rendered recursively. Every container visited during one
    call is remembered by identity, and a second visit renders as
    ``[Circular]``.

    Args:
        value: Value produced by resolving an expression.
        seen: Identities of containers already rendered in this call.

    Returns:
        The display text.
    """
    if seen is None:
        seen = set()

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    if is_template(value):
        return str(value)

    if inspect.isclass(value):
        return f"class {value.__name__} {{}}"
    if callable(value):
        name = getattr(value, "__name__", "")
        return f"function {name}() {{}}"

    if id(value) in seen:
        return CIRCULAR
    seen.add(id(value))

    if isinstance(value, Set):
        value = list(value)

    if isinstance(value, (list, tuple)):
        return ", ".join(display(item, seen) for item in value)

    if isinstance(value, dict):
        return _wrap([f"{_key(key, seen)}: {display(item, seen)}" for key, item in value.items()])

    if isinstance(value, Mapping):
        return _wrap(
            [f"{display(key, seen)} => {display(item, seen)}" for key, item in value.items()]
        )

    if type(value).__str__ is not object.__str__:
        return str(value)

    attributes = vars(value) if hasattr(value, "__dict__") else {}
    return _wrap([f"{key}: {display(item, seen)}" for key, item in attributes.items()])


def _key(key: Any, seen: set[int]) -> str:
    if isinstance(key, str):
        return key
    return display(key, seen)


def _wrap(entries: list[str]) -> str:
    space = " " if entries else ""
    return f"{{{space}{', '.join(entries)}{space}}}"
