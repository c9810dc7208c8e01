"""
Default reference resolution: dotted paths into the context.

    x.y.0       -> context["x"]["y"][0]
    x.*.y       -> [item["y"] for item in context["x"]]
    x\\.y.z      -> context["x.y"]["z"]
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

WILDCARD = "*"

# A dot not preceded by a backslash
_SEPARATOR_RE = re.compile(r"(?<!\\)\.")
_INDEX_RE = re.compile(r"[0-9]+")


def split_path(path: str) -> tuple[str, ...]:
    """Split a reference path on unescaped dots; ``\\.`` stays a literal dot."""
    return tuple(segment.replace("\\.", ".") for segment in _SEPARATOR_RE.split(path))


def default_reference(path: str) -> Callable[[Any], Any]:
    """Reference factory used when no ``reference`` option is given."""
    segments = split_path(path)

    def resolve(context: Any) -> Any:
        return lookup(context, segments)

    return resolve


def lookup(value: Any, segments: Sequence[str]) -> Any:
    """Walk ``segments`` from ``value``. Missing steps yield None."""
    for index, segment in enumerate(segments):
        if value is None:
            return None

        if segment == WILDCARD:
            items = _elements(value)
            if items is None:
                return None
            rest = segments[index + 1 :]
            return [lookup(item, rest) for item in items]

        value = _child(value, segment)

    return value


def _elements(value: Any) -> list[Any] | None:
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (str, bytes)):
        return None
    if isinstance(value, Sequence):
        return list(value)
    return None


def _child(value: Any, segment: str) -> Any:
    """One lookup step: mapping key, sequence index or attribute."""
    if isinstance(value, Mapping):
        if segment in value:
            return value[segment]
        if _INDEX_RE.fullmatch(segment):
            return value.get(int(segment))
        return None

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if not _INDEX_RE.fullmatch(segment):
            return None
        position = int(segment)
        return value[position] if position < len(value) else None

    return getattr(value, segment, None)
