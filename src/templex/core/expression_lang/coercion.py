"""
Value coercion rules shared by the evaluator and the numeric built-ins.

Expressions follow JavaScript's loose coercion table rather than Python's:
null counts as 0 in arithmetic, numeric strings take part in arithmetic,
and ``==`` never equates values of different kinds.
"""

from __future__ import annotations

import math
import re
import sys
from typing import Any

from templex.core.template.display import display, format_number

_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_RADIX_RE = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_RADIX = {"x": 16, "o": 8, "b": 2}


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_scalar(value: Any) -> bool:
    """null, boolean, number or text."""
    return value is None or isinstance(value, (bool, int, float, str))


def to_double(value: int | float) -> int | float:
    """Integers beyond the double range become signed infinity."""
    if isinstance(value, int) and abs(value) > sys.float_info.max:
        return math.copysign(math.inf, value)
    return value


def to_number(value: Any) -> int | float:
    """Numeric coercion: None -> 0, booleans -> 0/1, text parsed, anything else NaN."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return to_double(value)
    if isinstance(value, str):
        return _parse_number(value)
    return math.nan


def _parse_number(text: str) -> int | float:
    text = text.strip()
    if not text:
        return 0
    if _INTEGER_RE.fullmatch(text):
        # float() saturates to inf where int() would hit the digit limit
        return to_double(int(text)) if len(text) <= 310 else float(text)
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf

    m = _RADIX_RE.fullmatch(text)
    if m:
        try:
            return to_double(int(m.group(2), _RADIX[m.group(1).lower()]))
        except ValueError:
            return math.nan
    return math.nan


def to_text(value: Any) -> str:
    """Text coercion used by string concatenation."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    return display(value)


def is_truthy(value: Any) -> bool:
    """Falsy values are None, False, 0, NaN and the empty string."""
    if value is None or value is False:
        return False
    if value is True:
        return True
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def kind_of(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion; containers and objects compare by identity."""
    kind = kind_of(left)
    if kind != kind_of(right):
        return False
    if kind == "object":
        return left is right
    return left == right
