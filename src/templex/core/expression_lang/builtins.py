"""
Built-in function and constant tables.

Every function of the ``math`` module is available under its own name and
every ``math`` constant under its upper-case name (``PI``, ``E``, ``TAU``,
``INF``, ``NAN``), alongside the JavaScript ``Math`` spellings (``LN2``,
``SQRT1_2``, ``sign``, ``random``, ...) and the ``if`` ternary. The tables
are built once at import time and exposed read-only.
"""

from __future__ import annotations

import functools
import math
import random
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from templex.core.expression_lang.coercion import is_number, is_truthy, to_double, to_number


def _numeric(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Coerce every argument to a number; domain errors give NaN.

    Non-numeric arguments (lists, mappings, objects) coerce to NaN like any
    other operand, so ``max([items.*.price])`` is NaN rather than an error.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any) -> Any:
        coerced = [arg if is_number(arg) else to_number(arg) for arg in args]
        try:
            result = fn(*coerced)
            return to_double(result) if is_number(result) else result
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf

    return wrapper


def _if(condition: Any, then: Any = None, otherwise: Any = None) -> Any:
    return then if is_truthy(condition) else otherwise


def _sign(x: float) -> float:
    if math.isnan(x):
        return math.nan
    if x == 0:
        return x
    return 1 if x > 0 else -1


def _round(x: float) -> float:
    # Halves round towards +infinity: round(2.5) == 3, round(-2.5) == -2
    if math.isnan(x) or math.isinf(x):
        return x
    return math.floor(x + 0.5)


def _max(*values: float) -> float:
    if any(math.isnan(v) for v in values):
        return math.nan
    return max(values, default=-math.inf)


def _min(*values: float) -> float:
    if any(math.isnan(v) for v in values):
        return math.nan
    return min(values, default=math.inf)


def _build_tables() -> tuple[dict[str, Callable[..., Any]], dict[str, float]]:
    functions: dict[str, Callable[..., Any]] = {}
    constants: dict[str, float] = {}

    for name in dir(math):
        if name.startswith("_"):
            continue
        prop = getattr(math, name)
        if callable(prop):
            functions[name] = _numeric(prop)
            continue
        # Upper case only, so "e" or "pi" in a template stay context references
        constants[name.upper()] = prop

    # JavaScript Math spellings
    constants.update(
        {
            "E": math.e,
            "PI": math.pi,
            "LN2": math.log(2),
            "LN10": math.log(10),
            "LOG2E": math.log2(math.e),
            "LOG10E": math.log10(math.e),
            "SQRT2": math.sqrt(2),
            "SQRT1_2": math.sqrt(0.5),
        }
    )
    functions.update(
        {
            "abs": _numeric(abs),
            "max": _numeric(_max),
            "min": _numeric(_min),
            "round": _numeric(_round),
            "sign": _numeric(_sign),
            "random": random.random,
        }
    )
    if "cbrt" not in functions:
        functions["cbrt"] = _numeric(lambda x: math.copysign(abs(x) ** (1 / 3), x))

    functions["if"] = _if
    return functions, constants


_functions, _constants = _build_tables()

BUILTIN_FUNCTIONS: MappingProxyType[str, Callable[..., Any]] = MappingProxyType(_functions)

BUILTIN_CONSTANTS: MappingProxyType[str, Any] = MappingProxyType(
    {**_constants, "true": True, "false": False, "null": None}
)
