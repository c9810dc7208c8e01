"""
Operator-precedence evaluator for templex expressions.

Resolution works on a private copy of the part list, so a parsed expression
is never modified and can be resolved concurrently with different contexts.

    Phase 1: prefix operators ("!", unary minus) bind to their operand
    Phase 2: binary operators reduce tier by tier, tightest first
    Phase 3: the single remaining item is the result
"""

from __future__ import annotations

import math
from collections.abc import Callable
from operator import add, mul, sub
from typing import Any

from templex.core.errors import ExpressionEvalError
from templex.core.expression_lang.coercion import (
    is_scalar,
    is_truthy,
    strict_equals,
    to_double,
    to_number,
    to_text,
)
from templex.core.ir import (
    PRECEDENCE,
    BinaryOp,
    Constant,
    Expression,
    Function,
    Operator,
    PrefixOp,
    Reference,
    SubExpression,
)


class _Resolved:
    """An already computed value spliced into the working list."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value


def evaluate(expression: Expression, context: Any = None) -> Any:
    """Resolve an expression against a context.

    Args:
        expression: Parsed expression.
        context: Value that references are looked up in.

    Returns:
        The computed value; None when a reference is missing.

    Raises:
        Whatever a reference resolver or a function raises, unchanged.
    """
    if expression.parts is None:
        return expression.resolved

    items: list[Any] = list(expression.parts)

    # Prefix operators, innermost first so repeated signs stack
    for i in range(len(items) - 2, -1, -1):
        item = items[i]
        if not (isinstance(item, Operator) and item.prefix):
            continue
        if isinstance(items[i + 1], Operator):
            continue
        value = _resolve(items[i + 1], context)
        items[i : i + 2] = [_Resolved(apply_prefix(item.symbol, value))]

    # Left-to-right binary operators
    for tier in PRECEDENCE:
        i = 1
        while i < len(items) - 1:
            operator = items[i]
            if operator.symbol not in tier:
                i += 2
                continue

            left = _resolve(items[i - 1], context)
            right = _resolve(items[i + 1], context)
            items[i - 1 : i + 2] = [_Resolved(calculate(operator.symbol, left, right))]

    return _resolve(items[0], context)


def _resolve(item: Any, context: Any) -> Any:
    """Value of a single operand."""
    if isinstance(item, _Resolved):
        return item.value

    if isinstance(item, Constant):
        return item.value

    if isinstance(item, Reference):
        return item.resolver(context)

    if isinstance(item, Function):
        args = [evaluate(arg, context) for arg in item.args]
        return item.fn(*args)

    if isinstance(item, SubExpression):
        return evaluate(item.expression, context)

    raise ExpressionEvalError(f"Unknown expression part: {type(item).__name__}")


def apply_prefix(symbol: str, value: Any) -> Any:
    if symbol == PrefixOp.NOT:
        return not is_truthy(value)
    if symbol == PrefixOp.NEG:
        return -to_number(value)
    raise ExpressionEvalError(f"Unknown prefix operator: {symbol}")


def calculate(symbol: str, left: Any, right: Any) -> Any:
    """Apply a binary operator to two resolved values."""
    if symbol == BinaryOp.ADD:
        if _concatenates(left) or _concatenates(right):
            return to_text(left) + to_text(right)
        return _arithmetic(add, to_number(left), to_number(right))

    # Strict equality
    if symbol == BinaryOp.EQ:
        return strict_equals(left, right)
    if symbol == BinaryOp.NE:
        return not strict_equals(left, right)

    # Value passthrough
    if symbol == BinaryOp.AND:
        return right if is_truthy(left) else left
    if symbol == BinaryOp.OR:
        return left if is_truthy(left) else right

    # Comparison
    if symbol in (BinaryOp.LT, BinaryOp.LE, BinaryOp.GT, BinaryOp.GE):
        return _compare(symbol, left, right)

    a = to_number(left)
    b = to_number(right)

    # Arithmetic
    if symbol == BinaryOp.SUB:
        return _arithmetic(sub, a, b)
    if symbol == BinaryOp.MUL:
        return _arithmetic(mul, a, b)
    if symbol == BinaryOp.DIV:
        return _arithmetic(_divide, a, b)
    if symbol == BinaryOp.MOD:
        return _arithmetic(_modulo, a, b)
    if symbol in (BinaryOp.POW, BinaryOp.POW_ALT):
        return _power(a, b)

    raise ExpressionEvalError(f"Unknown binary operator: {symbol}")


def _arithmetic(
    fn: Callable[[int | float, int | float], int | float], a: int | float, b: int | float
) -> int | float:
    """Apply a numeric operator; results outside the double range saturate to inf."""
    try:
        return to_double(fn(a, b))
    except OverflowError:
        return to_double(fn(float(a), float(b)))


def _concatenates(value: Any) -> bool:
    """Text and non-scalar operands turn "+" into concatenation."""
    return isinstance(value, str) or not is_scalar(value)


def _compare(symbol: str, left: Any, right: Any) -> bool:
    if isinstance(left, str) and isinstance(right, str):
        a: Any = left
        b: Any = right
    else:
        a = to_number(left)
        b = to_number(right)
        if math.isnan(a) or math.isnan(b):
            return False

    if symbol == BinaryOp.LT:
        return a < b
    if symbol == BinaryOp.LE:
        return a <= b
    if symbol == BinaryOp.GT:
        return a > b
    return a >= b


def _divide(a: int | float, b: int | float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _modulo(a: int | float, b: int | float) -> int | float:
    """Truncated remainder: the result takes the sign of the dividend."""
    if b == 0 or math.isnan(a) or math.isnan(b) or math.isinf(a):
        return math.nan
    if math.isinf(b):
        return a
    if isinstance(a, int) and isinstance(b, int):
        remainder = abs(a) % abs(b)
        return -remainder if a < 0 else remainder
    return math.fmod(a, b)


def _power(a: int | float, b: int | float) -> int | float:
    # Odd integer exponents keep the sign of a negative base
    negative = a < 0 and float(b).is_integer() and int(b) % 2 == 1
    overflow = -math.inf if negative else math.inf

    # Exact integer powers past 2 ** 1024 would only be turned into inf later
    if isinstance(a, int) and isinstance(b, int) and b > 0 and abs(a) > 1:
        if b * math.log2(abs(a)) > 1024:
            return overflow

    try:
        result = a**b
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        return overflow
    if isinstance(result, complex):
        return math.nan
    return to_double(result)
