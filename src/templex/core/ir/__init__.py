"""
Intermediate representation for parsed templex templates and expressions.
"""

from templex.core.ir.expressions import (
    BINARY_SYMBOLS,
    PRECEDENCE,
    PREFIX_SYMBOLS,
    BinaryOp,
    Constant,
    Expression,
    Function,
    Operand,
    Operator,
    Part,
    PrefixOp,
    Reference,
    Scalar,
    SubExpression,
)
from templex.core.ir.templates import ExpressionSegment, Segment, TextSegment

__all__ = [
    "BINARY_SYMBOLS",
    "PRECEDENCE",
    "PREFIX_SYMBOLS",
    "BinaryOp",
    "Constant",
    "Expression",
    "ExpressionSegment",
    "Function",
    "Operand",
    "Operator",
    "Part",
    "PrefixOp",
    "Reference",
    "Scalar",
    "Segment",
    "SubExpression",
    "TextSegment",
]
