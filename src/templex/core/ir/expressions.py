"""
Parsed expression types for templex.

An expression is either a static scalar (the source collapsed to a single
constant) or an ordered tuple of parts alternating operand and operator
positions:

- Constant: a literal or constant-table value: 1, "x", PI
- Reference: a path looked up in the context at resolve time: x.y.0, [a.b]
- Function: a call into the function table: sin(x), if(a, 1, 2)
- SubExpression: a parenthesised group: (x + 1)
- Operator: a binary operator, or one of the prefixes "!" and unary "-"
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Scalar = bool | int | float | str | None

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators, by their source symbol."""

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"
    POW_ALT = "**"
    # Comparison
    LE = "<="
    GE = ">="
    LT = "<"
    GT = ">"
    EQ = "=="
    NE = "!="
    # Logical
    AND = "&&"
    OR = "||"


class PrefixOp(StrEnum):
    """Prefix operators. Unary minus gets its own symbol to keep it apart from SUB."""

    NOT = "!"
    NEG = "n"


# Tightest first; every tier is left-associative.
PRECEDENCE: tuple[frozenset[BinaryOp], ...] = (
    frozenset({BinaryOp.POW, BinaryOp.POW_ALT}),
    frozenset({BinaryOp.MUL, BinaryOp.DIV, BinaryOp.MOD}),
    frozenset({BinaryOp.ADD, BinaryOp.SUB}),
    frozenset({BinaryOp.LT, BinaryOp.LE, BinaryOp.GT, BinaryOp.GE}),
    frozenset({BinaryOp.EQ, BinaryOp.NE}),
    frozenset({BinaryOp.AND}),
    frozenset({BinaryOp.OR}),
)

BINARY_SYMBOLS = frozenset(op.value for op in BinaryOp)
PREFIX_SYMBOLS = frozenset(op.value for op in PrefixOp)

# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------


class Constant(BaseModel):
    """A context-independent scalar."""

    value: Scalar = Field(description="The constant value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.value is None:
            return "null"
        if isinstance(self.value, str):
            return f'"{self.value}"'
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


class Reference(BaseModel):
    """
    A path resolved against the context.

    ``resolver`` is what the settings' reference factory returned for
    ``path``; it maps a context to a value.
    """

    path: str = Field(description="Raw reference path")
    resolver: Callable[[Any], Any] = Field(description="context -> value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"[{self.path}]"


class Function(BaseModel):
    """A call of ``fn`` (looked up by ``name``) with independent argument expressions."""

    name: str = Field(description="Function table key")
    fn: Callable[..., Any] = Field(description="The bound function")
    args: tuple[Expression, ...] = Field(default=(), description="Argument expressions")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.name}({args_str})"


class SubExpression(BaseModel):
    """A parenthesised group."""

    expression: Expression

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.expression})"


class Operator(BaseModel):
    """An operator symbol. ``prefix`` marks "!" and unary minus."""

    symbol: str
    prefix: bool = False

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.symbol == PrefixOp.NEG:
            return "-"
        return self.symbol


Part = Constant | Reference | Function | SubExpression | Operator
Operand = Constant | Reference | Function | SubExpression


class Expression(BaseModel):
    """
    A parsed expression.

    Exactly one of ``parts`` and ``resolved`` is meaningful: when ``parts`` is
    None the expression is static and always yields ``resolved``.
    """

    source: str = Field(description="Expression text as written")
    parts: tuple[Part, ...] | None = None
    resolved: Scalar = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_static(self) -> bool:
        """Context-independent: resolving never touches the context."""
        return self.parts is None

    def __str__(self) -> str:
        return self.source


# Rebuild models for recursive forward references
Function.model_rebuild()
SubExpression.model_rebuild()
Expression.model_rebuild()
