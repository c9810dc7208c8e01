"""
Expression builder for templex.

Turns the token list from the tokenizer into a validated, immutable
Expression:

    1. a "-" that is first or follows another operator becomes unary minus
    2. a lone constant collapses into a static expression
    3. operands and operators must alternate ("!" and unary minus excepted)
    4. groups recurse, calls bind to the function table, references bind to
       the settings' reference factory
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from templex.core.errors import (
    EmptyExpressionError,
    ErrorContext,
    InvalidOperatorError,
    InvalidReferenceFactoryError,
    MisplacedOperatorError,
    MissingOperatorError,
    UnknownFunctionError,
)
from templex.core.expression_lang.tokenizer import (
    CONSTANT_KINDS,
    LITERALS,
    Token,
    TokenKind,
    tokenize,
)
from templex.core.ir import (
    BINARY_SYMBOLS,
    PREFIX_SYMBOLS,
    BinaryOp,
    Constant,
    Expression,
    Function,
    Operator,
    Part,
    PrefixOp,
    Reference,
    SubExpression,
)

if TYPE_CHECKING:
    from templex.core.settings import Settings

logger = logging.getLogger(__name__)


def parse_expression(source: str, settings: Settings) -> Expression:
    """Parse expression text into an Expression.

    Args:
        source: Expression text (e.g., "x + 3 / 3", "sin(cos(x))")
        settings: Reference factory, function and constant tables to bind

    Returns:
        Parsed expression; static when the text is a single constant.

    Raises:
        ParseError: Any subclass, if the expression is invalid.
    """
    tokens = tokenize(source, settings.constants)
    if not tokens:
        raise EmptyExpressionError("Expression must not be empty", ErrorContext(source))

    _mark_prefixes(tokens)

    if len(tokens) == 1 and tokens[0].kind in CONSTANT_KINDS:
        logger.debug(f"Static expression {source!r} -> {tokens[0].value!r}")
        return Expression(source=source, resolved=tokens[0].value)

    _validate_order(source, tokens)

    parts = tuple(_build_part(source, token, settings) for token in tokens)
    return Expression(source=source, parts=parts)


def _mark_prefixes(tokens: list[Token]) -> None:
    """Retag "-" as unary minus when it cannot be a subtraction."""
    for i, token in enumerate(tokens):
        if token.kind != TokenKind.OPERATOR or token.value != BinaryOp.SUB:
            continue
        if i and tokens[i - 1].kind != TokenKind.OPERATOR:
            continue
        tokens[i] = Token(TokenKind.OPERATOR, PrefixOp.NEG.value, token.pos)


def _validate_order(source: str, tokens: list[Token]) -> None:
    """Operands and binary operators must alternate, starting and ending on an operand."""
    expect_operator = False
    for token in tokens:
        context = ErrorContext(source, token.pos)

        if token.kind == TokenKind.OPERATOR:
            if token.value in PREFIX_SYMBOLS:
                continue
            if token.value not in BINARY_SYMBOLS:
                raise InvalidOperatorError(token.value, context)
            if not expect_operator:
                raise MisplacedOperatorError(
                    "Expression contains an operator in an invalid position", context
                )
        elif expect_operator:
            raise MissingOperatorError("Expression missing expected operator", context)

        expect_operator = not expect_operator

    if not expect_operator:
        raise MisplacedOperatorError(
            "Expression ends with an operator", ErrorContext(source, tokens[-1].pos)
        )


def _build_part(source: str, token: Token, settings: Settings) -> Part:
    if token.kind in CONSTANT_KINDS:
        return Constant(value=token.value)

    if token.kind == TokenKind.OPERATOR:
        return Operator(symbol=token.value, prefix=token.value in PREFIX_SYMBOLS)

    if token.kind == TokenKind.GROUP:
        return SubExpression(expression=parse_expression(token.value, settings))

    if token.kind == TokenKind.CALL:
        # Call tokens always carry the function name
        return parse_call(
            cast(str, token.name), token.value, settings, ErrorContext(source, token.pos)
        )

    resolver = settings.reference(token.value)
    if not callable(resolver):
        raise InvalidReferenceFactoryError(
            "Option reference must return a function", ErrorContext(source, token.pos)
        )
    return Reference(path=token.value, resolver=resolver)


def parse_call(
    name: str, raw: str, settings: Settings, context: ErrorContext | None = None
) -> Function:
    """Bind a call to the function table and parse each argument.

    Args:
        name: Function table key.
        raw: Text between the call's parentheses.
        settings: Settings the arguments are parsed with.
        context: Location of the call, for error messages.

    Raises:
        UnknownFunctionError: If ``name`` is not a callable table entry.
        EmptyExpressionError: If an argument is blank, as in ``max(1,,2)``.
    """
    fn = settings.functions.get(name)
    if not callable(fn):
        raise UnknownFunctionError(name, context)

    args = tuple(parse_expression(arg, settings) for arg in split_arguments(raw))
    return Function(name=name, fn=fn, args=args)


def split_arguments(raw: str) -> list[str]:
    """Split call text on top-level commas.

    Commas inside nested parentheses, quotes and brackets do not split:

        split_arguments('1, max(2, 3), ","') == ['1', ' max(2, 3)', ' ","']
    """
    if not raw.strip():
        return []

    args: list[str] = []
    current: list[str] = []
    depth = 0
    literal: str | None = None

    for c in raw:
        if literal:
            current.append(c)
            if c == literal:
                literal = None
            continue

        if c in LITERALS:
            literal = LITERALS[c]
        elif c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
        elif c == "," and not depth:
            args.append("".join(current))
            current = []
            continue

        current.append(c)

    args.append("".join(current))
    return args
