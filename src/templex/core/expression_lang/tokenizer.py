"""
Tokenizer for templex expressions.

Single left-to-right scan that cuts an expression into constants,
references, operators, parenthesised groups and function calls. Groups and
call arguments are kept as raw text; the parser recurses into them.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum, auto
from typing import Any

from templex.core.errors import (
    ErrorContext,
    InvalidConstantTypeError,
    UnbalancedParenthesesError,
    UnclosedLiteralError,
)
from templex.core.expression_lang.coercion import is_scalar
from templex.core.ir import BINARY_SYMBOLS


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Constants
    NUMBER = auto()
    STRING = auto()
    CONSTANT = auto()

    REFERENCE = auto()
    OPERATOR = auto()

    # Raw parenthesised text
    GROUP = auto()
    CALL = auto()


CONSTANT_KINDS = frozenset({TokenKind.NUMBER, TokenKind.STRING, TokenKind.CONSTANT})


class Token:
    """A single token from the expression tokenizer.

    ``name`` is only set on CALL tokens, where ``value`` holds the raw
    argument text.
    """

    __slots__ = ("kind", "value", "pos", "name")

    def __init__(self, kind: TokenKind, value: Any, pos: int, name: str | None = None) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.name = name

    def __repr__(self) -> str:
        if self.name is not None:
            return f"Token({self.kind}, {self.name!r}, {self.value!r}, pos={self.pos})"
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


OPERATOR_CHARS = frozenset("!^*/%+-<=>&|")

# Opening character -> closing character
LITERALS: dict[str, str] = {
    '"': '"',
    "'": "'",
    "[": "]",
}

_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?")


class _Scanner:
    """Scan state for one expression."""

    def __init__(self, source: str, constants: Mapping[str, Any]) -> None:
        self.source = source
        self.constants = constants
        self.tokens: list[Token] = []
        self.current: list[str] = []
        self.start = 0

        # Parenthesis depth; inside a group everything is raw text
        self.depth = 0
        self.group_start = 0
        self.group_literal: str | None = None

        # Closing character of the open quote/bracket literal
        self.literal: str | None = None

    def error_context(self, pos: int | None = None) -> ErrorContext:
        return ErrorContext(self.source, pos)

    def run(self) -> list[Token]:
        for i, c in enumerate(self.source):
            if self.depth:
                self._scan_group(c, i)
                continue

            if self.literal:
                if c == self.literal:
                    self._flush_literal()
                    continue
                self.current.append(c)
                continue

            if c == ")":
                raise UnbalancedParenthesesError("Parentheses do not match", self.error_context(i))

            if c in LITERALS:
                self._flush()
                self.literal = LITERALS[c]
                self.start = i
                continue

            if c in OPERATOR_CHARS:
                self._flush()
                self._push_operator(c, i)
                continue

            if c.isspace():
                self._flush()
                continue

            if c == "(":
                self._flush()
                self.depth = 1
                self.group_start = i
                continue

            if not self.current:
                self.start = i
            self.current.append(c)

        if self.depth:
            raise UnbalancedParenthesesError(
                "Parentheses do not match", self.error_context(self.group_start)
            )
        if self.literal:
            raise UnclosedLiteralError(
                f"Literal is missing closing {self.literal}", self.error_context(self.start)
            )

        self._flush()
        return self.tokens

    def _scan_group(self, c: str, i: int) -> None:
        """Accumulate raw group text, tracking depth outside of literals."""
        if self.group_literal:
            if c == self.group_literal:
                self.group_literal = None
            self.current.append(c)
            return

        if c in LITERALS:
            self.group_literal = LITERALS[c]
        elif c == "(":
            self.depth += 1
        elif c == ")":
            self.depth -= 1
            if not self.depth:
                self._close_group()
                return

        self.current.append(c)

    def _close_group(self) -> None:
        """A reference directly before a group turns into a function call."""
        raw = "".join(self.current)
        self.current = []

        last = self.tokens[-1] if self.tokens else None
        if last is not None and last.kind == TokenKind.REFERENCE:
            self.tokens[-1] = Token(TokenKind.CALL, raw, last.pos, name=last.value)
            return

        self.tokens.append(Token(TokenKind.GROUP, raw, self.group_start))

    def _flush_literal(self) -> None:
        text = "".join(self.current)
        self.current = []
        kind = TokenKind.REFERENCE if self.literal == "]" else TokenKind.STRING
        self.literal = None
        self.tokens.append(Token(kind, text, self.start))

    def _push_operator(self, c: str, i: int) -> None:
        """Emit an operator character, merging into two-character operators."""
        last = self.tokens[-1] if self.tokens else None
        if (
            last is not None
            and last.kind == TokenKind.OPERATOR
            and last.value + c in BINARY_SYMBOLS
        ):
            self.tokens[-1] = Token(TokenKind.OPERATOR, last.value + c, last.pos)
            return

        self.tokens.append(Token(TokenKind.OPERATOR, c, i))

    def _flush(self) -> None:
        """Classify the accumulated bare token: number, constant or reference."""
        if not self.current:
            return

        text = "".join(self.current)
        self.current = []

        m = _NUMBER_RE.fullmatch(text)
        if m:
            value = float(text) if m.group(1) else int(text)
            self.tokens.append(Token(TokenKind.NUMBER, value, self.start))
            return

        if text in self.constants:
            constant = self.constants[text]
            if not is_scalar(constant):
                raise InvalidConstantTypeError(text, self.error_context(self.start))
            self.tokens.append(Token(TokenKind.CONSTANT, constant, self.start))
            return

        self.tokens.append(Token(TokenKind.REFERENCE, text, self.start))


def tokenize(source: str, constants: Mapping[str, Any] | None = None) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Args:
        source: Expression text, without the surrounding braces.
        constants: Constant table; bare words found here become constants.

    Returns:
        Tokens in source order. Unary minus is not yet told apart from
        subtraction; the parser does that.

    Raises:
        UnbalancedParenthesesError: On an unmatched "(" or ")".
        UnclosedLiteralError: On an unterminated quote or bracket.
        InvalidConstantTypeError: If a used constant is not a scalar.
    """
    return _Scanner(source, constants or {}).run()
