"""
Template splitter: cuts a source into literal text and ``{...}`` expressions.

Works on the encoded source (see ``codec``), so every brace seen here is a
real delimiter. A ``{`` without a matching ``}`` is kept as literal text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from templex.core.errors import EmptyExpressionError, ErrorContext
from templex.core.expression_lang.parser import parse_expression
from templex.core.ir import ExpressionSegment, Segment, TextSegment
from templex.core.template.codec import decode, encode

if TYPE_CHECKING:
    from templex.core.settings import Settings


def split_braces(encoded: str) -> list[str]:
    """Split on every ``{``: a head chunk followed by one chunk per brace."""
    return encoded.split("{")


def split_template(source: str, settings: Settings) -> list[Segment]:
    """Parse a template source into segments.

    Args:
        source: Raw template source.
        settings: Settings used to parse each expression.

    Returns:
        Segments in output order. Adjacent literal chunks are not merged.

    Raises:
        EmptyExpressionError: On a ``{}`` placeholder.
        ParseError: Any other expression parse failure.
    """
    head, *rest = split_braces(encode(source))

    segments: list[Segment] = []
    if head:
        segments.append(TextSegment(text=decode(head)))

    for chunk in rest:
        end = chunk.find("}")

        # Ignore mismatching braces
        if end == -1:
            segments.append(TextSegment(text="{" + decode(chunk)))
            continue

        expr = chunk[:end]
        if not expr:
            raise EmptyExpressionError("Expression must not be empty", ErrorContext(source))

        segments.append(ExpressionSegment(expression=parse_expression(decode(expr), settings)))

        after = chunk[end + 1 :]
        if after:
            segments.append(TextSegment(text=decode(after)))

    return segments
