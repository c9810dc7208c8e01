"""
Template segment types.

A parsed template is an ordered tuple of segments: literal text runs and
embedded expressions, in output order.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from templex.core.ir.expressions import Expression


class TextSegment(BaseModel):
    """Literal text, already unescaped."""

    text: str = Field(description="Literal text")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class ExpressionSegment(BaseModel):
    """An embedded ``{...}`` expression."""

    expression: Expression

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{{{self.expression}}}"


Segment = TextSegment | ExpressionSegment
