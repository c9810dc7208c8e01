"""
Error types for templex template parsing and option validation.
"""

from dataclasses import dataclass
from typing import Optional


class TemplexError(Exception):
    """Base exception for all templex errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class InvalidOptionError(TemplexError):
    """
    Raised when ``parse`` receives an invalid option.

    Examples:
    - Empty or non-string ``wrap``
    - Non-callable ``reference`` factory
    """

    pass


class ParseError(TemplexError):
    """
    Raised when a template source cannot be parsed.

    Nothing is constructed when this is raised; a template is either fully
    parsed or not at all.
    """

    pass


class InvalidSourceError(ParseError):
    """Source is not a string or contains reserved characters."""

    pass


class UnbalancedParenthesesError(ParseError):
    """An opened parenthesis is never closed, or a stray ")" appears."""

    pass


class EmptyExpressionError(ParseError):
    """A ``{}`` placeholder, group or function argument holds no expression."""

    pass


class UnclosedLiteralError(ParseError):
    """A quoted string or bracketed reference is not terminated."""

    pass


class InvalidOperatorError(ParseError):
    """An operator character run does not form a known operator."""

    def __init__(self, operator: str, context: Optional["ErrorContext"] = None):
        self.operator = operator
        super().__init__(f"Expression contains invalid operator {operator}", context)


class MisplacedOperatorError(ParseError):
    """An operator appears where an operand was expected."""

    pass


class MissingOperatorError(ParseError):
    """Two operands appear next to each other."""

    pass


class UnknownFunctionError(ParseError):
    """A call names something that is not a function in the function table."""

    def __init__(self, name: str, context: Optional["ErrorContext"] = None):
        self.name = name
        super().__init__(f"{name} must be a function", context)


class InvalidReferenceFactoryError(ParseError):
    """The reference factory returned something that is not callable."""

    pass


class InvalidConstantTypeError(ParseError):
    """A constant table entry is not null, a boolean, a number or a string."""

    def __init__(self, name: str, context: Optional["ErrorContext"] = None):
        self.name = name
        super().__init__(f"{name} must be a boolean, number, string or null", context)


class ExpressionEvalError(TemplexError):
    """An operator symbol or expression part the evaluator does not know.

    Parsed templates never raise this; it guards direct calls to the
    evaluator with hand-built parts or symbols.
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of a parse error.

    Attributes:
        source: The expression or template text being parsed
        position: Optional 0-indexed character offset into ``source``
    """

    source: str
    position: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: 'in "x + (y" at position 4'
        """
        location = f"in {self.source!r}"
        if self.position is None:
            return location

        marker = " " * (self.position + 4) + "^"
        return f"{location} at position {self.position}\n{marker}"
