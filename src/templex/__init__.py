"""
templex - string templates with embedded arithmetic, logical and reference
expressions.

    >>> import templex
    >>> template = templex.parse("My full name is {first + ' ' + last}")
    >>> template.resolve({"first": "John", "last": "Doe"})
    'My full name is John Doe'
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import (
    EmptyExpressionError,
    ErrorContext,
    ExpressionEvalError,
    InvalidConstantTypeError,
    InvalidOperatorError,
    InvalidOptionError,
    InvalidReferenceFactoryError,
    InvalidSourceError,
    MisplacedOperatorError,
    MissingOperatorError,
    ParseError,
    TemplexError,
    UnbalancedParenthesesError,
    UnclosedLiteralError,
    UnknownFunctionError,
)
from .core.template.marker import is_template
from .core.template.template import Template, parse

__version__ = get_version()

__all__ = [
    "__version__",
    "parse",
    "is_template",
    "Template",
    "TemplexError",
    "ErrorContext",
    "InvalidOptionError",
    "ParseError",
    "InvalidSourceError",
    "UnbalancedParenthesesError",
    "EmptyExpressionError",
    "UnclosedLiteralError",
    "InvalidOperatorError",
    "MisplacedOperatorError",
    "MissingOperatorError",
    "UnknownFunctionError",
    "InvalidReferenceFactoryError",
    "InvalidConstantTypeError",
    "ExpressionEvalError",
]
