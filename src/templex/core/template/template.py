"""
Template value and the ``parse`` entry point.

A Template is immutable once constructed: parsing happens entirely in the
constructor and ``resolve`` only reads the parsed segments, so one template
can be shared freely and resolved with any number of contexts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from templex.core.errors import ErrorContext, InvalidSourceError
from templex.core.expression_lang.evaluator import evaluate
from templex.core.ir import ExpressionSegment, Segment, TextSegment
from templex.core.settings import ReferenceFactory, Settings, build_settings, default_settings
from templex.core.template.codec import has_reserved
from templex.core.template.display import display
from templex.core.template.marker import TEMPLATE_MARKER
from templex.core.template.splitter import split_template

logger = logging.getLogger(__name__)


class Template:
    """A parsed template.

    Either static (``resolve`` always returns the same text) or a tuple of
    segments resolved on every call.
    """

    __templex_template__ = TEMPLATE_MARKER
    __slots__ = ("_source", "_settings", "_resolved", "_segments")

    def __init__(self, source: str, settings: Settings | None = None) -> None:
        if not isinstance(source, str):
            raise InvalidSourceError("Source must be a string")
        if has_reserved(source):
            raise InvalidSourceError(
                "Source cannot contain reserved characters", ErrorContext(source)
            )

        settings = settings or default_settings()
        resolved: str | None = source
        segments: tuple[Segment, ...] | None = None

        if "{" in source:
            parsed = split_template(source, settings)
            if any(isinstance(segment, ExpressionSegment) for segment in parsed):
                resolved = None
                segments = tuple(parsed)
            else:
                resolved = "".join(str(segment) for segment in parsed)

        object.__setattr__(self, "_source", source)
        object.__setattr__(self, "_settings", settings)
        object.__setattr__(self, "_resolved", resolved)
        object.__setattr__(self, "_segments", segments)

        logger.debug(
            f"Parsed template {source!r}: "
            f"{'static' if segments is None else f'{len(segments)} segments'}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Template is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Template is immutable")

    # Immutable values are shared rather than copied
    def __copy__(self) -> Template:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Template:
        return self

    @property
    def source(self) -> str:
        return self._source

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def segments(self) -> tuple[Segment, ...]:
        """Parsed segments; empty for a static template."""
        return self._segments or ()

    @property
    def is_static(self) -> bool:
        """True when the source holds no expression."""
        return self._segments is None

    def resolve(self, context: Any = None) -> Any:
        """Resolve run-time values and interpolate them into the template.

        Args:
            context: Value that references are looked up in. Defaults to an
                empty dict.

        Returns:
            The raw typed value when the template is a single expression
            (``"{x}"``), otherwise the interpolated text.
        """
        if self._segments is None:
            return self._resolved

        if context is None:
            context = {}

        if len(self._segments) == 1:
            return _resolve_segment(self._segments[0], context)

        return "".join(
            display(_resolve_segment(segment, context)) for segment in self._segments
        )

    def __str__(self) -> str:
        wrap = self._settings.wrap
        return wrap + self._source + wrap

    def __repr__(self) -> str:
        return f"Template({self._source!r})"


def _resolve_segment(segment: Segment, context: Any) -> Any:
    if isinstance(segment, TextSegment):
        return segment.text
    return evaluate(segment.expression, context)


def parse(
    source: str,
    *,
    wrap: str | None = None,
    reference: ReferenceFactory | None = None,
    functions: Mapping[str, Callable[..., Any]] | None = None,
    constants: Mapping[str, Any] | None = None,
) -> Template:
    """Parse a source string into a template.

    Args:
        source: Template source, e.g. "Hello {first + ' ' + last}".
        wrap: Text wrapped around the source when the template is displayed
            inside another one. Defaults to '"'.
        reference: Factory turning a reference path into a ``context -> value``
            resolver. Defaults to dotted path lookup.
        functions: Extra functions, overriding built-ins of the same name.
        constants: Extra constants (null, booleans, numbers or strings).

    Returns:
        The parsed template.

    Raises:
        InvalidOptionError: If an option is invalid.
        ParseError: If the source is invalid.
    """
    settings = build_settings(
        wrap=wrap, reference=reference, functions=functions, constants=constants
    )
    return Template(source, settings)
