"""
Template settings: validated ``parse`` options merged over the built-ins.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from templex.core.errors import InvalidOptionError
from templex.core.expression_lang.builtins import BUILTIN_CONSTANTS, BUILTIN_FUNCTIONS
from templex.core.expression_lang.references import default_reference

DEFAULT_WRAP = '"'

ReferenceFactory = Callable[[str], Callable[[Any], Any]]


class Settings(BaseModel):
    """
    Everything a template needs besides its source.

    Attributes:
        wrap: Text placed around the source when a template is displayed
        reference: Factory turning a reference path into a resolver
        functions: Function table (built-ins plus user entries)
        constants: Constant table (built-ins plus user entries)
    """

    wrap: str = Field(default=DEFAULT_WRAP, min_length=1)
    reference: ReferenceFactory = Field(default=default_reference)
    functions: MappingProxyType = Field(default_factory=lambda: BUILTIN_FUNCTIONS)
    constants: MappingProxyType = Field(default_factory=lambda: BUILTIN_CONSTANTS)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def build_settings(
    *,
    wrap: str | None = None,
    reference: ReferenceFactory | None = None,
    functions: Mapping[str, Callable[..., Any]] | None = None,
    constants: Mapping[str, Any] | None = None,
) -> Settings:
    """Validate ``parse`` options into Settings.

    User functions and constants override built-ins of the same name.

    Raises:
        InvalidOptionError: If an option has the wrong type or is empty.
    """
    if wrap is not None and (not isinstance(wrap, str) or not wrap):
        raise InvalidOptionError("Option wrap must be a non-empty string")
    if reference is not None and not callable(reference):
        raise InvalidOptionError("Option reference must be a function")
    if functions is not None and not isinstance(functions, Mapping):
        raise InvalidOptionError("Option functions must be a mapping")
    if constants is not None and not isinstance(constants, Mapping):
        raise InvalidOptionError("Option constants must be a mapping")

    if wrap is None and reference is None and not functions and not constants:
        return default_settings()

    try:
        return Settings(
            wrap=wrap if wrap is not None else DEFAULT_WRAP,
            reference=reference or default_reference,
            functions=MappingProxyType({**BUILTIN_FUNCTIONS, **(functions or {})}),
            constants=MappingProxyType({**BUILTIN_CONSTANTS, **(constants or {})}),
        )
    except ValidationError as e:
        raise InvalidOptionError(str(e)) from e


@functools.lru_cache(maxsize=1)
def default_settings() -> Settings:
    """Shared settings for templates parsed without options."""
    return Settings()
