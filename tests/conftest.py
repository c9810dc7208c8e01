"""Shared pytest fixtures for templex tests."""

from typing import Any

import pytest


@pytest.fixture
def wildcard_context() -> dict[str, Any]:
    """Return a context with a list of records for wildcard references."""
    return {"x": [{"y": 1}, {"y": 2}, {"y": 3}]}


@pytest.fixture
def person_context() -> dict[str, Any]:
    """Return a context with a first and last name."""
    return {"first": "John", "last": "Doe"}
