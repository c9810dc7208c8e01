"""Tests for the value display serializer."""

from __future__ import annotations

import math
from collections import OrderedDict
from types import MappingProxyType

import pytest

from templex import parse
from templex.core.template.display import CIRCULAR, display, format_number


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (1, "1"),
            (2.0, "2"),
            (-3.0, "-3"),
            (1.5, "1.5"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            (math.nan, "NaN"),
        ],
    )
    def test_numbers(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestScalars:
    def test_null_and_booleans(self) -> None:
        assert display(None) == "null"
        assert display(True) == "true"
        assert display(False) == "false"

    def test_text(self) -> None:
        assert display("x") == "x"
        assert display("") == ""


class TestCallables:
    def test_function(self) -> None:
        def greet() -> str:
            return "hi"

        assert display(greet) == "function greet() {}"

    def test_class(self) -> None:
        class Point:
            pass

        assert display(Point) == "class Point {}"


class TestContainers:
    def test_list(self) -> None:
        assert display([1, 2, 3]) == "1, 2, 3"
        assert display([]) == ""

    def test_nested_list(self) -> None:
        assert display([1, [2, 3]]) == "1, 2, 3"

    def test_dict(self) -> None:
        assert display({"x": 1}) == "{ x: 1 }"
        assert display({"x": 1, "y": "z"}) == "{ x: 1, y: z }"
        assert display({}) == "{}"

    def test_mapping(self) -> None:
        assert display(MappingProxyType({"x": 1})) == "{ x => 1 }"

    def test_ordered_dict_is_a_plain_object(self) -> None:
        assert display(OrderedDict(x=1)) == "{ x: 1 }"

    def test_set(self) -> None:
        assert display({1}) == "1"

    def test_object_attributes(self) -> None:
        class Item:
            def __init__(self) -> None:
                self.x = 1

        assert display(Item()) == "{ x: 1 }"

    def test_object_with_str(self) -> None:
        class Item:
            def __str__(self) -> str:
                return "item"

        assert display(Item()) == "item"


class TestCircular:
    def test_self_reference(self) -> None:
        value: list = [1]
        value.append(value)
        assert display(value) == f"1, {CIRCULAR}"

    def test_dict_self_reference(self) -> None:
        value: dict = {"x": 1}
        value["self"] = value
        assert display(value) == f"{{ x: 1, self: {CIRCULAR} }}"

    def test_repeated_object(self) -> None:
        shared = {"x": 1}
        assert display([shared, shared]) == f"{{ x: 1 }}, {CIRCULAR}"

    def test_in_template(self) -> None:
        value: dict = {"x": 1}
        value["self"] = value
        template = parse("Value: {x}")
        assert template.resolve({"x": value}) == f"Value: {{ x: 1, self: {CIRCULAR} }}"


class TestTemplates:
    def test_template_uses_wrap(self) -> None:
        assert display(parse("{x}")) == '"{x}"'
        assert display(parse("{x}", wrap="`")) == "`{x}`"
