"""
Tests for string coercion and display formatting (pure functions).
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any, Optional

import pytest

from typerig.coercion import coerce, format_value, is_optional, unwrap_optional
from typerig.errors import CoercionError


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Opaque:
    pass


class TestUnwrapOptional:

    def test_optional(self):
        assert unwrap_optional(Optional[int]) is int

    def test_pipe_union(self):
        assert unwrap_optional(int | None) is int

    def test_plain_type_unchanged(self):
        assert unwrap_optional(str) is str

    def test_is_optional(self):
        assert is_optional(Optional[date]) is True
        assert is_optional(int | None) is True
        assert is_optional(int) is False
        assert is_optional(int | str) is False


class TestCoerce:

    def test_int(self):
        assert coerce("42", int) == 42

    def test_int_with_whitespace(self):
        assert coerce(" 7 ", int) == 7

    def test_not_a_number(self):
        with pytest.raises(CoercionError):
            coerce("notanumber", int)

    def test_float(self):
        assert coerce("3.5", float) == 3.5

    def test_decimal(self):
        assert coerce("1.50", Decimal) == Decimal("1.50")

    @pytest.mark.parametrize("raw,expected", [("true", True), ("False", False)])
    def test_bool(self, raw, expected):
        assert coerce(raw, bool) is expected

    def test_date(self):
        assert coerce("2024-05-01", date) == date(2024, 5, 1)

    def test_datetime(self):
        assert coerce("2024-05-01T10:30:00", datetime) == datetime(2024, 5, 1, 10, 30)

    def test_nullable_unwrapped(self):
        assert coerce("12", int | None) == 12
        assert coerce("12", Optional[int]) == 12

    def test_null_literal_for_optional(self):
        assert coerce("null", Optional[int]) is None

    def test_null_literal_for_required(self):
        with pytest.raises(CoercionError):
            coerce("null", int)

    def test_string_and_any_pass_through(self):
        assert coerce("anything at all", str) == "anything at all"
        assert coerce("anything", Any) == "anything"

    def test_enum_by_name_or_value(self):
        assert coerce("RED", Color) is Color.RED
        assert coerce("green", Color) is Color.GREEN
        assert coerce("2", Level) is Level.HIGH

    def test_enum_unknown_member(self):
        with pytest.raises(CoercionError):
            coerce("BLUE", Color)

    def test_collection_not_convertible(self):
        with pytest.raises(CoercionError):
            coerce("1,2,3", list[int])

    def test_unsupported_type(self):
        with pytest.raises(CoercionError):
            coerce("x", Opaque)


class TestFormatValue:

    def test_none(self):
        assert format_value(None) == "null"

    def test_string_is_quoted(self):
        assert format_value("abc") == '"abc"'

    def test_int_not_quoted(self):
        assert format_value(42) == "42"

    def test_bool(self):
        assert format_value(True) == "True"

    def test_enum_member_name(self):
        assert format_value(Color.RED) == "RED"
