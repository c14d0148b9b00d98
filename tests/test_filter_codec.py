"""Unit tests for the tilde-delimited filter grammar."""

from __future__ import annotations

import pytest

from roadquery_core.errors import InvalidFilterEncoding, LogicError
from roadquery_core.fields.catalog import FieldType
from roadquery_core.filters.codec import FilterCodec, parse_filters
from roadquery_core.filters.values import BooleanFilter, IntegerFilter, StringFilter


@pytest.fixture
def codec() -> FilterCodec:
    return FilterCodec()


# ---------------------------------------------------------------------------
# Integer filters
# ---------------------------------------------------------------------------


class TestIntegerDecoding:
    def test_min_and_max(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.INTEGER, "≥10~≤200") == IntegerFilter(10, 200, False)

    def test_min_only_with_unknown(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.INTEGER, "≥5~unknown") == IntegerFilter(5, None, True)

    def test_unknown_alone_is_neutralized(self, codec: FilterCodec) -> None:
        value = codec.decode(FieldType.INTEGER, "unknown")
        assert value == IntegerFilter(None, None, False)
        assert value.include_unknown is False

    def test_empty_value(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.INTEGER, "") == IntegerFilter()

    @pytest.mark.parametrize("token", ["≥abc", "≥-1", "≥ 5", "≥5 ", "≥05", "≥1.5", "≥1073741825"])
    def test_malformed_bounds_are_ignored(self, codec: FilterCodec, token: str) -> None:
        assert codec.decode(FieldType.INTEGER, f"{token}~≤7") == IntegerFilter(None, 7, False)

    def test_upper_limit_is_accepted(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.INTEGER, "≤1073741824").maximum == 2 ** 30

    def test_zero_is_accepted(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.INTEGER, "≥0").minimum == 0

    def test_later_token_wins(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.INTEGER, "≥1~≥3").minimum == 3

    def test_non_ascii_digits_are_rejected(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.INTEGER, "≥٣").minimum is None

    def test_accepts_type_name(self, codec: FilterCodec) -> None:
        assert codec.decode("integer", "≥1") == IntegerFilter(1, None, False)


# ---------------------------------------------------------------------------
# Boolean filters
# ---------------------------------------------------------------------------


class TestBooleanDecoding:
    def test_yes(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.BOOLEAN, "1") == BooleanFilter(True, False)

    def test_no_with_unknown(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.BOOLEAN, "0~unknown") == BooleanFilter(False, True)

    def test_unknown_without_value_is_neutralized(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.BOOLEAN, "unknown") == BooleanFilter(None, False)

    def test_other_tokens_are_ignored(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.BOOLEAN, "yes~true~2") == BooleanFilter(None, False)


# ---------------------------------------------------------------------------
# String filters
# ---------------------------------------------------------------------------


class TestStringDecoding:
    def test_multiple_values(self, codec: FilterCodec) -> None:
        value = codec.decode(FieldType.STRING, "Greyhawk~Forgotten Realms")
        assert value == StringFilter(("Greyhawk", "Forgotten Realms"), False)

    def test_escaped_separator(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "a~~b~c").values == ("a~b", "c")

    def test_unknown_suffix(self, codec: FilterCodec) -> None:
        value = codec.decode(FieldType.STRING, "a~~b~c~unknown")
        assert value == StringFilter(("a~b", "c"), True)

    def test_unknown_suffix_alone(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "~unknown") == StringFilter((), True)

    def test_unknown_in_options_slot(self, codec: FilterCodec) -> None:
        value = codec.decode(FieldType.STRING, "Forgotten Realms~unknown~")
        assert value == StringFilter(("Forgotten Realms",), True)

    def test_options_slot_alone(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "unknown~") == StringFilter((), True)

    def test_escaped_values_before_options_slot(self, codec: FilterCodec) -> None:
        value = codec.decode(FieldType.STRING, "a~~b~c~unknown~")
        assert value == StringFilter(("a~b", "c"), True)

    def test_other_options_are_dropped(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "a~b~") == StringFilter(("a",), False)

    def test_trailing_escaped_separator_is_not_an_options_slot(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "a~~").values == ("a~",)

    def test_escaped_unknown_is_a_value(self, codec: FilterCodec) -> None:
        value = codec.decode(FieldType.STRING, "a~~unknown")
        assert value == StringFilter(("a~unknown",), False)

    def test_other_suffix_is_a_value(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "a~b").values == ("a", "b")

    def test_empty_values_are_dropped(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "").values == ()

    def test_duplicates_and_order_are_kept(self, codec: FilterCodec) -> None:
        assert codec.decode(FieldType.STRING, "b~a~b").values == ("b", "a", "b")


class TestUnsupportedTypes:
    @pytest.mark.parametrize("field_type", [FieldType.TEXT, FieldType.URL, "float"])
    def test_raises_invalid_filter_encoding(self, codec: FilterCodec, field_type: object) -> None:
        with pytest.raises(InvalidFilterEncoding):
            codec.decode(field_type, "x")

    def test_is_a_logic_error(self, codec: FilterCodec) -> None:
        with pytest.raises(LogicError):
            codec.decode("date", "x")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class TestEncoding:
    def test_string_values_are_escaped(self, codec: FilterCodec) -> None:
        assert codec.encode(StringFilter(("a~b", "c"), False)) == "a~~b~c"

    def test_unknown_goes_in_options_slot(self, codec: FilterCodec) -> None:
        assert codec.encode(StringFilter(("a~b", "c"), True)) == "a~~b~c~unknown~"
        assert codec.encode(StringFilter((), True)) == "unknown~"

    def test_string_round_trip(self, codec: FilterCodec) -> None:
        value = StringFilter(("a~b", "c"), True)
        assert codec.decode(FieldType.STRING, codec.encode(value)) == value

    @pytest.mark.parametrize("value", [
        IntegerFilter(3, None, False),
        IntegerFilter(None, 40, True),
        IntegerFilter(0, 2 ** 30, True),
    ])
    def test_integer_round_trip(self, codec: FilterCodec, value: IntegerFilter) -> None:
        assert codec.decode(FieldType.INTEGER, codec.encode(value)) == value

    def test_integer_encoding(self, codec: FilterCodec) -> None:
        assert codec.encode(IntegerFilter(1, 9, True)) == "≥1~≤9~unknown"

    def test_boolean_encoding(self, codec: FilterCodec) -> None:
        assert codec.encode(BooleanFilter(False, True)) == "0~unknown"


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------


class TestParseFilters:
    def test_decodes_every_filterable_field(self, catalog) -> None:
        filters = parse_filters({"numPages": "≥10", "setting": "Eberron"}, catalog.list_filterable_fields())
        assert filters == {
            "numPages": IntegerFilter(10, None, False),
            "soloable": BooleanFilter(None, False),
            "setting": StringFilter(("Eberron",), False),
        }

    def test_ignores_parameters_of_other_fields(self, catalog) -> None:
        filters = parse_filters({"title": "x", "q": "y"}, catalog.list_filterable_fields())
        assert set(filters) == {"numPages", "soloable", "setting"}
