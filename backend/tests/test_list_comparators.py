"""Tests for text list and number list comparators."""

import pytest

from eligibility.core.enums import NumberListOperation
from eligibility.core.exceptions import (
    MalformedScalarError,
    ShapeMismatchError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from eligibility.models.domain.value import Value
from eligibility.services.comparison import (
    NumberComparator,
    NumberListComparator,
    TextListComparator,
)
from eligibility.services.comparison.lists import SUM_PRECISION


class TestTextListComparator:
    def test_contains(self, absent_list, empty_list, number_list, text_list):
        target = Value.text("one")
        comparator = TextListComparator.CONTAINS

        assert comparator.evaluate(absent_list, target) is False
        assert comparator.evaluate(empty_list, target) is False
        assert comparator.evaluate(number_list, target) is False
        assert comparator.evaluate(text_list, target) is True

    def test_not_contains(self, absent_list, text_list):
        comparator = TextListComparator.NOT_CONTAINS

        assert comparator.evaluate(absent_list, Value.text("one")) is True
        assert comparator.evaluate(text_list, Value.text("one")) is False
        assert comparator.evaluate(text_list, Value.text("six")) is True

    def test_is_empty(self, absent_list, empty_list):
        one_absent_element = Value.sequence([Value.text(None)])
        ignored = Value.sequence(None)

        assert TextListComparator.IS_EMPTY.evaluate(absent_list, ignored) is True
        assert TextListComparator.IS_EMPTY.evaluate(empty_list, ignored) is True
        assert TextListComparator.IS_EMPTY.evaluate(one_absent_element, ignored) is False

        assert TextListComparator.IS_NOT_EMPTY.evaluate(absent_list, ignored) is False
        assert TextListComparator.IS_NOT_EMPTY.evaluate(empty_list, ignored) is False
        assert TextListComparator.IS_NOT_EMPTY.evaluate(one_absent_element, ignored) is True

    def test_rejects_non_list_subject(self):
        with pytest.raises(TypeMismatchError):
            TextListComparator.CONTAINS.evaluate(Value.text("one"), Value.text("one"))


class TestNumberListSum:
    def test_sum_equal(self, number_list):
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        assert comparator.evaluate(number_list, Value.number("15")) is True
        assert comparator.evaluate(number_list, Value.number("16")) is False

    def test_sum_of_decimals(self):
        hours = Value.sequence([Value.number("2.5"), Value.number("0.25")])
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        assert comparator.evaluate(hours, Value.number("2.75")) is True

    def test_sum_of_empty_list_is_zero(self, empty_list):
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        assert comparator.evaluate(empty_list, Value.number("0")) is True

    def test_sum_rejects_absent_list(self, absent_list):
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        with pytest.raises(TypeMismatchError):
            comparator.evaluate(absent_list, Value.number("0"))

    def test_sum_rejects_non_numeric_element(self):
        mixed = Value.sequence([Value.number("1"), Value.text("2")])
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        with pytest.raises(ShapeMismatchError) as exc_info:
            comparator.evaluate(mixed, Value.number("3"))

        assert exc_info.value.details["index"] == 1

    def test_sum_rejects_malformed_element(self):
        bad = Value.sequence([Value.number("1"), Value.number("two")])
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        with pytest.raises(MalformedScalarError):
            comparator.evaluate(bad, Value.number("3"))

    def test_sum_propagates_inner_target_error(self, number_list):
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        with pytest.raises(TypeMismatchError) as exc_info:
            comparator.evaluate(number_list, Value.text("15"))

        assert exc_info.value.details["side"] == "target"

    def test_sum_requires_inner_comparator(self):
        with pytest.raises(ValueError):
            NumberListComparator(NumberListOperation.SUM)

    def test_sum_is_exact_beyond_default_precision(self):
        large = "1" + "0" * 30 + "1"
        comparator = NumberListComparator.sum(NumberComparator.EQUAL)

        assert NumberComparator.EQUAL.evaluate(Value.number(large), Value.number(large)) is True
        assert comparator.evaluate(
            Value.sequence([Value.number(large), Value.number("0")]), Value.number(large)
        ) is True

    def test_sum_overflow_is_malformed(self):
        comparator = NumberListComparator.sum(NumberComparator.GREATER_THAN_OR_EQUAL)

        with pytest.raises(MalformedScalarError) as exc_info:
            comparator.evaluate(Value.sequence([Value.number("1E+1000000")]), Value.number("20"))

        assert exc_info.value.details["index"] == 0

    def test_sum_that_would_round_is_malformed(self):
        hours = Value.sequence([Value.number(f"1E+{SUM_PRECISION}"), Value.number("1")])
        comparator = NumberListComparator.sum(NumberComparator.GREATER_THAN)

        with pytest.raises(MalformedScalarError) as exc_info:
            comparator.evaluate(hours, Value.number("0"))

        assert exc_info.value.details["index"] == 1


class TestNumberListContains:
    def test_contains_is_structural(self, number_list):
        strings = Value.sequence([Value.text(c) for c in "abcde"])
        mixed = Value.sequence(
            [
                Value.number("1"),
                Value.text("b"),
                Value.number("3"),
                Value.text("d"),
                Value.number("5"),
            ]
        )
        comparator = NumberListComparator.contains()

        assert comparator.evaluate(number_list, Value.number("3")) is True
        assert comparator.evaluate(strings, Value.text("a")) is True
        assert comparator.evaluate(mixed, Value.text("b")) is True
        assert comparator.evaluate(mixed, Value.text("1")) is False
        assert comparator.evaluate(strings, Value.number("1")) is False
        assert comparator.evaluate(strings, Value.text("f")) is False

    def test_contains_rejects_absent_list(self, absent_list):
        with pytest.raises(TypeMismatchError):
            NumberListComparator.contains().evaluate(absent_list, Value.number("1"))

    def test_not_contains_is_unsupported(self, number_list):
        with pytest.raises(UnsupportedOperationError) as exc_info:
            NumberListComparator.not_contains().evaluate(number_list, Value.number("1"))

        assert exc_info.value.code == "UNSUPPORTED_OPERATION"
