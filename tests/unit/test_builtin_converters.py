"""Tests for built-in converters."""

from datetime import date

import pytest

from question_pipeline.converters.builtin import DEFAULT_REGISTRY, to_range
from question_pipeline.core.exceptions import ConversionError
from question_pipeline.domain.models.answer_range import AnswerRange


class TestRangeConverter:
    """Tests for range expression parsing."""

    @pytest.mark.parametrize(
        "expression, first, last, exclude_end",
        [
            ("1-10", 1, 10, False),
            ("1..10", 1, 10, False),
            ("1...10", 1, 10, True),
            ("1,10", 1, 10, False),
            ("1 - 10", 1, 10, False),
            ("-5..5", -5, 5, False),
            ("0.5-2.5", 0.5, 2.5, False),
            ("a-z", "a", "z", False),
            ("a..e", "a", "e", False),
        ],
    )
    def test_parses_expressions(self, expression, first, last, exclude_end):
        result = to_range(expression, strict=True)

        assert result == AnswerRange(first=first, last=last, exclude_end=exclude_end)

    def test_single_number(self):
        """A single number becomes a one-value range."""
        assert to_range("5", strict=True).bounds == (5, 5)

    def test_mixed_int_and_float_bounds_are_floats(self):
        result = to_range("1-2.5", strict=True)

        assert result.bounds == (1.0, 2.5)
        assert isinstance(result.first, float)

    @pytest.mark.parametrize("expression", ["", "abc", "1-", "1..", "ab-cd", "1-2-3"])
    def test_strict_rejects_malformed(self, expression):
        with pytest.raises(ConversionError):
            to_range(expression, strict=True)

    def test_lenient_returns_input(self):
        """Without strict the unparseable value comes back unchanged."""
        assert to_range("not a range") == "not a range"

    def test_via_registry(self):
        result = DEFAULT_REGISTRY.invoke("range", "1-10", strict=True)

        assert isinstance(result, AnswerRange)


class TestScalarConverters:
    """Tests for integer, float, boolean, list, date conversions."""

    def test_integer(self):
        assert DEFAULT_REGISTRY.invoke("int", " 42 ") == 42
        assert DEFAULT_REGISTRY.invoke("integer", "7") == 7

    def test_integer_strict_failure(self):
        with pytest.raises(ConversionError) as exc_info:
            DEFAULT_REGISTRY.invoke("int", "forty", strict=True)

        assert exc_info.value.value == "forty"
        assert exc_info.value.target == "integer"

    def test_integer_lenient_failure(self):
        assert DEFAULT_REGISTRY.invoke("int", "forty") == "forty"

    def test_float(self):
        assert DEFAULT_REGISTRY.invoke("float", "2.5") == 2.5

    @pytest.mark.parametrize("text", ["y", "Yes", "TRUE", "1", "on", "t"])
    def test_boolean_true(self, text):
        assert DEFAULT_REGISTRY.invoke("bool", text) is True

    @pytest.mark.parametrize("text", ["n", "No", "false", "0", "off", "F"])
    def test_boolean_false(self, text):
        assert DEFAULT_REGISTRY.invoke("boolean", text) is False

    def test_boolean_strict_failure(self):
        with pytest.raises(ConversionError):
            DEFAULT_REGISTRY.invoke("bool", "maybe", strict=True)

    def test_list(self):
        assert DEFAULT_REGISTRY.invoke("list", "a, b ,,c") == ["a", "b", "c"]

    def test_date(self):
        assert DEFAULT_REGISTRY.invoke("date", "2024-02-29") == date(2024, 2, 29)

    def test_string(self):
        assert DEFAULT_REGISTRY.invoke("str", 12) == "12"


def test_default_registry_names():
    """The shared registry carries the base conversions."""
    for name in ["str", "int", "float", "bool", "list", "date", "range"]:
        assert DEFAULT_REGISTRY.has(name)
