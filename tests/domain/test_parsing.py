"""Tests for finsight.domain.parsing."""

import pytest

from finsight.domain.parsing import parse_decimal


class TestParseDecimal:
    """Tests for parse_decimal."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1000000", 1000000.0),
            (" 9.5 ", 9.5),
            ("1,00,000", 100000.0),
            ("-3", -3.0),
            (12, 12.0),
            (2.5, 2.5),
        ],
    )
    def test_parses_numbers(self, raw: str | float, expected: float) -> None:
        """Should parse numeric text and pass numbers through."""
        assert parse_decimal(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "12abc", "nan", "inf", "-inf", None, float("nan")])
    def test_bad_input_parses_to_zero(self, raw: str | float | None) -> None:
        """Should return 0.0 for anything that isn't a finite number."""
        assert parse_decimal(raw) == 0.0
