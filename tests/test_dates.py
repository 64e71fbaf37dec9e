"""Tests for finsight.dates pure functions."""

from datetime import date, datetime

import pytest

from finsight.dates import (
    add_months,
    days_between,
    default_budget_end,
    format_month_label,
    month_range,
    range_start_date,
)
from finsight.domain.models import Month


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(Month("2025-01"))

        assert since == "2025-01-01"
        assert until == "2025-01-31"
        assert label == "January 2025"

    def test_december_range(self) -> None:
        """Should end on the 31st of December."""
        since, until, label = month_range(Month("2025-12"))

        assert since == "2025-12-01"
        assert until == "2025-12-31"
        assert label == "December 2025"

    def test_february_non_leap_year(self) -> None:
        """Should handle February in non-leap year."""
        _, until, _ = month_range(Month("2025-02"))

        assert until == "2025-02-28"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        _, until, _ = month_range(Month("2024-02"))

        assert until == "2024-02-29"

    def test_invalid_month_format_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month format."""
        with pytest.raises(ValueError):
            month_range(Month("invalid"))

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range(Month("2025-13"))


class TestFormatMonthLabel:
    """Tests for format_month_label."""

    def test_short_label(self) -> None:
        """Should format as abbreviated month and year."""
        assert format_month_label(Month("2024-09")) == "Sep 2024"


class TestAddMonths:
    """Tests for add_months."""

    def test_forward_across_year(self) -> None:
        """Should roll over into the next year."""
        assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)

    def test_backward_across_year(self) -> None:
        """Should roll back into the previous year."""
        assert add_months(date(2025, 2, 10), -6) == date(2024, 8, 10)

    def test_clamps_to_month_end(self) -> None:
        """Should clamp the 31st to the last day of a shorter month."""
        assert add_months(date(2025, 3, 31), -1) == date(2025, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)


class TestRangeStartDate:
    """Tests for range_start_date."""

    @pytest.mark.parametrize(
        ("range_key", "expected"),
        [("3m", date(2025, 3, 18)), ("6m", date(2024, 12, 18)), ("1y", date(2024, 6, 18))],
    )
    def test_known_ranges(self, range_key: str, expected: date) -> None:
        """Should go back the requested number of months."""
        assert range_start_date(range_key, date(2025, 6, 18)) == expected

    def test_unknown_range_raises(self) -> None:
        """Should raise ValueError for unknown ranges."""
        with pytest.raises(ValueError, match="Unknown range"):
            range_start_date("2w", date(2025, 6, 18))


class TestBudgetDefaults:
    """Tests for default_budget_end."""

    def test_one_month_later(self) -> None:
        """Should end one month after the start."""
        assert default_budget_end(date(2025, 1, 31)) == date(2025, 2, 28)


class TestDaysBetween:
    """Tests for days_between."""

    def test_whole_days(self) -> None:
        """Should count whole days."""
        assert days_between(datetime(2025, 1, 1), datetime(2025, 1, 8)) == 7

    def test_partial_day_rounds_up(self) -> None:
        """Should round a partial day up."""
        assert days_between(datetime(2025, 1, 1, 23, 0), datetime(2025, 1, 2)) == 1

    def test_negative(self) -> None:
        """Should be negative when end is before start."""
        assert days_between(datetime(2025, 1, 8), datetime(2025, 1, 1)) == -7
