"""Date utilities for finsight.

Pure functions for date range calculations and formatting. Callers pass in
"today" so nothing here reads the clock.
"""

import calendar
import math
from datetime import date, datetime, timedelta

from finsight.domain.models import Month

ANALYTICS_RANGES = ("3m", "6m", "1y")


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: Last day of month (YYYY-MM-DD), inclusive
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    last_day = calendar.monthrange(dt.year, dt.month)[1]
    since = dt.strftime("%Y-%m-01")
    until = dt.replace(day=last_day).strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def format_month_label(month: Month) -> str:
    """Format a YYYY-MM key as a short label (e.g., "Jan 2025").

    Raises:
        ValueError: If month is not in YYYY-MM format.
    """
    return datetime.strptime(month, "%Y-%m").strftime("%b %Y")


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month.

    Args:
        day: Starting date.
        months: Months to add (negative to go back).

    Returns:
        Shifted date (e.g., 2025-03-31 minus 1 month -> 2025-02-28).
    """
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def range_start_date(range_key: str, today: date) -> date:
    """First date included in an analytics look-back window.

    Args:
        range_key: "3m", "6m" or "1y".
        today: Reference date.

    Returns:
        Start date of the window.

    Raises:
        ValueError: If range_key is unknown.
    """
    if range_key == "3m":
        return add_months(today, -3)
    if range_key == "6m":
        return add_months(today, -6)
    if range_key == "1y":
        return add_months(today, -12)
    raise ValueError(f"Unknown range '{range_key}'. Use one of: {', '.join(ANALYTICS_RANGES)}")


def default_budget_end(start: date) -> date:
    """Default end date for a new budget: one month after it starts."""
    return add_months(start, 1)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounding partial days up.

    Args:
        start: Earlier moment (e.g., now).
        end: Later moment (e.g., midnight on a target date).

    Returns:
        Ceiling of the difference in days. Negative when end is before start.
    """
    return math.ceil((end - start) / timedelta(days=1))
