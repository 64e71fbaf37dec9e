"""Display helpers shared by the command handlers."""

import pandas as pd

from finsight.config import get_setting


def currency_symbol() -> str:
    """Configured currency symbol (defaults to ₹)."""
    return str(get_setting("currency_symbol"))


def format_money(amount: float, symbol: str | None = None, decimals: int = 0) -> str:
    """Format an amount for display.

    Args:
        amount: Amount in major units.
        symbol: Currency symbol. If None, uses the configured one.
        decimals: Digits after the decimal point.

    Returns:
        Formatted string (e.g., "₹1,234" or "-₹12.50").
    """
    if symbol is None:
        symbol = currency_symbol()
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"


def format_percentage(value: float) -> str:
    """Format a percentage with one decimal (e.g., "42.5%")."""
    return f"{value:.1f}%"


def normalize_date(raw_date: str) -> str:
    """Normalize a user-typed date to ISO format (YYYY-MM-DD).

    ISO input is read year-month-day as written. Anything else is parsed
    day first, so 05/01/2025 is 5 January.

    Args:
        raw_date: Date string in ISO, DD/MM/YYYY or similar format.

    Returns:
        Normalized date in YYYY-MM-DD format.

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        parsed_date = pd.to_datetime(raw_date, format="ISO8601")
    except (ValueError, pd.errors.ParserError):
        try:
            parsed_date = pd.to_datetime(raw_date, dayfirst=True)
        except (ValueError, pd.errors.ParserError) as e:
            raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed_date):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed_date.strftime("%Y-%m-%d")


def describe_days_remaining(days: int | None) -> str:
    """Human-readable days-until-target text."""
    if days is None:
        return "No target date"
    if days > 0:
        return f"{days} days left"
    if days == 0:
        return "Target date is today"
    return f"{abs(days)} days overdue"
