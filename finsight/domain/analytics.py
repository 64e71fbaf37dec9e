"""Pure functions for transaction aggregation and analytics.

This module contains the functional core for the analytics views:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in major units (Amount type). Input records are
never mutated.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from finsight.dates import format_month_label
from finsight.domain.models import (
    DEFAULT_CATEGORY_COLOR,
    UNCATEGORIZED,
    Amount,
    CategoryName,
    Month,
    TransactionType,
)

VIEW_TYPES: dict[str, frozenset[str]] = {
    "expenses": frozenset({"expense"}),
    "income": frozenset({"income"}),
    "both": frozenset({"income", "expense"}),
}


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable transaction snapshot as read from the store."""

    amount: Amount
    type: TransactionType
    date: str  # YYYY-MM-DD
    category_name: CategoryName | None = None
    category_color: str | None = None
    description: str = ""
    id: int | None = None


@dataclass(frozen=True)
class CategorySummary:
    """Immutable per-category total."""

    name: CategoryName
    total_amount: Amount
    color: str
    percentage: float


@dataclass(frozen=True)
class MonthSummary:
    """Immutable per-month income and expense totals."""

    month: Month
    income: Amount
    expenses: Amount
    net: Amount

    @property
    def label(self) -> str:
        """Display label, e.g. "Jan 2025"."""
        return format_month_label(self.month)


@dataclass(frozen=True)
class PeriodTotals:
    """Immutable income/expense totals for a period."""

    income: Amount
    expenses: Amount
    net: Amount


def view_types(view: str) -> frozenset[str]:
    """Map an analytics view name to the transaction types it covers.

    Args:
        view: One of "expenses", "income" or "both".

    Returns:
        Set of transaction types.

    Raises:
        ValueError: If the view name is unknown.
    """
    try:
        return VIEW_TYPES[view]
    except KeyError:
        raise ValueError(f"Unknown view '{view}'. Use one of: {', '.join(VIEW_TYPES)}") from None


def aggregate_by_category(
    transactions: Iterable[TransactionRecord],
    types: Iterable[str] = VIEW_TYPES["expenses"],
) -> list[CategorySummary]:
    """Group transactions by category and compute each group's share.

    Transactions without a category are grouped under "Uncategorized". The
    first colour seen for a category is kept.

    Args:
        transactions: Transaction snapshots.
        types: Transaction types to include.

    Returns:
        CategorySummary list, largest total first. Equal totals keep the order
        in which their categories first appeared. Percentages are 0 when the
        filtered total is 0.
    """
    wanted = frozenset(types)
    totals: dict[CategoryName, float] = {}
    colors: dict[CategoryName, str] = {}
    grand_total = 0.0

    for txn in transactions:
        if txn.type not in wanted:
            continue
        name = txn.category_name or UNCATEGORIZED
        grand_total += txn.amount
        if name in totals:
            totals[name] += txn.amount
        else:
            totals[name] = txn.amount
            colors[name] = txn.category_color or DEFAULT_CATEGORY_COLOR

    summaries = [
        CategorySummary(
            name=name,
            total_amount=Amount(amount),
            color=colors[name],
            percentage=(amount / grand_total) * 100 if grand_total else 0.0,
        )
        for name, amount in totals.items()
    ]

    # sorted() is stable, including with reverse=True
    return sorted(summaries, key=lambda s: s.total_amount, reverse=True)


def aggregate_by_month(transactions: Iterable[TransactionRecord]) -> list[MonthSummary]:
    """Group transactions by calendar month.

    Args:
        transactions: Transaction snapshots with ISO dates.

    Returns:
        MonthSummary list in chronological order (sorted by YYYY-MM key, not by
        the display label).
    """
    months: dict[Month, list[float]] = {}

    for txn in transactions:
        key = Month(txn.date[:7])
        income_expense = months.setdefault(key, [0.0, 0.0])
        if txn.type == "income":
            income_expense[0] += txn.amount
        else:
            income_expense[1] += txn.amount

    return [
        MonthSummary(
            month=key,
            income=Amount(income),
            expenses=Amount(expenses),
            net=Amount(income - expenses),
        )
        for key, (income, expenses) in sorted(months.items())
    ]


def summarize_totals(transactions: Iterable[TransactionRecord]) -> PeriodTotals:
    """Total income and expenses for a set of transactions.

    Args:
        transactions: Transaction snapshots.

    Returns:
        PeriodTotals with net = income - expenses.
    """
    income = 0.0
    expenses = 0.0
    for txn in transactions:
        if txn.type == "income":
            income += txn.amount
        elif txn.type == "expense":
            expenses += txn.amount

    return PeriodTotals(income=Amount(income), expenses=Amount(expenses), net=Amount(income - expenses))


def average_monthly(months: Sequence[MonthSummary]) -> tuple[Amount, Amount]:
    """Average monthly income and expenses.

    Args:
        months: Output of aggregate_by_month.

    Returns:
        Tuple of (average_income, average_expenses). Both 0 for no months.
    """
    count = len(months) or 1
    income = sum(m.income for m in months) / count
    expenses = sum(m.expenses for m in months) / count
    return Amount(income), Amount(expenses)


def savings_rate(average_income: float, average_expenses: float) -> float:
    """Percentage of income left after expenses.

    Args:
        average_income: Average monthly income.
        average_expenses: Average monthly expenses.

    Returns:
        Savings rate in percent. Negative when spending exceeds income; 0 when
        there is no income.
    """
    if average_income <= 0:
        return 0.0
    return ((average_income - average_expenses) / average_income) * 100


def filter_transactions(
    transactions: Iterable[TransactionRecord],
    search: str = "",
    type_filter: str = "all",
) -> list[TransactionRecord]:
    """Filter transactions by free-text search and type.

    Args:
        transactions: Transaction snapshots.
        search: Case-insensitive text matched against description or category.
        type_filter: "all", "income" or "expense".

    Returns:
        Matching transactions in their original order.
    """
    needle = search.lower()
    matches: list[TransactionRecord] = []

    for txn in transactions:
        if type_filter != "all" and txn.type != type_filter:
            continue
        if needle:
            in_description = needle in txn.description.lower()
            in_category = txn.category_name is not None and needle in txn.category_name.lower()
            if not (in_description or in_category):
                continue
        matches.append(txn)

    return matches
