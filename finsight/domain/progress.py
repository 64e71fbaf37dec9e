"""Pure functions for budget and goal progress.

This module contains the functional core for derived metrics:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in major units (Amount type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Literal

from finsight.dates import days_between
from finsight.domain.analytics import PeriodTotals, TransactionRecord, summarize_totals
from finsight.domain.models import Amount, CategoryName

BudgetClassification = Literal["good", "warning", "over"]

WARNING_THRESHOLD = 0.8
OVER_THRESHOLD = 1.0

BUDGET_PERIODS = ("weekly", "monthly", "yearly")

GOAL_COLORS: dict[str, str] = {
    "general": "#3B82F6",
    "emergency": "#EF4444",
    "vacation": "#10B981",
    "home": "#F59E0B",
    "education": "#8B5CF6",
    "retirement": "#06B6D4",
}

DEFAULT_GOAL_COLOR = GOAL_COLORS["general"]


@dataclass(frozen=True)
class BudgetRecord:
    """Immutable budget snapshot as read from the store."""

    id: int
    name: str
    amount: Amount
    period: str
    start_date: str  # YYYY-MM-DD
    end_date: str  # YYYY-MM-DD, inclusive
    category_name: CategoryName | None = None
    is_active: bool = True


@dataclass(frozen=True)
class GoalRecord:
    """Immutable savings goal snapshot as read from the store."""

    id: int
    name: str
    target_amount: Amount
    current_amount: Amount
    target_date: str | None = None  # YYYY-MM-DD
    category: str = "general"
    description: str | None = None
    is_completed: bool = False


@dataclass(frozen=True)
class BudgetStatus:
    """Immutable budget usage."""

    spent: Amount
    limit: Amount
    percentage_used: float  # unclamped
    classification: BudgetClassification

    @property
    def display_percentage(self) -> float:
        """Percentage clamped to 100 for progress bars."""
        return min(self.percentage_used, 100.0)

    @property
    def remaining(self) -> Amount:
        """Amount left before the limit (negative when over)."""
        return Amount(self.limit - self.spent)


@dataclass(frozen=True)
class GoalProgress:
    """Immutable goal progress."""

    current_amount: Amount
    target_amount: Amount
    percentage: float  # clamped to [0, 100]
    days_remaining: int | None

    @property
    def amount_remaining(self) -> Amount:
        """Amount still needed (never negative)."""
        return Amount(max(self.target_amount - self.current_amount, 0.0))


@dataclass(frozen=True)
class DashboardSummary:
    """Immutable dashboard headline numbers."""

    totals: PeriodTotals
    active_goals: int
    completed_goals: int
    active_budgets: int


def classify_budget(ratio: float) -> BudgetClassification:
    """Classify a spent/limit ratio.

    Args:
        ratio: Spent divided by limit.

    Returns:
        "over" at 1.0 or above, "warning" at 0.8 or above, else "good".
    """
    if ratio >= OVER_THRESHOLD:
        return "over"
    if ratio >= WARNING_THRESHOLD:
        return "warning"
    return "good"


def budget_status(spent: float, limit: float) -> BudgetStatus:
    """Compute budget usage and its classification.

    A non-positive limit has no meaningful ratio: it reports 0% and is "over"
    as soon as anything has been spent.

    Args:
        spent: Amount spent against the budget.
        limit: Budget limit.

    Returns:
        BudgetStatus with the unclamped percentage used.
    """
    if limit <= 0:
        return BudgetStatus(
            spent=Amount(spent),
            limit=Amount(limit),
            percentage_used=0.0,
            classification="over" if spent > 0 else "good",
        )

    ratio = spent / limit
    return BudgetStatus(
        spent=Amount(spent),
        limit=Amount(limit),
        percentage_used=ratio * 100,
        classification=classify_budget(ratio),
    )


def budget_spent(budget: BudgetRecord, transactions: Iterable[TransactionRecord]) -> Amount:
    """Sum the expenses that count against a budget.

    Matches expense transactions in the budget's category dated within
    [start_date, end_date] inclusive. A budget without a category matches
    nothing.

    Args:
        budget: Budget snapshot.
        transactions: Transaction snapshots with ISO dates.

    Returns:
        Total spent.
    """
    if budget.category_name is None:
        return Amount(0.0)

    total = 0.0
    for txn in transactions:
        if txn.type != "expense" or txn.category_name != budget.category_name:
            continue
        # ISO dates compare correctly as strings
        if budget.start_date <= txn.date[:10] <= budget.end_date:
            total += txn.amount
    return Amount(total)


def evaluate_budgets(
    budgets: Iterable[BudgetRecord],
    transactions: Sequence[TransactionRecord],
) -> list[tuple[BudgetRecord, BudgetStatus]]:
    """Pair every budget with its status.

    Args:
        budgets: Budget snapshots.
        transactions: Transaction snapshots covering the budgets' date ranges.

    Returns:
        List of (budget, status) tuples in input order.
    """
    return [(budget, budget_status(budget_spent(budget, transactions), budget.amount)) for budget in budgets]


def goal_percentage(current: float, target: float) -> float:
    """Progress towards a target, clamped to [0, 100].

    Returns:
        Percentage reached, or 0.0 when target is not positive.
    """
    if target <= 0:
        return 0.0
    return min(max((current / target) * 100, 0.0), 100.0)


def days_remaining(target_date: str | date | None, now: datetime | date) -> int | None:
    """Days until a goal's target date, rounding partial days up.

    Args:
        target_date: Target date (ISO string or date), or None.
        now: Current moment. A plain date is taken as midnight.

    Returns:
        Positive for days left, 0 when due today, negative when overdue, or
        None when no target date is set.
    """
    if not target_date:
        return None

    if isinstance(target_date, str):
        target_date = date.fromisoformat(target_date[:10])
    if not isinstance(now, datetime):
        now = datetime.combine(now, time.min)

    target = datetime.combine(target_date, time.min, tzinfo=now.tzinfo)
    return days_between(now, target)


def goal_progress(goal: GoalRecord, now: datetime | date) -> GoalProgress:
    """Compute progress for a goal.

    Args:
        goal: Goal snapshot.
        now: Current moment used for days remaining.

    Returns:
        GoalProgress with clamped percentage.
    """
    return GoalProgress(
        current_amount=goal.current_amount,
        target_amount=goal.target_amount,
        percentage=goal_percentage(goal.current_amount, goal.target_amount),
        days_remaining=days_remaining(goal.target_date, now),
    )


def goal_color(category: str) -> str:
    """Display colour for a goal category."""
    return GOAL_COLORS.get(category, DEFAULT_GOAL_COLOR)


def partition_goals(goals: Iterable[GoalRecord]) -> tuple[list[GoalRecord], list[GoalRecord]]:
    """Split goals into active and completed.

    Returns:
        Tuple of (active, completed), each in input order.
    """
    active: list[GoalRecord] = []
    completed: list[GoalRecord] = []
    for goal in goals:
        (completed if goal.is_completed else active).append(goal)
    return active, completed


def dashboard_summary(
    transactions: Iterable[TransactionRecord],
    goals: Iterable[GoalRecord],
    budgets: Iterable[BudgetRecord],
) -> DashboardSummary:
    """Build the dashboard headline numbers.

    Args:
        transactions: Transactions for the current period.
        goals: All goals.
        budgets: All budgets; only active ones are counted.

    Returns:
        DashboardSummary.
    """
    active, completed = partition_goals(goals)
    return DashboardSummary(
        totals=summarize_totals(transactions),
        active_goals=len(active),
        completed_goals=len(completed),
        active_budgets=sum(1 for b in budgets if b.is_active),
    )
