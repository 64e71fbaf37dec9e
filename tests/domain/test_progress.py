"""Tests for finsight.domain.progress pure functions."""

from datetime import date, datetime

import pytest

from finsight.domain.analytics import TransactionRecord
from finsight.domain.models import Amount, CategoryName
from finsight.domain.progress import (
    BudgetRecord,
    GoalRecord,
    budget_spent,
    budget_status,
    dashboard_summary,
    days_remaining,
    evaluate_budgets,
    goal_color,
    goal_percentage,
    goal_progress,
    partition_goals,
)


def expense(amount: float, date: str, category: str | None = "Food", type: str = "expense") -> TransactionRecord:
    return TransactionRecord(
        amount=Amount(amount),
        type=type,  # type: ignore[arg-type]
        date=date,
        category_name=CategoryName(category) if category else None,
    )


def budget(
    category: str | None = "Food",
    amount: float = 1000,
    start: str = "2025-01-01",
    end: str = "2025-01-31",
    is_active: bool = True,
) -> BudgetRecord:
    return BudgetRecord(
        id=1,
        name="Groceries",
        amount=Amount(amount),
        period="monthly",
        start_date=start,
        end_date=end,
        category_name=CategoryName(category) if category else None,
        is_active=is_active,
    )


def goal(
    current: float = 0,
    target: float = 1000,
    target_date: str | None = None,
    is_completed: bool = False,
    goal_id: int = 1,
) -> GoalRecord:
    return GoalRecord(
        id=goal_id,
        name="Emergency fund",
        target_amount=Amount(target),
        current_amount=Amount(current),
        target_date=target_date,
        category="emergency",
        is_completed=is_completed,
    )


class TestBudgetStatus:
    """Tests for budget_status."""

    def test_good(self) -> None:
        """Should classify 50% as good."""
        status = budget_status(50, 100)

        assert status.classification == "good"
        assert status.percentage_used == pytest.approx(50)

    def test_warning_boundary_is_inclusive(self) -> None:
        """Should classify exactly 80% as warning."""
        assert budget_status(80, 100).classification == "warning"

    def test_just_below_warning(self) -> None:
        """Should classify 79.99% as good."""
        assert budget_status(79.99, 100).classification == "good"

    def test_over_boundary_is_inclusive(self) -> None:
        """Should classify exactly 100% as over."""
        assert budget_status(100, 100).classification == "over"

    def test_over_keeps_unclamped_percentage(self) -> None:
        """Should keep the raw percentage and clamp only the display value."""
        status = budget_status(150, 100)

        assert status.classification == "over"
        assert status.percentage_used == pytest.approx(150)
        assert status.display_percentage == 100
        assert status.remaining == -50

    def test_zero_limit_does_not_divide_by_zero(self) -> None:
        """Should treat a zero limit as over once anything is spent."""
        assert budget_status(10, 0).classification == "over"
        assert budget_status(10, 0).percentage_used == 0.0
        assert budget_status(0, 0).classification == "good"


class TestBudgetSpent:
    """Tests for budget_spent."""

    def test_sums_matching_expenses_in_range(self) -> None:
        """Should include the start and end dates."""
        transactions = [
            expense(100, "2025-01-01"),
            expense(200, "2025-01-15"),
            expense(300, "2025-01-31"),
        ]

        assert budget_spent(budget(), transactions) == 600

    def test_excludes_out_of_range_dates(self) -> None:
        """Should ignore transactions before start or after end."""
        transactions = [expense(100, "2024-12-31"), expense(200, "2025-02-01"), expense(5, "2025-01-20")]

        assert budget_spent(budget(), transactions) == 5

    def test_excludes_other_categories_and_income(self) -> None:
        """Should only count expenses in the budget's category."""
        transactions = [
            expense(100, "2025-01-10", category="Travel"),
            expense(200, "2025-01-10", type="income"),
            expense(300, "2025-01-10", category=None),
            expense(40, "2025-01-10"),
        ]

        assert budget_spent(budget(), transactions) == 40

    def test_budget_without_category_matches_nothing(self) -> None:
        """Should return 0 for a budget with no category."""
        assert budget_spent(budget(category=None), [expense(100, "2025-01-10", category=None)]) == 0

    def test_evaluate_budgets(self) -> None:
        """Should pair each budget with its status."""
        [(record, status)] = evaluate_budgets([budget(amount=500)], [expense(450, "2025-01-05")])

        assert record.name == "Groceries"
        assert status.spent == 450
        assert status.classification == "warning"


class TestGoalProgress:
    """Tests for goal_percentage, days_remaining and goal_progress."""

    def test_percentage(self) -> None:
        """Should compute the share of the target reached."""
        assert goal_percentage(250, 1000) == pytest.approx(25)

    def test_percentage_is_clamped(self) -> None:
        """Should clamp to [0, 100]."""
        assert goal_percentage(1500, 1000) == 100
        assert goal_percentage(-10, 1000) == 0

    def test_percentage_without_target(self) -> None:
        """Should return 0 when target is not positive."""
        assert goal_percentage(100, 0) == 0.0

    def test_days_remaining_none_without_target_date(self) -> None:
        """Should return None when no target date is set."""
        assert days_remaining(None, date(2025, 1, 1)) is None
        assert days_remaining("", date(2025, 1, 1)) is None

    def test_days_remaining_future(self) -> None:
        """Should count whole days to the target."""
        assert days_remaining("2025-01-11", date(2025, 1, 1)) == 10

    def test_days_remaining_today(self) -> None:
        """Should return 0 on the target date."""
        assert days_remaining("2025-01-01", date(2025, 1, 1)) == 0
        assert days_remaining("2025-01-01", datetime(2025, 1, 1, 18, 30)) == 0

    def test_days_remaining_rounds_partial_days_up(self) -> None:
        """Should count a partial day as a full day left."""
        assert days_remaining("2025-01-02", datetime(2025, 1, 1, 9, 0)) == 1

    def test_days_remaining_overdue(self) -> None:
        """Should return a negative number once the date has passed."""
        assert days_remaining(date(2025, 1, 1), date(2025, 1, 4)) == -3
        assert days_remaining("2025-01-01", datetime(2025, 1, 3, 12, 0)) == -2

    def test_goal_progress(self) -> None:
        """Should combine amounts, percentage and days left."""
        progress = goal_progress(goal(current=400, target=1000, target_date="2025-03-01"), date(2025, 2, 1))

        assert progress.percentage == pytest.approx(40)
        assert progress.days_remaining == 28
        assert progress.amount_remaining == 600

    def test_goal_colour(self) -> None:
        """Should use the category palette with a default."""
        assert goal_color("emergency") == "#EF4444"
        assert goal_color("unknown") == "#3B82F6"


class TestDashboard:
    """Tests for partition_goals and dashboard_summary."""

    def test_partition_goals(self) -> None:
        """Should split active from completed goals."""
        goals = [goal(goal_id=1), goal(goal_id=2, is_completed=True), goal(goal_id=3)]

        active, completed = partition_goals(goals)

        assert [g.id for g in active] == [1, 3]
        assert [g.id for g in completed] == [2]

    def test_dashboard_summary(self) -> None:
        """Should count goals, active budgets and period totals."""
        transactions = [expense(300, "2025-01-02"), expense(1000, "2025-01-01", type="income")]
        goals = [goal(), goal(is_completed=True), goal(is_completed=True)]
        budgets = [budget(), budget(is_active=False)]

        summary = dashboard_summary(transactions, goals, budgets)

        assert summary.totals.income == 1000
        assert summary.totals.expenses == 300
        assert summary.totals.net == 700
        assert summary.active_goals == 1
        assert summary.completed_goals == 2
        assert summary.active_budgets == 1
