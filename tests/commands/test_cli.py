"""End-to-end tests for the finsight command line."""

from datetime import date
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from finsight.cli import app
from finsight.commands import admin, budget, calculators, goals, report, transactions
from finsight.store.queries import get_transactions
from finsight.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for module in (admin, budget, calculators, goals, report, transactions):
        monkeypatch.setattr(module, "console", Console(width=200))
    return tmp_path


@pytest.fixture
def initialized() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output


class TestCalculators:
    """Tests for the emi, sip and swp commands."""

    def test_emi(self) -> None:
        """Should print the monthly instalment."""
        result = runner.invoke(app, ["emi", "1000000", "9.5", "20"])

        assert result.exit_code == 0
        assert "9,321" in result.output
        assert "Interest vs principal ratio" in result.output

    def test_emi_bad_input_renders_zero(self) -> None:
        """Should show a zero result instead of failing."""
        result = runner.invoke(app, ["emi", "abc", "9.5", "20"])

        assert result.exit_code == 0
        assert "₹0" in result.output
        assert "ratio" not in result.output

    def test_sip(self) -> None:
        """Should print maturity and wealth multiplier."""
        result = runner.invoke(app, ["sip", "5000", "12", "10"])

        assert result.exit_code == 0
        assert "600,000" in result.output
        assert "Wealth multiplier" in result.output

    def test_swp_not_sustainable(self) -> None:
        """Should warn when the corpus runs out."""
        result = runner.invoke(app, ["swp", "100000", "10000", "6", "5"])

        assert result.exit_code == 0
        assert "not sustainable" in result.output

    def test_swp_sustainable(self) -> None:
        """Should confirm a sustainable plan."""
        result = runner.invoke(app, ["swp", "1000000", "5000", "12", "10"])

        assert result.exit_code == 0
        assert "Sustainable plan" in result.output

    def test_emi_overflow_renders_zero(self) -> None:
        """Should show a zero result when the inputs overflow."""
        result = runner.invoke(app, ["emi", "100000", "100", "1000"])

        assert result.exit_code == 0, result.output
        assert "₹0" in result.output
        assert "ratio" not in result.output


class TestInit:
    """Tests for init."""

    def test_refuses_to_overwrite(self, initialized: None) -> None:
        """Should fail without --force when files exist."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force_reinitializes(self, initialized: None) -> None:
        """Should recreate the database with --force."""
        runner.invoke(app, ["add", "100", "Snack"])

        result = runner.invoke(app, ["init", "--force"])
        listing = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No transactions found" in listing.output


class TestTransactions:
    """Tests for add, list and delete."""

    def test_add_and_list(self, initialized: None) -> None:
        """Should record a transaction and create its category."""
        result = runner.invoke(app, ["add", "450", "Groceries", "--category", "Food", "--date", "05/01/2025"])

        assert result.exit_code == 0, result.output
        assert "Created expense category: Food" in result.output
        assert "2025-01-05" in result.output

        listing = runner.invoke(app, ["list", "--search", "food"])
        assert "Groceries" in listing.output
        assert "1 transaction found" in listing.output

    def test_add_keeps_iso_date_order(self, initialized: None) -> None:
        """Should read YYYY-MM-DD dates as year, month, day."""
        result = runner.invoke(app, ["add", "450", "Groceries", "--date", "2025-01-05"])
        assert result.exit_code == 0, result.output

        runner.invoke(app, ["add", "20", "Coffee", "--date", "2025-01-06T10:00"])

        dates = [txn.date for txn in get_transactions(get_db_path())]
        assert dates == ["2025-01-05", "2025-01-06"]

    def test_add_shows_markup_in_description_literally(self, initialized: None) -> None:
        """Should print bracketed text in descriptions as typed."""
        result = runner.invoke(app, ["add", "10", "[/red] refund [bold]", "--category", "[misc]"])
        assert result.exit_code == 0, result.output
        assert "[/red] refund [bold]" in result.output

        listing = runner.invoke(app, ["list"])
        assert listing.exit_code == 0, listing.output
        assert "[misc]" in listing.output

    def test_add_rejects_bad_type(self, initialized: None) -> None:
        """Should reject unknown transaction types."""
        result = runner.invoke(app, ["add", "10", "Thing", "--type", "transfer"])

        assert result.exit_code == 1
        assert "Invalid type" in result.output

    def test_add_rejects_non_positive_amount(self, initialized: None) -> None:
        """Should reject amounts that don't parse to a positive number."""
        result = runner.invoke(app, ["add", "abc", "Thing"])

        assert result.exit_code == 1
        assert "Amount must be positive" in result.output

    def test_delete_missing(self, initialized: None) -> None:
        """Should fail for an unknown ID."""
        result = runner.invoke(app, ["delete", "42"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestBudgetsAndGoals:
    """Tests for the budget and goal sub-commands."""

    def test_budget_status(self, initialized: None) -> None:
        """Should classify spending against a budget."""
        today = date.today().isoformat()
        runner.invoke(app, ["add", "900", "Big shop", "--category", "Food", "--date", today])
        runner.invoke(app, ["budget", "add", "Groceries", "1000", "--category", "Food", "--start", today])

        result = runner.invoke(app, ["budget", "status"])

        assert result.exit_code == 0, result.output
        assert "Groceries" in result.output
        assert "90.0%" in result.output

    def test_budget_counts_expense_on_iso_date(self, initialized: None) -> None:
        """Should count an ISO-dated expense inside an ISO-dated budget range."""
        runner.invoke(app, ["add", "900", "Big shop", "--category", "Food", "--date", "2025-01-05"])
        runner.invoke(
            app,
            ["budget", "add", "January food", "1000", "--category", "Food", "--start", "2025-01-01", "--end", "2025-01-31"],
        )

        result = runner.invoke(app, ["budget", "status"])

        assert result.exit_code == 0, result.output
        assert "2025-01-01 - 2025-01-31" in result.output
        assert "90.0%" in result.output

    def test_budget_rejects_bad_period(self, initialized: None) -> None:
        """Should reject unknown periods."""
        result = runner.invoke(app, ["budget", "add", "Food", "100", "--period", "daily"])

        assert result.exit_code == 1

    def test_goal_lifecycle(self, initialized: None) -> None:
        """Should create, fund and complete a goal."""
        added = runner.invoke(app, ["goal", "add", "Laptop", "80000", "--current", "20000"])
        assert added.exit_code == 0, added.output

        funded = runner.invoke(app, ["goal", "contribute", "1", "60000"])
        assert "100.0%" in funded.output
        assert "Target reached" in funded.output

        completed = runner.invoke(app, ["goal", "complete", "1"])
        assert completed.exit_code == 0

        status = runner.invoke(app, ["goal", "status"])
        assert "Completed Goals" in status.output
        assert "No active goals" in status.output

    def test_goal_name_with_brackets(self, initialized: None) -> None:
        """Should store and show a goal name containing markup brackets."""
        added = runner.invoke(app, ["goal", "add", "[/red]", "1000"])
        assert added.exit_code == 0, added.output

        status = runner.invoke(app, ["goal", "status"])
        assert status.exit_code == 0, status.output
        assert "[/red]" in status.output


class TestReports:
    """Tests for analytics and dashboard."""

    def test_analytics(self, initialized: None) -> None:
        """Should show averages, categories and months."""
        today = date.today().isoformat()
        runner.invoke(app, ["add", "5000", "Salary", "--type", "income", "--category", "Salary", "--date", today])
        runner.invoke(app, ["add", "1000", "Rent", "--category", "Housing", "--date", today])

        result = runner.invoke(app, ["analytics", "--range", "3m", "--view", "expenses"])

        assert result.exit_code == 0, result.output
        assert "Savings rate" in result.output
        assert "80.0%" in result.output
        assert "Housing" in result.output

    def test_analytics_rejects_bad_range(self, initialized: None) -> None:
        """Should reject unknown look-back windows."""
        result = runner.invoke(app, ["analytics", "--range", "2w"])

        assert result.exit_code == 1
        assert "Unknown range" in result.output

    def test_dashboard(self, initialized: None) -> None:
        """Should show this month's totals and counts."""
        runner.invoke(app, ["add", "250", "Coffee beans", "--date", date.today().isoformat()])
        runner.invoke(app, ["goal", "add", "Fund", "1000"])

        result = runner.invoke(app, ["dashboard"])

        assert result.exit_code == 0, result.output
        assert "1 active, 0 completed" in result.output
        assert "Coffee beans" in result.output


class TestConfigCommands:
    """Tests for config show and set."""

    def test_set_currency(self, initialized: None) -> None:
        """Should change the currency symbol used in output."""
        runner.invoke(app, ["config", "set", "currency_symbol", "$"])

        result = runner.invoke(app, ["emi", "100000", "10", "1"])

        assert "$" in result.output

    def test_set_unknown_key(self) -> None:
        """Should reject unknown settings."""
        result = runner.invoke(app, ["config", "set", "theme", "dark"])

        assert result.exit_code == 1
