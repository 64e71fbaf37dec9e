"""Budget commands for creating budgets and tracking spend against them."""

import logging
import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finsight.commands.formatting import currency_symbol, format_money, format_percentage, normalize_date
from finsight.dates import default_budget_end
from finsight.domain.models import CategoryName
from finsight.domain.parsing import parse_decimal
from finsight.domain.progress import BUDGET_PERIODS, BudgetClassification, evaluate_budgets
from finsight.store.queries import add_budget, deactivate_budget, delete_budget, get_budgets, get_transactions
from finsight.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)

STATUS_STYLES: dict[BudgetClassification, str] = {
    "good": "green",
    "warning": "yellow",
    "over": "red",
}

BAR_WIDTH = 20


def render_progress_bar(percentage: float, style: str, width: int = BAR_WIDTH) -> str:
    """Render a text progress bar.

    Args:
        percentage: Percentage filled, already clamped to [0, 100].
        style: Rich style for the filled part.
        width: Bar width in characters.

    Returns:
        Rich markup string.
    """
    filled = int(percentage / 100 * width)
    return f"[{style}]{'█' * filled}[/{style}][dim]{'░' * (width - filled)}[/dim]"


def budget_add_command(
    name: str,
    amount: str,
    category: str | None = None,
    period: str = "monthly",
    start: str | None = None,
    end: str | None = None,
) -> None:
    """Create a budget.

    Args:
        name: Budget name.
        amount: Spending limit.
        category: Category the budget tracks.
        period: "weekly", "monthly" or "yearly".
        start: Start date. Defaults to today.
        end: End date (inclusive). Defaults to one month after start.
    """
    db_path = get_db_path()

    if period not in BUDGET_PERIODS:
        console.print(f"[red]Invalid period '{escape(period)}'. Use one of: {', '.join(BUDGET_PERIODS)}[/red]")
        sys.exit(1)

    limit = parse_decimal(amount)
    if limit <= 0:
        console.print("[red]Budget amount must be positive[/red]")
        sys.exit(1)

    try:
        start_date = normalize_date(start) if start else date.today().isoformat()
        end_date = normalize_date(end) if end else default_budget_end(date.fromisoformat(start_date)).isoformat()
    except ValueError as e:
        console.print(f"[red]Invalid date format: {escape(str(e))}[/red]")
        sys.exit(1)

    if end_date < start_date:
        console.print("[red]End date must not be before start date[/red]")
        sys.exit(1)

    try:
        budget_id = add_budget(
            name,
            limit,
            start_date,
            end_date,
            period,
            CategoryName(category) if category else None,
            db_path,
        )
        console.print(f"[green]✓[/green] Budget {budget_id} created: {escape(name)} {format_money(limit)} ({period})")
        console.print(f"[dim]{start_date} to {end_date}[/dim]")
        if not category:
            console.print("[yellow]No category set - spending will not be tracked against this budget[/yellow]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def budget_status_command() -> None:
    """Show spending against every active budget."""
    db_path = get_db_path()

    try:
        budgets = get_budgets(db_path)
        if not budgets:
            console.print("[yellow]No active budgets. Create one with 'finsight budget add'.[/yellow]")
            return

        since_date = min(b.start_date for b in budgets)
        until_date = max(b.end_date for b in budgets)
        transactions = get_transactions(db_path, since_date, until_date, type="expense")
        logger.debug("Loaded %d expenses for %d budgets", len(transactions), len(budgets))

        symbol = currency_symbol()
        table = Table(title="Budget Status")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Budget", style="white")
        table.add_column("Category", style="magenta")
        table.add_column("Spent", justify="right")
        table.add_column("Limit", justify="right")
        table.add_column("Used", justify="right")
        table.add_column("Progress")
        table.add_column("Dates", style="dim")

        for budget, status in evaluate_budgets(budgets, transactions):
            style = STATUS_STYLES[status.classification]
            table.add_row(
                str(budget.id),
                f"{escape(budget.name)} [dim]({budget.period})[/dim]",
                escape(budget.category_name) if budget.category_name else "[dim]-[/dim]",
                format_money(status.spent, symbol),
                format_money(status.limit, symbol),
                f"[{style}]{format_percentage(status.display_percentage)}[/{style}]",
                render_progress_bar(status.display_percentage, style),
                f"{budget.start_date} - {budget.end_date}",
            )

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def budget_deactivate_command(budget_id: int) -> None:
    """Stop tracking a budget."""
    db_path = get_db_path()

    try:
        if not deactivate_budget(budget_id, db_path):
            console.print(f"[red]Budget {budget_id} not found[/red]")
            sys.exit(1)
        console.print(f"[green]✓[/green] Budget {budget_id} deactivated")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def budget_delete_command(budget_id: int) -> None:
    """Delete a budget permanently."""
    db_path = get_db_path()

    try:
        if not delete_budget(budget_id, db_path):
            console.print(f"[red]Budget {budget_id} not found[/red]")
            sys.exit(1)
        console.print(f"[green]✓[/green] Budget {budget_id} deleted")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
