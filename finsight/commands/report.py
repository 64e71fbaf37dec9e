"""Analytics and dashboard commands for viewing aggregated data."""

import logging
import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finsight.commands.formatting import currency_symbol, format_money, format_percentage
from finsight.config import get_setting
from finsight.dates import month_range, range_start_date
from finsight.domain.analytics import (
    CategorySummary,
    aggregate_by_category,
    aggregate_by_month,
    average_monthly,
    savings_rate,
    view_types,
)
from finsight.domain.models import Month
from finsight.domain.progress import dashboard_summary
from finsight.store.queries import get_budgets, get_goals, get_transactions
from finsight.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)

VIEW_TITLES = {
    "expenses": "Expenses by category",
    "income": "Income by category",
    "both": "Income and expenses by category",
}


def calculate_histogram_bar_length(amount: float, max_amount: float, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def render_category_table(categories: list[CategorySummary], title: str, symbol: str, bar_width: int = 30) -> Table:
    """Build the category breakdown table."""
    table = Table(title=title)
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("")

    max_amount = max((c.total_amount for c in categories), default=0.0)
    for cat in categories:
        bar = "█" * calculate_histogram_bar_length(cat.total_amount, max_amount, bar_width)
        table.add_row(
            f"[{cat.color}]●[/{cat.color}] {escape(cat.name)}",
            format_money(cat.total_amount, symbol),
            format_percentage(cat.percentage),
            f"[{cat.color}]{bar}[/{cat.color}]",
        )

    return table


def analytics_command(range_key: str | None = None, view: str | None = None, top: int | None = None) -> None:
    """Show category breakdown, monthly trend and savings rate."""
    db_path = get_db_path()

    range_key = range_key or str(get_setting("analytics_range"))
    view = view or str(get_setting("analytics_view"))
    top = top if top is not None else int(get_setting("top_categories"))

    try:
        since = range_start_date(range_key, date.today())
        types = view_types(view)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    try:
        transactions = get_transactions(db_path, since_date=since.isoformat())
        logger.debug("Loaded %d transactions since %s", len(transactions), since)

        if not transactions:
            console.print(f"[dim]No transactions since {since.isoformat()}[/dim]")
            return

        categories = aggregate_by_category(transactions, types)
        months = aggregate_by_month(transactions)
        avg_income, avg_expenses = average_monthly(months)
        rate = savings_rate(avg_income, avg_expenses)
        symbol = currency_symbol()

        console.print(f"[bold cyan]Analytics - last {range_key} (since {since.isoformat()})[/bold cyan]\n")
        console.print(f"  [bold]Avg monthly income:[/bold]   [green]{format_money(avg_income, symbol)}[/green]")
        console.print(f"  [bold]Avg monthly expenses:[/bold] [red]{format_money(avg_expenses, symbol)}[/red]")
        rate_style = "green" if rate >= 0 else "red"
        console.print(f"  [bold]Savings rate:[/bold]         [{rate_style}]{format_percentage(rate)}[/{rate_style}]\n")

        if categories:
            console.print(render_category_table(categories[:top], VIEW_TITLES[view], symbol))
            if len(categories) > top:
                console.print(f"[dim]{len(categories) - top} more categories not shown[/dim]")
        else:
            console.print(f"[dim]No {view} in this period[/dim]")

        month_table = Table(title="Monthly trend")
        month_table.add_column("Month", style="cyan")
        month_table.add_column("Income", justify="right", style="green")
        month_table.add_column("Expenses", justify="right", style="red")
        month_table.add_column("Net", justify="right")
        for month in months:
            net_style = "green" if month.net >= 0 else "red"
            month_table.add_row(
                month.label,
                format_money(month.income, symbol),
                format_money(month.expenses, symbol),
                f"[{net_style}]{format_money(month.net, symbol)}[/{net_style}]",
            )
        console.print(month_table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def dashboard_command(recent: int = 5) -> None:
    """Show this month's totals, goal and budget counts, and recent activity."""
    db_path = get_db_path()

    try:
        today = date.today()
        since_date, until_date, period = month_range(Month(today.strftime("%Y-%m")))

        month_transactions = get_transactions(db_path, since_date, until_date)
        goals = get_goals(db_path)
        budgets = get_budgets(db_path, active_only=False)
        latest = get_transactions(db_path, limit=recent, newest_first=True)

        summary = dashboard_summary(month_transactions, goals, budgets)
        symbol = currency_symbol()
        net_style = "green" if summary.totals.net >= 0 else "red"

        console.print(f"[bold cyan]{period}[/bold cyan]\n")
        console.print(f"  [bold]Income:[/bold]   [green]{format_money(summary.totals.income, symbol)}[/green]")
        console.print(f"  [bold]Expenses:[/bold] [red]{format_money(summary.totals.expenses, symbol)}[/red]")
        console.print(f"  [bold]Net:[/bold]      [{net_style}]{format_money(summary.totals.net, symbol)}[/{net_style}]\n")
        console.print(
            f"  [bold]Goals:[/bold] {summary.active_goals} active, {summary.completed_goals} completed"
            f"   [bold]Budgets:[/bold] {summary.active_budgets} active\n"
        )

        if not latest:
            console.print("[dim]No transactions yet. Add one with 'finsight add'.[/dim]")
            return

        table = Table(title="Recent transactions")
        table.add_column("Date", style="cyan")
        table.add_column("Description")
        table.add_column("Category", style="magenta")
        table.add_column("Amount", justify="right")
        for txn in latest:
            amount_text = format_money(txn.amount, symbol, decimals=2)
            sign, style = ("+", "green") if txn.type == "income" else ("-", "red")
            table.add_row(
                txn.date,
                escape(txn.description),
                escape(txn.category_name) if txn.category_name else "[dim]-[/dim]",
                f"[{style}]{sign}{amount_text}[/{style}]",
            )
        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
