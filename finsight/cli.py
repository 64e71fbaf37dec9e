"""CLI entry point for finsight."""

import typer

from finsight.commands.admin import backup_command, config_set_command, config_show_command, init_command
from finsight.commands.budget import (
    budget_add_command,
    budget_deactivate_command,
    budget_delete_command,
    budget_status_command,
)
from finsight.commands.calculators import emi_command, sip_command, swp_command
from finsight.commands.goals import (
    goal_add_command,
    goal_complete_command,
    goal_contribute_command,
    goal_delete_command,
    goal_status_command,
)
from finsight.commands.report import analytics_command, dashboard_command
from finsight.commands.transactions import (
    add_command,
    category_add_command,
    category_list_command,
    delete_command,
    list_command,
)
from finsight.logs import setup_logging

app = typer.Typer(
    name="finsight",
    help="Personal finance tracker with EMI, SIP and SWP calculators",
    add_completion=False,
)
category_app = typer.Typer(help="Manage transaction categories.")
budget_app = typer.Typer(help="Create budgets and track spending against them.")
goal_app = typer.Typer(help="Create savings goals and track progress.")
config_app = typer.Typer(help="Show or change settings.")

app.add_typer(category_app, name="category")
app.add_typer(budget_app, name="budget")
app.add_typer(goal_app, name="goal")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Personal finance tracker with EMI, SIP and SWP calculators."""
    setup_logging("DEBUG" if verbose else "WARNING")


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize finsight database and configuration."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.finsight/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def emi(
    principal: str = typer.Argument(..., help="Loan amount"),
    rate: str = typer.Argument(..., help="Annual interest rate (%)"),
    years: str = typer.Argument(..., help="Loan tenure in years"),
) -> None:
    """Calculate the monthly instalment (EMI) for a loan."""
    emi_command(principal, rate, years)


@app.command()
def sip(
    monthly: str = typer.Argument(..., help="Monthly investment"),
    rate: str = typer.Argument(..., help="Expected annual return (%)"),
    years: str = typer.Argument(..., help="Investment period in years"),
) -> None:
    """Calculate the maturity value of a monthly SIP."""
    sip_command(monthly, rate, years)


@app.command()
def swp(
    corpus: str = typer.Argument(..., help="Initial investment"),
    withdrawal: str = typer.Argument(..., help="Monthly withdrawal"),
    rate: str = typer.Argument(..., help="Expected annual return (%)"),
    years: str = typer.Argument(..., help="Withdrawal period in years"),
) -> None:
    """Simulate a systematic withdrawal plan (SWP)."""
    swp_command(corpus, withdrawal, rate, years)


@app.command()
def add(
    amount: str,
    description: str,
    type: str = typer.Option("expense", "--type", "-t", help="'income' or 'expense'"),
    category: str = typer.Option(None, "--category", "-c", help="Category name"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
) -> None:
    """Record an income or expense transaction."""
    add_command(amount, description, type, category, date)


@app.command(name="list")
def list_transactions(
    search: str = typer.Option("", "--search", "-s", help="Match description or category"),
    type: str = typer.Option("all", "--type", "-t", help="'all', 'income' or 'expense'"),
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions."""
    list_command(search, type, limit, all)


@app.command()
def delete(transaction_id: int) -> None:
    """Delete a transaction."""
    delete_command(transaction_id)


@app.command()
def analytics(
    range_key: str = typer.Option(None, "--range", "-r", help="Look-back window: 3m, 6m or 1y"),
    view: str = typer.Option(None, "--view", help="'expenses', 'income' or 'both'"),
    top: int = typer.Option(None, "--top", help="Number of categories to show"),
) -> None:
    """Show spending by category, monthly trend and savings rate."""
    analytics_command(range_key, view, top)


@app.command()
def dashboard(
    recent: int = typer.Option(5, "--recent", help="Recent transactions to show"),
) -> None:
    """Show this month's overview."""
    dashboard_command(recent)


@category_app.command(name="add")
def category_add(
    name: str,
    type: str = typer.Option("expense", "--type", "-t", help="'income' or 'expense'"),
    color: str = typer.Option(None, "--color", help="Hex colour, e.g. #EF4444"),
) -> None:
    """Create or update a category."""
    category_add_command(name, type, color)


@category_app.command(name="list")
def category_list() -> None:
    """List categories."""
    category_list_command()


@budget_app.command(name="add")
def budget_add(
    name: str,
    amount: str,
    category: str = typer.Option(None, "--category", "-c", help="Category to track"),
    period: str = typer.Option("monthly", "--period", help="weekly, monthly or yearly"),
    start: str = typer.Option(None, "--start", help="Start date (default: today)"),
    end: str = typer.Option(None, "--end", help="End date, inclusive (default: one month after start)"),
) -> None:
    """Create a budget."""
    budget_add_command(name, amount, category, period, start, end)


@budget_app.command(name="status")
def budget_status() -> None:
    """Show spending against your active budgets."""
    budget_status_command()


@budget_app.command(name="deactivate")
def budget_deactivate(budget_id: int) -> None:
    """Stop tracking a budget."""
    budget_deactivate_command(budget_id)


@budget_app.command(name="delete")
def budget_delete(budget_id: int) -> None:
    """Delete a budget."""
    budget_delete_command(budget_id)


@goal_app.command(name="add")
def goal_add(
    name: str,
    target: str,
    current: str = typer.Option("0", "--current", help="Amount already saved"),
    target_date: str = typer.Option(None, "--by", help="Target date"),
    category: str = typer.Option("general", "--category", "-c", help="general, emergency, vacation, home, ..."),
    description: str = typer.Option(None, "--description", help="Goal description"),
) -> None:
    """Create a savings goal."""
    goal_add_command(name, target, current, target_date, category, description)


@goal_app.command(name="status")
def goal_status(
    hide_completed: bool = typer.Option(False, "--hide-completed", help="Only show active goals"),
) -> None:
    """Show progress towards your goals."""
    goal_status_command(not hide_completed)


@goal_app.command(name="contribute")
def goal_contribute(goal_id: int, amount: str) -> None:
    """Add savings to a goal."""
    goal_contribute_command(goal_id, amount)


@goal_app.command(name="complete")
def goal_complete(goal_id: int) -> None:
    """Mark a goal as completed."""
    goal_complete_command(goal_id)


@goal_app.command(name="delete")
def goal_delete(goal_id: int) -> None:
    """Delete a goal."""
    goal_delete_command(goal_id)


@config_app.command(name="show")
def config_show() -> None:
    """Show current settings."""
    config_show_command()


@config_app.command(name="set")
def config_set(key: str, value: str) -> None:
    """Change a setting."""
    config_set_command(key, value)


if __name__ == "__main__":
    app()
