"""Savings goal commands."""

import logging
import sqlite3
import sys
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finsight.commands.budget import render_progress_bar
from finsight.commands.formatting import (
    currency_symbol,
    describe_days_remaining,
    format_money,
    format_percentage,
    normalize_date,
)
from finsight.domain.parsing import parse_decimal
from finsight.domain.progress import GOAL_COLORS, GoalRecord, goal_color, goal_progress, partition_goals
from finsight.store.queries import add_goal, complete_goal, contribute_to_goal, delete_goal, get_goal, get_goals
from finsight.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)


def goal_add_command(
    name: str,
    target: str,
    current: str = "0",
    target_date: str | None = None,
    category: str = "general",
    description: str | None = None,
) -> None:
    """Create a savings goal."""
    db_path = get_db_path()

    if category not in GOAL_COLORS:
        console.print(f"[red]Invalid category '{escape(category)}'. Use one of: {', '.join(GOAL_COLORS)}[/red]")
        sys.exit(1)

    target_amount = parse_decimal(target)
    if target_amount <= 0:
        console.print("[red]Target amount must be positive[/red]")
        sys.exit(1)

    try:
        normalized_date = normalize_date(target_date) if target_date else None
    except ValueError as e:
        console.print(f"[red]Invalid date format: {escape(str(e))}[/red]")
        sys.exit(1)

    try:
        goal_id = add_goal(
            name,
            target_amount,
            parse_decimal(current),
            normalized_date,
            category,
            description,
            db_path,
        )
        logger.debug("Inserted goal %s", goal_id)
        console.print(f"[green]✓[/green] Goal {goal_id} created: {escape(name)} ({format_money(target_amount)})")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def _goal_table(title: str, goals: list[GoalRecord], now: datetime, symbol: str, completed: bool) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Goal")
    table.add_column("Saved", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress")
    table.add_column("Due", style="dim")

    for goal in goals:
        progress = goal_progress(goal, now)
        color = goal_color(goal.category)
        due = "[green]Completed[/green]" if completed else describe_days_remaining(progress.days_remaining)
        table.add_row(
            str(goal.id),
            f"[{color}]{escape(goal.name)}[/{color}] [dim]({goal.category})[/dim]",
            format_money(progress.current_amount, symbol),
            format_money(progress.target_amount, symbol),
            f"{render_progress_bar(progress.percentage, color)} {format_percentage(progress.percentage)}",
            due,
        )

    return table


def goal_status_command(show_completed: bool = True) -> None:
    """Show progress towards every goal."""
    db_path = get_db_path()

    try:
        goals = get_goals(db_path)
        logger.debug("Loaded %d goals", len(goals))
        if not goals:
            console.print("[yellow]No goals yet. Create one with 'finsight goal add'.[/yellow]")
            return

        now = datetime.now()
        symbol = currency_symbol()
        active, completed = partition_goals(goals)

        if active:
            console.print(_goal_table("Active Goals", active, now, symbol, completed=False))
        else:
            console.print("[dim]No active goals[/dim]")

        if show_completed and completed:
            console.print(_goal_table("Completed Goals", completed, now, symbol, completed=True))

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def goal_contribute_command(goal_id: int, amount: str) -> None:
    """Add savings to a goal."""
    db_path = get_db_path()

    value = parse_decimal(amount)
    if value <= 0:
        console.print("[red]Amount must be positive[/red]")
        sys.exit(1)

    try:
        if not contribute_to_goal(goal_id, value, db_path):
            console.print(f"[red]Goal {goal_id} not found[/red]")
            sys.exit(1)

        goal = get_goal(goal_id, db_path)
        logger.debug("Goal after contribution: %s", goal)
        assert goal is not None
        progress = goal_progress(goal, datetime.now())
        console.print(f"[green]✓[/green] Added {format_money(value)} to {escape(goal.name)}")
        console.print(
            f"  {format_money(progress.current_amount)} of {format_money(progress.target_amount)} "
            f"({format_percentage(progress.percentage)})"
        )
        if progress.percentage >= 100 and not goal.is_completed:
            console.print(f"[cyan]Target reached! Mark it done with 'finsight goal complete {goal_id}'[/cyan]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def goal_complete_command(goal_id: int) -> None:
    """Mark a goal completed."""
    db_path = get_db_path()

    try:
        if not complete_goal(goal_id, db_path):
            console.print(f"[red]Goal {goal_id} not found[/red]")
            sys.exit(1)
        console.print(f"[green]✓[/green] Goal {goal_id} marked as completed")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def goal_delete_command(goal_id: int) -> None:
    """Delete a goal permanently."""
    db_path = get_db_path()

    try:
        if not delete_goal(goal_id, db_path):
            console.print(f"[red]Goal {goal_id} not found[/red]")
            sys.exit(1)
        console.print(f"[green]✓[/green] Goal {goal_id} deleted")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
