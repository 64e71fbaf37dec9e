"""Transaction management commands (add, list, delete, categories)."""

import logging
import re
import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finsight.commands.formatting import currency_symbol, format_money, normalize_date
from finsight.domain.analytics import filter_transactions
from finsight.domain.models import TRANSACTION_TYPES, CategoryName
from finsight.domain.parsing import parse_decimal
from finsight.store.queries import (
    add_category,
    delete_transaction,
    get_all_categories,
    get_transactions,
    insert_transaction,
)
from finsight.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def add_command(
    amount: str,
    description: str,
    type: str = "expense",
    category: str | None = None,
    date_str: str | None = None,
) -> None:
    """Record an income or expense transaction.

    Args:
        amount: Positive amount in major units.
        description: Transaction description.
        type: "income" or "expense".
        category: Optional category name (created if it doesn't exist).
        date_str: Transaction date in any common format. Defaults to today.
    """
    db_path = get_db_path()

    if type not in TRANSACTION_TYPES:
        console.print(f"[red]Invalid type '{escape(type)}'. Use 'income' or 'expense'.[/red]")
        sys.exit(1)

    value = parse_decimal(amount)
    if value <= 0:
        console.print("[red]Amount must be positive[/red]")
        sys.exit(1)

    try:
        normalized_date = normalize_date(date_str) if date_str else date.today().isoformat()
    except ValueError as e:
        console.print(f"[red]Invalid date format: {escape(str(e))}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    try:
        category_name = CategoryName(category) if category else None
        if category_name is not None:
            known = {c["name"] for c in get_all_categories(db_path)}
            if category_name not in known:
                add_category(category_name, type, db_path=db_path)
                console.print(f"[green]✓[/green] Created {type} category: {escape(category_name)}")

        txn_id = insert_transaction(normalized_date, description, value, type, category_name, db_path)
        logger.debug("Inserted transaction %s", txn_id)

        console.print(f"[green]✓[/green] Transaction {txn_id} added:")
        console.print(f"  Date: {normalized_date}")
        console.print(f"  Description: {escape(description)}")
        console.print(f"  Amount: {format_money(value, decimals=2)} ({type})")
        if category_name:
            console.print(f"  Category: {escape(category_name)}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def list_command(
    search: str = "",
    type: str = "all",
    limit: int = 50,
    all: bool = False,
) -> None:
    """List transactions, newest first."""
    db_path = get_db_path()

    if type != "all" and type not in TRANSACTION_TYPES:
        console.print(f"[red]Invalid type '{escape(type)}'. Use 'all', 'income' or 'expense'.[/red]")
        sys.exit(1)

    try:
        transactions = filter_transactions(get_transactions(db_path, newest_first=True), search, type)
        if not all:
            transactions = transactions[:limit]

        if not transactions:
            console.print("[yellow]No transactions found[/yellow]")
            return

        symbol = currency_symbol()
        noun = "transaction" if len(transactions) == 1 else "transactions"
        table = Table(title=f"{len(transactions)} {noun} found")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Description", style="white")
        table.add_column("Category", style="magenta")
        table.add_column("Amount", justify="right")

        for txn in transactions:
            amount_text = format_money(txn.amount, symbol, decimals=2)
            if txn.type == "income":
                amount_display = f"[green]+{amount_text}[/green]"
            else:
                amount_display = f"[red]-{amount_text}[/red]"

            category = escape(txn.category_name) if txn.category_name else "[dim]-[/dim]"
            table.add_row(str(txn.id), txn.date, escape(txn.description), category, amount_display)

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def delete_command(transaction_id: int) -> None:
    """Delete a transaction by ID."""
    db_path = get_db_path()

    try:
        if not delete_transaction(transaction_id, db_path):
            console.print(f"[red]Transaction {transaction_id} not found[/red]")
            sys.exit(1)
        console.print(f"[green]✓[/green] Deleted transaction {transaction_id}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def category_add_command(name: str, type: str = "expense", color: str | None = None) -> None:
    """Create or update a category."""
    db_path = get_db_path()

    if type not in TRANSACTION_TYPES:
        console.print(f"[red]Invalid type '{escape(type)}'. Use 'income' or 'expense'.[/red]")
        sys.exit(1)

    if color is not None and not HEX_COLOR.match(color):
        console.print(f"[red]Invalid colour '{escape(color)}'. Use a hex colour like #EF4444.[/red]")
        sys.exit(1)

    try:
        add_category(CategoryName(name), type, color, db_path)
        console.print(f"[green]✓[/green] Saved {type} category: {escape(name)}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def category_list_command() -> None:
    """List categories."""
    db_path = get_db_path()

    try:
        categories = get_all_categories(db_path)
        if not categories:
            console.print("[yellow]No categories yet[/yellow]")
            return

        table = Table(title="Categories")
        table.add_column("Name", style="magenta")
        table.add_column("Type")
        table.add_column("Colour", style="dim")
        for cat in categories:
            table.add_row(escape(cat["name"]), cat["type"], cat["color"] or "-")
        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
