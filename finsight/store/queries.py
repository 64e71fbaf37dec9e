"""Database query functions.

Rows are returned as domain records with amounts converted from minor units
(paise) to major units.
"""

import sqlite3
from pathlib import Path
from typing import Any

from finsight.domain.analytics import TransactionRecord
from finsight.domain.models import Amount, CategoryName
from finsight.domain.progress import BudgetRecord, GoalRecord
from finsight.store.schema import get_db_path

_TRANSACTION_SELECT = """
    SELECT t.id, t.date, t.description, t.amount, t.type, t.category, c.color
    FROM transactions t
    LEFT JOIN categories c ON c.name = t.category
"""


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def to_minor(amount: float) -> int:
    """Convert a major-unit amount to integer minor units."""
    return round(amount * 100)


def from_minor(amount: int) -> Amount:
    """Convert integer minor units to a major-unit amount."""
    return Amount(amount / 100)


def _transaction_from_row(row: sqlite3.Row) -> TransactionRecord:
    return TransactionRecord(
        id=row["id"],
        date=row["date"],
        description=row["description"],
        amount=from_minor(row["amount"]),
        type=row["type"],
        category_name=CategoryName(row["category"]) if row["category"] else None,
        category_color=row["color"],
    )


def _budget_from_row(row: sqlite3.Row) -> BudgetRecord:
    return BudgetRecord(
        id=row["id"],
        name=row["name"],
        amount=from_minor(row["amount"]),
        period=row["period"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        category_name=CategoryName(row["category"]) if row["category"] else None,
        is_active=bool(row["is_active"]),
    )


def _goal_from_row(row: sqlite3.Row) -> GoalRecord:
    return GoalRecord(
        id=row["id"],
        name=row["name"],
        target_amount=from_minor(row["target_amount"]),
        current_amount=from_minor(row["current_amount"]),
        target_date=row["target_date"],
        category=row["category"],
        description=row["description"],
        is_completed=bool(row["is_completed"]),
    )


def add_category(
    name: CategoryName,
    type: str = "expense",
    color: str | None = None,
    db_path: Path | None = None,
) -> None:
    """Add a category, or update its type and colour if it exists.

    Args:
        name: Category name.
        type: "income" or "expense".
        color: Optional display colour (e.g. "#EF4444").
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO categories (name, type, color) VALUES (?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET type = excluded.type, color = excluded.color
                """,
                (name, type, color),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def get_all_categories(db_path: Path | None = None, type: str | None = None) -> list[dict[str, Any]]:
    """Get all categories.

    Args:
        db_path: Path to the database file. If None, uses default location.
        type: Optional "income" or "expense" filter.

    Returns:
        List of category dictionaries (name, type, color) ordered by name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT name, type, color FROM categories"
        params: list[Any] = []
        if type:
            query += " WHERE type = ?"
            params.append(type)
        query += " ORDER BY name"
        cursor.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]


def insert_transaction(
    date: str,
    description: str,
    amount: float,
    type: str,
    category: CategoryName | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert a transaction.

    Args:
        date: Transaction date (YYYY-MM-DD).
        description: Transaction description.
        amount: Positive amount in major units.
        type: "income" or "expense".
        category: Optional category name.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO transactions (date, description, amount, type, category) VALUES (?, ?, ?, ?, ?)",
                (date, description, to_minor(amount), type, category),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_transactions(
    db_path: Path | None = None,
    since_date: str | None = None,
    until_date: str | None = None,
    type: str | None = None,
    limit: int | None = None,
    newest_first: bool = False,
) -> list[TransactionRecord]:
    """Get transactions, optionally filtered.

    Args:
        db_path: Path to the database file. If None, uses default location.
        since_date: Optional first date (YYYY-MM-DD), inclusive.
        until_date: Optional last date (YYYY-MM-DD), inclusive.
        type: Optional "income" or "expense" filter.
        limit: Maximum number of transactions to return. If None, returns all.
        newest_first: Order by date descending instead of ascending.

    Returns:
        List of TransactionRecord with category colours joined in.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = _TRANSACTION_SELECT + " WHERE 1 = 1"
        params: list[Any] = []

        if since_date:
            query += " AND t.date >= ?"
            params.append(since_date)
        if until_date:
            query += " AND t.date <= ?"
            params.append(until_date)
        if type:
            query += " AND t.type = ?"
            params.append(type)

        order = "DESC" if newest_first else "ASC"
        query += f" ORDER BY t.date {order}, t.id {order}"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [_transaction_from_row(row) for row in cursor.fetchall()]


def delete_transaction(txn_id: int, db_path: Path | None = None) -> bool:
    """Delete a transaction.

    Args:
        txn_id: Transaction ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a transaction was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _execute_write("DELETE FROM transactions WHERE id = ?", (txn_id,), db_path) > 0


def add_budget(
    name: str,
    amount: float,
    start_date: str,
    end_date: str,
    period: str = "monthly",
    category: CategoryName | None = None,
    db_path: Path | None = None,
) -> int:
    """Create an active budget.

    Args:
        name: Budget name.
        amount: Spending limit in major units.
        start_date: First day covered (YYYY-MM-DD).
        end_date: Last day covered (YYYY-MM-DD), inclusive.
        period: "weekly", "monthly" or "yearly".
        category: Optional category the budget tracks.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new budget.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO budgets (name, amount, period, category, start_date, end_date, is_active)
                VALUES (?, ?, ?, ?, ?, ?, 1)
                """,
                (name, to_minor(amount), period, category, start_date, end_date),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_budgets(db_path: Path | None = None, active_only: bool = True) -> list[BudgetRecord]:
    """Get budgets.

    Args:
        db_path: Path to the database file. If None, uses default location.
        active_only: Only return active budgets.

    Returns:
        List of BudgetRecord ordered by ID.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT * FROM budgets"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY id"
        cursor.execute(query)
        return [_budget_from_row(row) for row in cursor.fetchall()]


def deactivate_budget(budget_id: int, db_path: Path | None = None) -> bool:
    """Mark a budget inactive.

    Returns:
        True if a budget was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _execute_write("UPDATE budgets SET is_active = 0 WHERE id = ?", (budget_id,), db_path) > 0


def delete_budget(budget_id: int, db_path: Path | None = None) -> bool:
    """Delete a budget.

    Returns:
        True if a budget was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _execute_write("DELETE FROM budgets WHERE id = ?", (budget_id,), db_path) > 0


def add_goal(
    name: str,
    target_amount: float,
    current_amount: float = 0.0,
    target_date: str | None = None,
    category: str = "general",
    description: str | None = None,
    db_path: Path | None = None,
) -> int:
    """Create a savings goal.

    Args:
        name: Goal name.
        target_amount: Amount to reach in major units.
        current_amount: Amount saved so far.
        target_date: Optional target date (YYYY-MM-DD).
        category: Goal category (e.g. "emergency").
        description: Optional description.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new goal.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO goals (name, description, target_amount, current_amount, target_date, category)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (name, description, to_minor(target_amount), to_minor(current_amount), target_date, category),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_goals(db_path: Path | None = None) -> list[GoalRecord]:
    """Get all goals, newest first.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM goals ORDER BY id DESC")
        return [_goal_from_row(row) for row in cursor.fetchall()]


def get_goal(goal_id: int, db_path: Path | None = None) -> GoalRecord | None:
    """Get a single goal by ID.

    Returns:
        GoalRecord, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM goals WHERE id = ?", (goal_id,))
        row = cursor.fetchone()
        return _goal_from_row(row) if row else None


def contribute_to_goal(goal_id: int, amount: float, db_path: Path | None = None) -> bool:
    """Add to a goal's saved amount.

    Returns:
        True if a goal was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return (
        _execute_write(
            "UPDATE goals SET current_amount = current_amount + ? WHERE id = ?",
            (to_minor(amount), goal_id),
            db_path,
        )
        > 0
    )


def complete_goal(goal_id: int, db_path: Path | None = None) -> bool:
    """Mark a goal completed.

    Returns:
        True if a goal was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _execute_write("UPDATE goals SET is_completed = 1 WHERE id = ?", (goal_id,), db_path) > 0


def delete_goal(goal_id: int, db_path: Path | None = None) -> bool:
    """Delete a goal.

    Returns:
        True if a goal was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _execute_write("DELETE FROM goals WHERE id = ?", (goal_id,), db_path) > 0


def _execute_write(query: str, params: tuple[Any, ...], db_path: Path | None) -> int:
    """Run a single write statement and return the affected row count."""
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(query, params)
            conn.commit()
            return cursor.rowcount
        except sqlite3.Error:
            conn.rollback()
            raise
