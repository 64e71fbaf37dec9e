"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from finsight.store.queries import (
    add_budget,
    add_category,
    add_goal,
    complete_goal,
    contribute_to_goal,
    deactivate_budget,
    delete_budget,
    delete_goal,
    delete_transaction,
    get_all_categories,
    get_budgets,
    get_goal,
    get_goals,
    get_transactions,
    insert_transaction,
)
from finsight.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "add_budget",
    "add_category",
    "add_goal",
    "complete_goal",
    "contribute_to_goal",
    "deactivate_budget",
    "delete_budget",
    "delete_goal",
    "delete_transaction",
    "get_all_categories",
    "get_budgets",
    "get_goal",
    "get_goals",
    "get_transactions",
    "insert_transaction",
]
