"""Domain type definitions for finsight.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Money in major currency units (e.g. rupees)
- Month: Month in YYYY-MM format
- CategoryName: Name of a transaction category
"""

from typing import Literal, NewType

# Amounts are major units. The store keeps minor units and converts on read.
Amount = NewType("Amount", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

TransactionType = Literal["income", "expense"]

TRANSACTION_TYPES: frozenset[str] = frozenset({"income", "expense"})

UNCATEGORIZED = CategoryName("Uncategorized")

DEFAULT_CATEGORY_COLOR = "#8B5CF6"
