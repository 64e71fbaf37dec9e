"""Domain models and types for finsight.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Financial formulas and aggregations separated from infrastructure
"""

from finsight.domain.models import Amount, CategoryName, Month, TransactionType

__all__ = ["Amount", "Month", "CategoryName", "TransactionType"]
