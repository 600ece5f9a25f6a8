"""Domain type definitions for fintrack.

These NewTypes provide semantic clarity and help with type checking:
- Money: Monetary amount in major units (e.g. 12.50)
- Month: Month in YYYY-MM format
- CategoryName: Name of a spending or income category
- Description: Transaction description text
"""

from typing import NewType

# Amounts are kept exactly as recorded; JSON export round-trips them via repr
Money = NewType("Money", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

# Category name used for filtering, budgets and reports
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)
