"""Domain models and types for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from fintrack.domain.errors import LedgerImportError, ValidationError
from fintrack.domain.models import CategoryName, Description, Money, Month

__all__ = ["Money", "Month", "CategoryName", "Description", "ValidationError", "LedgerImportError"]
