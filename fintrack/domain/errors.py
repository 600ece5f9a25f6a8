"""Errors raised by the fintrack core."""


class ValidationError(ValueError):
    """Raised when a transaction, budget or query argument is invalid."""


class LedgerImportError(ValueError):
    """Raised when an exported ledger payload cannot be imported."""
