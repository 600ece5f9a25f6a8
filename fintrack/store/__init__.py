"""Ledger store layer - owns transaction state for the application.

This module re-exports the public store API for easy importing.
"""

from fintrack.store.codec import export_ledger_state, export_transactions, import_ledger_state, import_transactions
from fintrack.store.files import get_ledger_path, ledger_exists, load_ledger, save_ledger
from fintrack.store.ledger import Ledger

__all__ = [
    # Ledger
    "Ledger",
    # Codec
    "export_ledger_state",
    "export_transactions",
    "import_ledger_state",
    "import_transactions",
    # Files
    "get_ledger_path",
    "ledger_exists",
    "load_ledger",
    "save_ledger",
]
