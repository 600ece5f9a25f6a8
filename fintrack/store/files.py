"""Ledger file location and load/save helpers for the command line host."""

import os
from datetime import datetime
from pathlib import Path

from fintrack.domain.models import CategoryName, Money
from fintrack.domain.transactions import Clock
from fintrack.store.ledger import Ledger


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_ledger_path() -> Path:
    """Get the default ledger file path (XDG compliant)."""
    return get_xdg_data_home() / "fintrack" / "ledger.json"


def ledger_exists(ledger_path: Path | None = None) -> bool:
    """Check if the ledger file exists.

    Args:
        ledger_path: Path to check. If None, uses default location.
    """
    if ledger_path is None:
        ledger_path = get_ledger_path()
    return ledger_path.exists()


def load_ledger(
    ledger_path: Path | None = None,
    budgets: dict[CategoryName, Money] | None = None,
    clock: Clock = datetime.now,
) -> Ledger:
    """Load a ledger from its file.

    Args:
        ledger_path: Path to the ledger file. If None, uses default location.
        budgets: Budgets to apply, in order (budgets are kept in config).
        clock: Clock for the ledger.

    Returns:
        The populated Ledger. A missing file yields an empty ledger.

    Raises:
        LedgerImportError: If the file content is not a valid ledger file.
        ValidationError: If a budget amount is invalid.
    """
    if ledger_path is None:
        ledger_path = get_ledger_path()

    ledger = Ledger(clock=clock)
    if ledger_path.exists():
        ledger.load_state(ledger_path.read_text(encoding="utf-8"))

    for category, amount in (budgets or {}).items():
        ledger.set_budget(category, amount)

    return ledger


def save_ledger(ledger: Ledger, ledger_path: Path | None = None) -> None:
    """Write the ledger's transactions and id counter to its file.

    Args:
        ledger: Ledger to save.
        ledger_path: Path to the ledger file. If None, uses default location.
    """
    if ledger_path is None:
        ledger_path = get_ledger_path()

    ledger_path.parent.mkdir(parents=True, exist_ok=True)
    ledger_path.write_text(ledger.dump_state(), encoding="utf-8")
    os.chmod(ledger_path, 0o600)
