"""Pure functions for transaction construction, validation and formatting.

This module contains the functional core for transaction records:
- No I/O operations (no files, no console)
- No side effects; the current time comes from an injected clock
- Pure data transformations
- Easy to test
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from fintrack.dates import parse_timestamp, to_naive_local
from fintrack.domain.errors import ValidationError
from fintrack.domain.models import CategoryName, Description, Money

Clock = Callable[[], datetime]

DEFAULT_CURRENCY = "¥"

RECORD_FIELDS = ("id", "kind", "amount", "category", "description", "date")


class TransactionKind(str, Enum):
    """Whether a transaction brings money in or takes it out."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: int
    kind: TransactionKind
    amount: Money
    category: CategoryName
    description: Description
    date: datetime

    def __str__(self) -> str:
        return render_transaction(self)


def parse_kind(kind: object) -> TransactionKind:
    """Resolve a transaction kind, accepting only the exact enum values.

    Args:
        kind: A TransactionKind or the literal string "income" / "expense".

    Returns:
        The matching TransactionKind.

    Raises:
        ValidationError: If kind is anything else (matching is case-sensitive).
    """
    if isinstance(kind, TransactionKind):
        return kind
    if isinstance(kind, str):
        for member in TransactionKind:
            if kind == member.value:
                return member
    raise ValidationError(f"Kind must be 'income' or 'expense', got {kind!r}")


def is_positive_amount(amount: object) -> bool:
    """Check that amount is a finite int or float strictly greater than zero.

    Other numeric types (Decimal, Fraction) are rejected: amounts must
    round-trip through JSON unchanged.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return math.isfinite(amount) and amount > 0


def validate_amount(amount: object, label: str = "Amount") -> Money:
    """Validate a positive amount.

    Args:
        amount: Candidate amount.
        label: Name used in the error message.

    Returns:
        The amount as Money.

    Raises:
        ValidationError: If amount is not a finite number greater than zero.
    """
    if not is_positive_amount(amount):
        raise ValidationError(f"{label} must be a positive int or float, got {amount!r}")
    return Money(amount)  # type: ignore[arg-type]


def create_transaction(
    id: int,
    kind: object,
    amount: object,
    category: str,
    description: str,
    date: object = None,
    now: Clock = datetime.now,
) -> Transaction:
    """Build a validated transaction.

    Kind and amount are hard failures. A missing or unparseable date is not:
    it is replaced with the clock's current time.

    Args:
        id: Identifier assigned by the ledger.
        kind: "income", "expense" or a TransactionKind.
        amount: Positive finite number.
        category: Free-form category label.
        description: Free-form description.
        date: Optional timestamp (datetime, date or ISO string).
        now: Clock used when date is missing or invalid. Aware times are
            stored as naive local time.

    Returns:
        The immutable Transaction.

    Raises:
        ValidationError: If kind or amount is invalid.
    """
    txn_kind = parse_kind(kind)
    txn_amount = validate_amount(amount)
    txn_date = parse_timestamp(date)

    return Transaction(
        id=id,
        kind=txn_kind,
        amount=txn_amount,
        category=CategoryName(category),
        description=Description(description),
        date=txn_date if txn_date is not None else to_naive_local(now()),
    )


def format_amount(amount: Money, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount with exactly two decimals (e.g. "¥5000.00")."""
    return f"{currency}{amount:.2f}"


def render_transaction(txn: Transaction, currency: str = DEFAULT_CURRENCY) -> str:
    """Render a transaction as a single human-readable line.

    Example: "[#3] expense ¥300.00 - Food (Weekend dinner)"
    """
    return f"[#{txn.id}] {txn.kind.value} {format_amount(txn.amount, currency)} - {txn.category} ({txn.description})"


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Convert a transaction to a JSON-serialisable dictionary."""
    return {
        "id": txn.id,
        "kind": txn.kind.value,
        "amount": txn.amount,
        "category": txn.category,
        "description": txn.description,
        "date": txn.date.isoformat(),
    }


def transaction_from_dict(data: dict[str, Any], now: Clock = datetime.now) -> Transaction:
    """Rebuild a transaction from its dictionary form, re-validating it.

    Args:
        data: Dictionary as produced by transaction_to_dict.
        now: Clock used if the stored date is invalid.

    Returns:
        The reconstructed Transaction.

    Raises:
        ValidationError: If fields are missing, the id is not a positive
            integer, category or description is not a string, or
            kind/amount are invalid.
    """
    missing = [name for name in RECORD_FIELDS if name not in data]
    if missing:
        raise ValidationError(f"Transaction record is missing fields: {', '.join(missing)}")

    txn_id = data["id"]
    if isinstance(txn_id, bool) or not isinstance(txn_id, int) or txn_id <= 0:
        raise ValidationError(f"Transaction id must be a positive integer, got {txn_id!r}")

    for name in ("category", "description"):
        if not isinstance(data[name], str):
            raise ValidationError(f"Transaction {name} must be a string, got {data[name]!r}")

    return create_transaction(
        txn_id,
        data["kind"],
        data["amount"],
        data["category"],
        data["description"],
        data["date"],
        now=now,
    )
