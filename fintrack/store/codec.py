"""JSON export and import of transaction records and ledger files."""

import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from fintrack.domain.errors import LedgerImportError, ValidationError
from fintrack.domain.transactions import Clock, Transaction, transaction_from_dict, transaction_to_dict


def export_transactions(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions to indented JSON, preserving their order."""
    return json.dumps([transaction_to_dict(txn) for txn in transactions], indent=2, ensure_ascii=False)


def _load_payload(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise LedgerImportError(f"Import payload is not valid JSON: {e}") from e


def decode_transactions(payload: Any, now: Clock = datetime.now) -> list[Transaction]:
    """Validate every entry of an already-parsed list of transaction dicts.

    Raises:
        LedgerImportError: If payload is not a list, an entry is not an
            object, an entry fails validation, or two entries share an id.
    """
    if not isinstance(payload, list):
        raise LedgerImportError(f"Import payload must be a list of transactions, got {type(payload).__name__}")

    transactions: list[Transaction] = []
    seen_ids: set[int] = set()
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise LedgerImportError(f"Entry {index} is not an object")
        try:
            txn = transaction_from_dict(entry, now=now)
        except ValidationError as e:
            raise LedgerImportError(f"Entry {index} is invalid: {e}") from e
        if txn.id in seen_ids:
            raise LedgerImportError(f"Entry {index} reuses transaction id {txn.id}")
        seen_ids.add(txn.id)
        transactions.append(txn)

    return transactions


def import_transactions(text: str, now: Clock = datetime.now) -> list[Transaction]:
    """Decode and validate every transaction in an exported payload.

    Nothing is returned unless every entry is valid, so callers can replace
    their records in one step.

    Args:
        text: JSON as produced by export_transactions.
        now: Clock used for entries whose stored date is invalid.

    Returns:
        Transactions in payload order.

    Raises:
        LedgerImportError: If the payload is not valid JSON, is not a list,
            or any entry fails validation.
    """
    return decode_transactions(_load_payload(text), now=now)


def export_ledger_state(transactions: Iterable[Transaction], next_id: int) -> str:
    """Serialize a ledger file: the transactions plus the id counter.

    The counter is stored so that ids freed by deletes are never handed out
    again after a reload.
    """
    state = {
        "next_id": next_id,
        "transactions": [transaction_to_dict(txn) for txn in transactions],
    }
    return json.dumps(state, indent=2, ensure_ascii=False)


def import_ledger_state(text: str, now: Clock = datetime.now) -> tuple[list[Transaction], int]:
    """Decode a ledger file written by export_ledger_state.

    A bare transaction list (the export format) is accepted as well; its
    counter is derived from the highest id.

    Returns:
        Tuple of (transactions, next_id). next_id is never lower than the
        highest stored id plus one.

    Raises:
        LedgerImportError: If the file is not valid JSON, has the wrong
            shape, carries an invalid counter, or any entry is invalid.
    """
    payload = _load_payload(text)

    stored_next_id = 1
    if isinstance(payload, dict):
        if "transactions" not in payload or "next_id" not in payload:
            raise LedgerImportError("Ledger file must have 'next_id' and 'transactions'")
        stored_next_id = payload["next_id"]
        if isinstance(stored_next_id, bool) or not isinstance(stored_next_id, int) or stored_next_id <= 0:
            raise LedgerImportError(f"Ledger next_id must be a positive integer, got {stored_next_id!r}")
        payload = payload["transactions"]

    transactions = decode_transactions(payload, now=now)
    highest = max((txn.id for txn in transactions), default=0)
    return transactions, max(stored_next_id, highest + 1)
