"""In-memory ledger owning transaction records, budgets and the id counter.

The ledger is the only thing that mutates its state. Every query returns a
fresh list or dictionary so callers can never reach the internal storage.
It is not thread-safe; callers sharing one across threads must lock around it.
"""

from datetime import datetime

from fintrack.dates import parse_timestamp, to_naive_local
from fintrack.domain.budget import (
    BudgetCheck,
    BudgetReport,
    calculate_category_spent,
    compute_budget_check,
    compute_budget_reports,
    validate_budget_amount,
)
from fintrack.domain.errors import ValidationError
from fintrack.domain.models import CategoryName, Money, Month
from fintrack.domain.report import (
    TrendBucket,
    calculate_expense_by_category,
    calculate_monthly_trend,
    calculate_total,
    render_expense_chart,
)
from fintrack.domain.transactions import Clock, Transaction, TransactionKind, create_transaction, parse_kind
from fintrack.store.codec import (
    export_ledger_state,
    export_transactions,
    import_ledger_state,
    import_transactions,
)


class Ledger:
    """Personal finance ledger of income and expense transactions."""

    def __init__(self, clock: Clock = datetime.now) -> None:
        self._clock = clock
        self._records: list[Transaction] = []
        self._next_id = 1
        self._budgets: dict[CategoryName, Money] = {}

    def _now(self) -> datetime:
        return to_naive_local(self._clock())

    @property
    def next_id(self) -> int:
        """Identifier the next added transaction will receive."""
        return self._next_id

    # CRUD

    def add(
        self,
        kind: object,
        amount: object,
        category: str,
        description: str,
        date: object = None,
    ) -> Transaction:
        """Validate and record a transaction, assigning the next id.

        Amounts must be int or float; other numeric types such as Decimal
        are rejected rather than converted.

        Raises:
            ValidationError: If kind or amount is invalid. The ledger is
                left unchanged.
        """
        txn = create_transaction(self._next_id, kind, amount, category, description, date, now=self._clock)
        self._next_id += 1
        self._records.append(txn)
        return txn

    def list_all(self) -> list[Transaction]:
        """Return all transactions in insertion order."""
        return list(self._records)

    def get(self, transaction_id: int) -> Transaction | None:
        """Find a transaction by id."""
        return next((txn for txn in self._records if txn.id == transaction_id), None)

    def delete(self, transaction_id: int) -> bool:
        """Remove a transaction by id.

        Returns:
            True if a transaction was removed, False if no transaction had that id.
        """
        for index, txn in enumerate(self._records):
            if txn.id == transaction_id:
                del self._records[index]
                return True
        return False

    # Aggregation and filtering

    def total_income(self) -> Money:
        return calculate_total(self._records, TransactionKind.INCOME)

    def total_expense(self) -> Money:
        return calculate_total(self._records, TransactionKind.EXPENSE)

    def balance(self) -> Money:
        """Total income minus total expense (may be negative)."""
        return Money(self.total_income() - self.total_expense())

    def by_category(self, category: str) -> list[Transaction]:
        """Transactions whose category matches exactly (case-sensitive)."""
        return [txn for txn in self._records if txn.category == category]

    def by_kind(self, kind: object) -> list[Transaction]:
        txn_kind = parse_kind(kind)
        return [txn for txn in self._records if txn.kind is txn_kind]

    def expense_by_category(self) -> dict[CategoryName, Money]:
        return calculate_expense_by_category(self._records)

    def by_date_range(self, start: object, end: object) -> list[Transaction]:
        """Transactions dated within [start, end], both ends inclusive.

        Raises:
            ValidationError: If start or end is not a valid timestamp.
        """
        start_at = parse_timestamp(start)
        if start_at is None:
            raise ValidationError(f"Invalid start timestamp: {start!r}")
        end_at = parse_timestamp(end)
        if end_at is None:
            raise ValidationError(f"Invalid end timestamp: {end!r}")
        return [txn for txn in self._records if start_at <= txn.date <= end_at]

    # Budgets

    def set_budget(self, category: str, amount: object) -> None:
        """Set or replace the monthly budget for a category.

        Raises:
            ValidationError: If amount is not a finite number greater than zero.
        """
        self._budgets[CategoryName(category)] = validate_budget_amount(amount)

    def budgets(self) -> dict[CategoryName, Money]:
        return dict(self._budgets)

    def check_budget(self, category: str) -> BudgetCheck:
        """Budget, spent, remaining and percentage used for a category."""
        name = CategoryName(category)
        budget = self._budgets.get(name, Money(0))
        return compute_budget_check(budget, calculate_category_spent(self._records, name))

    def all_budget_reports(self) -> list[BudgetReport]:
        return compute_budget_reports(self._budgets, self._records)

    # Reporting

    def expense_chart(self) -> str:
        return render_expense_chart(self.expense_by_category())

    def monthly_trend(self, months_back: int = 6) -> dict[Month, TrendBucket]:
        """Income and expense per month for the trailing window ending this month."""
        return calculate_monthly_trend(self._records, self._now(), months_back)

    # Import / export

    def export_json(self) -> str:
        return export_transactions(self._records)

    def import_json(self, text: str) -> None:
        """Replace all transactions with those in an exported payload.

        The import is all-or-nothing; budgets are kept.

        Raises:
            LedgerImportError: If the payload or any entry is invalid.
        """
        transactions = import_transactions(text, now=self._clock)
        self._records = transactions
        self._next_id = max((txn.id for txn in transactions), default=0) + 1

    def dump_state(self) -> str:
        """Serialize transactions and the id counter for the ledger file."""
        return export_ledger_state(self._records, self._next_id)

    def load_state(self, text: str) -> None:
        """Restore transactions and the id counter from a ledger file.

        Raises:
            LedgerImportError: If the file content is invalid. The ledger is
                left unchanged.
        """
        transactions, next_id = import_ledger_state(text, now=self._clock)
        self._records = transactions
        self._next_id = next_id
