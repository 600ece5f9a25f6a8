"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no files, no console)
- No side effects
- Pure data transformations
- Easy to test
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from fintrack.dates import month_key, trailing_months
from fintrack.domain.budget import round_half_up
from fintrack.domain.models import CategoryName, Money, Month
from fintrack.domain.transactions import Transaction, TransactionKind

NO_EXPENSES = "No expenses recorded"
CHART_HEADING = "Expense distribution:"
CHART_GLYPH = "%"
PERCENT_PER_GLYPH = 5


@dataclass(frozen=True)
class TrendBucket:
    """Immutable income and expense totals for one month."""

    income: Money
    expense: Money


@dataclass(frozen=True)
class ChartLine:
    """Immutable chart row for a single expense category."""

    category: CategoryName
    amount: Money
    percentage: int
    bar_length: int


def calculate_total(transactions: Iterable[Transaction], kind: TransactionKind) -> Money:
    """Sum the amounts of all transactions of one kind (0 if none)."""
    return Money(sum(txn.amount for txn in transactions if txn.kind is kind))


def calculate_expense_by_category(transactions: Iterable[Transaction]) -> dict[CategoryName, Money]:
    """Sum expenses per category.

    Categories appear in the order of their first expense. Categories with
    only income are absent rather than present with 0.
    """
    totals: dict[CategoryName, Money] = {}
    for txn in transactions:
        if txn.kind is TransactionKind.EXPENSE:
            totals[txn.category] = Money(totals.get(txn.category, 0) + txn.amount)
    return totals


def calculate_bar_length(percentage: int) -> int:
    """Calculate chart bar length: one glyph per five percent, rounded down."""
    return max(percentage, 0) // PERCENT_PER_GLYPH


def create_chart_lines(expenses: dict[CategoryName, Money]) -> list[ChartLine]:
    """Compute percentage share and bar length for each expense category.

    Percentages are rounded independently so they need not sum to 100.

    Args:
        expenses: Dictionary of category expense totals.

    Returns:
        ChartLine per category in the dictionary's order, or an empty list
        when total expense is zero.
    """
    total = sum(expenses.values())
    if total <= 0:
        return []

    lines: list[ChartLine] = []
    for category, amount in expenses.items():
        percentage = round_half_up(amount / total * 100)
        lines.append(
            ChartLine(
                category=category,
                amount=amount,
                percentage=percentage,
                bar_length=calculate_bar_length(percentage),
            )
        )
    return lines


def render_expense_chart(expenses: dict[CategoryName, Money]) -> str:
    """Render the expense distribution as plain text.

    Returns:
        NO_EXPENSES when there is nothing to chart, otherwise a heading
        followed by one "<category> <bar> <pct>%" line per category.
    """
    lines = create_chart_lines(expenses)
    if not lines:
        return NO_EXPENSES

    rows = [CHART_HEADING]
    rows.extend(f"{line.category} {CHART_GLYPH * line.bar_length} {line.percentage}%" for line in lines)
    return "\n".join(rows) + "\n"


def calculate_monthly_trend(
    transactions: Iterable[Transaction],
    now: datetime,
    months_back: int = 6,
) -> dict[Month, TrendBucket]:
    """Bucket income and expense totals by calendar month.

    Args:
        transactions: All recorded transactions.
        now: Reference time; its month is the newest bucket.
        months_back: Number of months in the window (<= 0 gives {}).

    Returns:
        Dictionary of YYYY-MM -> TrendBucket, newest month first.
        Transactions outside the window are ignored.
    """
    income: dict[Month, Money] = {}
    expense: dict[Month, Money] = {}
    for month in trailing_months(now, months_back):
        income[month] = Money(0)
        expense[month] = Money(0)

    for txn in transactions:
        key = month_key(txn.date)
        if key not in income:
            continue
        if txn.kind is TransactionKind.INCOME:
            income[key] = Money(income[key] + txn.amount)
        else:
            expense[key] = Money(expense[key] + txn.amount)

    return {month: TrendBucket(income=income[month], expense=expense[month]) for month in income}
