"""Pure functions for budget calculations.

This module contains the functional core for budget operations:
- No I/O operations (no files, no console)
- No side effects
- Pure data transformations
- Easy to test
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from fintrack.domain.models import CategoryName, Money
from fintrack.domain.transactions import Transaction, TransactionKind, validate_amount


@dataclass(frozen=True)
class BudgetCheck:
    """Immutable budget status for a single category."""

    budget: Money
    spent: Money
    remaining: Money  # Negative when overspent
    percentage: int


@dataclass(frozen=True)
class BudgetReport:
    """Immutable budget status tagged with its category."""

    category: CategoryName
    budget: Money
    spent: Money
    remaining: Money
    percentage: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def validate_budget_amount(amount: object) -> Money:
    """Validate a monthly budget amount.

    Raises:
        ValidationError: If amount is not a finite number greater than zero.
    """
    return validate_amount(amount, label="Budget")


def calculate_category_spent(transactions: Iterable[Transaction], category: CategoryName) -> Money:
    """Sum expense amounts recorded against a category."""
    return Money(
        sum(txn.amount for txn in transactions if txn.category == category and txn.kind is TransactionKind.EXPENSE)
    )


def calculate_budget_percentage(spent: Money, budget: Money) -> int:
    """Calculate percentage of budget used.

    Args:
        spent: Amount spent.
        budget: Budget amount.

    Returns:
        Rounded percentage (0-100+), or 0 when no budget is set.
    """
    if budget <= 0:
        return 0
    return round_half_up(spent / budget * 100)


def compute_budget_check(budget: Money, spent: Money) -> BudgetCheck:
    """Compute budget, spent, remaining and percentage for one category."""
    return BudgetCheck(
        budget=budget,
        spent=spent,
        remaining=Money(budget - spent),
        percentage=calculate_budget_percentage(spent, budget),
    )


def compute_budget_reports(
    budgets: dict[CategoryName, Money],
    transactions: Iterable[Transaction],
) -> list[BudgetReport]:
    """Compute a report for every category with a configured budget.

    Args:
        budgets: Category budgets, in the order they were first set.
        transactions: All recorded transactions.

    Returns:
        List of BudgetReport in budget order.
    """
    records = list(transactions)
    reports: list[BudgetReport] = []

    for category, budget in budgets.items():
        check = compute_budget_check(budget, calculate_category_spent(records, category))
        reports.append(
            BudgetReport(
                category=category,
                budget=check.budget,
                spent=check.spent,
                remaining=check.remaining,
                percentage=check.percentage,
            )
        )

    return reports
