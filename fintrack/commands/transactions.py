"""Transaction management commands (add, list, delete)."""

import sys
from datetime import datetime

import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fintrack.config import get_budgets, load_config
from fintrack.dates import month_range
from fintrack.domain.models import Month
from fintrack.domain.transactions import Transaction, TransactionKind, format_amount, render_transaction
from fintrack.store.files import load_ledger, save_ledger

console = Console()


def parse_date_option(raw_date: str) -> datetime:
    """Parse a user-supplied date into a datetime.

    Uses pandas.to_datetime so ISO, European and American styles are all
    accepted; ambiguous day/month orders are read day first.

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        parsed = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed.to_pydatetime()


def format_signed_amount(txn: Transaction, currency: str) -> str:
    """Format amount with sign and colour for display."""
    amount_display = format_amount(txn.amount, currency)
    if txn.kind is TransactionKind.EXPENSE:
        return f"[red]-{amount_display}[/red]"
    return f"[green]+{amount_display}[/green]"


def add_command(
    kind: str,
    amount: float,
    category: str,
    description: str,
    date: str | None = None,
) -> None:
    """Record an income or expense transaction.

    Args:
        kind: "income" or "expense".
        amount: Positive amount.
        category: Category name.
        description: Transaction description.
        date: Optional date (YYYY-MM-DD, DD/MM/YYYY, or other formats). Defaults to now.
    """
    try:
        config = load_config()
        txn_date = parse_date_option(date) if date else None

        ledger = load_ledger(budgets=get_budgets())
        txn = ledger.add(kind, amount, category, description, txn_date)
        save_ledger(ledger)

        console.print("[green]✓[/green] Transaction added:")
        console.print(f"  {escape(render_transaction(txn, config['currency']))}")
        console.print(f"  [dim]Date: {txn.date:%Y-%m-%d %H:%M}[/dim]")

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def select_transactions(
    kind: str | None,
    category: str | None,
    month: str | None,
    since: str | None,
    until: str | None,
) -> list[Transaction]:
    """Load the ledger and apply the list filters.

    Raises:
        ValidationError: If kind is invalid.
        ValueError: If a date or month filter cannot be parsed.
    """
    ledger = load_ledger(budgets=get_budgets())

    if month:
        start, end, _ = month_range(Month(month))
        transactions = ledger.by_date_range(start, end)
    elif since or until:
        start = parse_date_option(since) if since else datetime.min
        end = parse_date_option(until) if until else datetime.max
        transactions = ledger.by_date_range(start, end)
    else:
        transactions = ledger.list_all()

    if kind:
        kind_ids = {txn.id for txn in ledger.by_kind(kind)}
        transactions = [txn for txn in transactions if txn.id in kind_ids]

    if category:
        category_ids = {txn.id for txn in ledger.by_category(category)}
        transactions = [txn for txn in transactions if txn.id in category_ids]

    return transactions


def list_command(
    kind: str | None = None,
    category: str | None = None,
    month: str | None = None,
    since: str | None = None,
    until: str | None = None,
) -> None:
    """List transactions in the order they were recorded."""
    try:
        config = load_config()
        transactions = select_transactions(kind, category, month, since, until)

        if not transactions:
            console.print("[yellow]No transactions found[/yellow]")
            return

        table = Table(title=f"Transactions ({len(transactions)})")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Kind")
        table.add_column("Amount", justify="right")
        table.add_column("Category", style="magenta")
        table.add_column("Description", style="white")

        total = 0.0
        for txn in transactions:
            total += txn.amount if txn.kind is TransactionKind.INCOME else -txn.amount
            table.add_row(
                str(txn.id),
                f"{txn.date:%Y-%m-%d}",
                txn.kind.value,
                format_signed_amount(txn, config["currency"]),
                escape(txn.category),
                escape(txn.description),
            )

        console.print(table)

        if total < 0:
            total_display = f"[red]-{format_amount(abs(total), config['currency'])}[/red]"
        else:
            total_display = f"[green]+{format_amount(total, config['currency'])}[/green]"

        console.print(f"\n[bold]Net:[/bold] {total_display}")

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


def delete_command(transaction_id: int) -> None:
    """Delete a transaction by id."""
    try:
        config = load_config()
        ledger = load_ledger(budgets=get_budgets())

        txn = ledger.get(transaction_id)
        if txn is None or not ledger.delete(transaction_id):
            console.print(f"[red]Transaction {transaction_id} not found[/red]")
            sys.exit(1)

        save_ledger(ledger)
        console.print(f"[green]✓[/green] Deleted: {escape(render_transaction(txn, config['currency']))}")

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
