"""Report commands for viewing totals, the expense chart and monthly trends."""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fintrack.config import get_budgets, load_config
from fintrack.dates import month_range
from fintrack.domain.report import create_chart_lines
from fintrack.domain.transactions import format_amount
from fintrack.store.files import load_ledger

console = Console()


def summary_command() -> None:
    """Show total income, total expense, balance and spending by category."""
    try:
        config = load_config()
        currency = config["currency"]
        ledger = load_ledger(budgets=get_budgets())

        console.print(f"[bold green]Total income:[/bold green]  {format_amount(ledger.total_income(), currency)}")
        console.print(f"[bold red]Total expense:[/bold red] {format_amount(ledger.total_expense(), currency)}")

        balance = ledger.balance()
        colour = "red" if balance < 0 else "cyan"
        sign = "-" if balance < 0 else ""
        console.print(f"[bold {colour}]Balance:[/bold {colour}]       {sign}{format_amount(abs(balance), currency)}")

        expenses = ledger.expense_by_category()
        if expenses:
            console.print("\n[bold red]Expenses by category:[/bold red]\n")
            for category, amount in expenses.items():
                console.print(f"  {escape(category):20} {format_amount(amount, currency):>12}")

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


def chart_command() -> None:
    """Show each category's share of total expense as a bar chart."""
    try:
        ledger = load_ledger(budgets=get_budgets())
        lines = create_chart_lines(ledger.expense_by_category())

        if not lines:
            console.print(f"[dim]{ledger.expense_chart()}[/dim]")
            return

        console.print("[bold red]Expense distribution:[/bold red]\n")
        for line in lines:
            bar = "█" * line.bar_length
            console.print(f"  {escape(line.category):20} {bar:20} {line.percentage:>3}%")

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


def trend_command(months: int | None = None) -> None:
    """Show income and expense per month, newest month first."""
    try:
        config = load_config()
        currency = config["currency"]
        months_back = months if months is not None else config["trend_months"]
        ledger = load_ledger(budgets=get_budgets())

        trend = ledger.monthly_trend(months_back)
        if not trend:
            console.print("[yellow]No months to show[/yellow]")
            return

        table = Table(title=f"Monthly trend ({len(trend)} months)")
        table.add_column("Month", style="cyan")
        table.add_column("Income", justify="right", style="green")
        table.add_column("Expense", justify="right", style="red")
        table.add_column("Net", justify="right")

        for month, bucket in trend.items():
            _, _, label = month_range(month)
            net = bucket.income - bucket.expense
            net_display = f"[red]-{format_amount(abs(net), currency)}[/red]" if net < 0 else format_amount(net, currency)
            table.add_row(
                label,
                format_amount(bucket.income, currency),
                format_amount(bucket.expense, currency),
                net_display,
            )

        console.print(table)

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
