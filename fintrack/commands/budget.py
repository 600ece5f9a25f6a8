"""Budget command for managing monthly category budgets."""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fintrack.config import get_budgets, load_config
from fintrack.config import set_budget as save_budget
from fintrack.domain.budget import BudgetReport
from fintrack.domain.transactions import format_amount
from fintrack.store.files import load_ledger

console = Console()


def format_budget_display_with_color(percentage: int) -> str:
    """Format budget usage with color based on percentage.

    Args:
        percentage: Budget usage percentage.

    Returns:
        Colored string for budget display.
    """
    budget_text = f"{percentage}%"
    if percentage > 100:
        return f"[red]{budget_text}[/red]"
    elif percentage > 90:
        return f"[yellow]{budget_text}[/yellow]"
    else:
        return f"[green]{budget_text}[/green]"


def render_budget_table(reports: list[BudgetReport], currency: str) -> Table:
    """Build the budget status table."""
    table = Table(title="Budget status")
    table.add_column("Category", style="magenta")
    table.add_column("Budget", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Used", justify="right")

    for report in reports:
        if report.remaining < 0:
            remaining_display = f"[red]-{format_amount(abs(report.remaining), currency)}[/red]"
        else:
            remaining_display = format_amount(report.remaining, currency)

        table.add_row(
            escape(report.category),
            format_amount(report.budget, currency),
            format_amount(report.spent, currency),
            remaining_display,
            format_budget_display_with_color(report.percentage),
        )

    return table


def show_budget_status() -> None:
    """Display status for every configured budget."""
    config = load_config()
    ledger = load_ledger(budgets=get_budgets())
    reports = ledger.all_budget_reports()

    if not reports:
        console.print("[yellow]No budgets set. Use 'fintrack budget --category NAME --amount N'[/yellow]")
        return

    console.print(render_budget_table(reports, config["currency"]))


def set_category_budget(category: str, amount: float) -> None:
    """Set a category budget and show its status against current spending."""
    config = load_config()
    save_budget(category, amount)

    ledger = load_ledger(budgets=get_budgets())
    check = ledger.check_budget(category)

    console.print(f"[green]✓[/green] Budget for {escape(category)} set to {format_amount(check.budget, config['currency'])}")
    console.print(
        f"  Spent {format_amount(check.spent, config['currency'])} "
        f"({format_budget_display_with_color(check.percentage)})"
    )


def budget_command(
    category: str | None = None,
    amount: float | None = None,
    status: bool = False,
) -> None:
    """Set category budgets or show budget status."""
    try:
        if category is not None or amount is not None:
            if category is None or amount is None:
                console.print("[red]Both --category and --amount are required to set a budget[/red]")
                sys.exit(1)
            set_category_budget(category, amount)
            if not status:
                return

        show_budget_status()

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
