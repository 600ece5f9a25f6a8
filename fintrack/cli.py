"""CLI entry point for fintrack."""

import typer

from fintrack.commands.admin import backup_command, export_command, import_command, init_command
from fintrack.commands.budget import budget_command
from fintrack.commands.report import chart_command, summary_command, trend_command
from fintrack.commands.transactions import add_command, delete_command, list_command

app = typer.Typer(
    name="fintrack",
    help="fintrack - a personal income and expense ledger",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """fintrack - a personal income and expense ledger."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing ledger and config"),
) -> None:
    """Initialize fintrack ledger and configuration."""
    init_command(force)


@app.command()
def add(
    kind: str = typer.Argument(..., help="'income' or 'expense'"),
    amount: float = typer.Argument(..., help="Positive amount"),
    category: str = typer.Argument(..., help="Category, e.g. Food"),
    description: str = typer.Argument(..., help="What it was for"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: now)"),
) -> None:
    """Record an income or expense transaction."""
    add_command(kind, amount, category, description, date)


@app.command(name="list")
def list_transactions(
    kind: str = typer.Option(None, "--kind", "-k", help="Only 'income' or 'expense'"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    since: str = typer.Option(None, "--since", help="From this date (inclusive)"),
    until: str = typer.Option(None, "--until", help="Up to this date (inclusive)"),
) -> None:
    """List your transactions."""
    list_command(kind, category, month, since, until)


@app.command()
def delete(
    transaction_id: int = typer.Argument(..., help="Transaction ID (from 'fintrack list')"),
) -> None:
    """Delete a transaction."""
    delete_command(transaction_id)


@app.command()
def summary() -> None:
    """Show your income, spending and balance."""
    summary_command()


@app.command()
def chart() -> None:
    """Show how your spending splits across categories."""
    chart_command()


@app.command()
def trend(
    months: int = typer.Option(None, "--months", "-m", help="Months to show (default from config)"),
) -> None:
    """Show your income and spending per month."""
    trend_command(months)


@app.command()
def budget(
    category: str = typer.Option(None, "--category", "-c", help="Category to budget for"),
    amount: float = typer.Option(None, "--amount", help="Monthly budget amount"),
    status: bool = typer.Option(False, "--status", help="Show budget status after setting"),
) -> None:
    """Set monthly category budgets and show how much is left."""
    budget_command(category, amount, status)


@app.command(name="export")
def export(
    output: str = typer.Option(None, "--output", "-o", help="File to write (default: stdout)"),
) -> None:
    """Export your transactions as JSON."""
    export_command(output)


@app.command(name="import")
def import_(
    source: str = typer.Argument(..., help="JSON file produced by 'fintrack export'"),
) -> None:
    """Replace your transactions with an exported JSON file."""
    import_command(source)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the ledger)"),
) -> None:
    """Backup your ledger and configuration files."""
    backup_command(output_dir)


if __name__ == "__main__":
    app()
