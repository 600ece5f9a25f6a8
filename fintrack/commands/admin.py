"""Admin commands for init, export, import and backup."""

import shutil
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from fintrack.config import create_default_config, get_budgets, get_config_path
from fintrack.store.files import get_ledger_path, load_ledger, save_ledger
from fintrack.store.ledger import Ledger

console = Console()


def init_command(force: bool = False) -> None:
    """Initialize fintrack configuration and an empty ledger."""
    ledger_path = get_ledger_path()
    config_path = get_config_path()

    ledger_exists = ledger_path.exists()
    config_exists = config_path.exists()

    # Guard: refuse to overwrite without force flag
    if not force and (ledger_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if ledger_exists:
            console.print(f"  Ledger already exists: {ledger_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'fintrack init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating ledger at {ledger_path}...[/cyan]")
        save_ledger(Ledger(), ledger_path)
        console.print("[green]✓[/green] Ledger created")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def export_command(output: str | None = None) -> None:
    """Export all transactions as JSON to a file or stdout."""
    try:
        ledger = load_ledger(budgets=get_budgets())
        payload = ledger.export_json()

        if output is None:
            print(payload)
            return

        output_path = Path(output).expanduser()
        output_path.write_text(payload, encoding="utf-8")
        console.print(f"[green]✓[/green] Exported {len(ledger.list_all())} transactions to {output_path}")

    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)


def import_command(source: str) -> None:
    """Replace all transactions with those in an exported JSON file."""
    source_path = Path(source).expanduser()

    try:
        ledger = load_ledger(budgets=get_budgets())
        replaced = len(ledger.list_all())

        ledger.import_json(source_path.read_text(encoding="utf-8"))
        save_ledger(ledger)

        console.print(f"[green]✓[/green] Imported {len(ledger.list_all())} transactions from {source_path}")
        console.print(f"[dim]Replaced {replaced} existing transactions; next id is {ledger.next_id}[/dim]")

    except ValueError as e:
        console.print(f"[red]Import failed: {escape(str(e))}[/red]", style="bold")
        console.print("[dim]Ledger left unchanged[/dim]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def backup_command(output_dir: str | None = None) -> None:
    """Backup the ledger and configuration files."""
    ledger_path = get_ledger_path()
    config_path = get_config_path()

    if not ledger_path.exists():
        console.print("[red]Ledger not found. Run 'fintrack init' first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = get_ledger_path().parent / "backups"

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    ledger_backup = backup_dir / f"ledger_{timestamp}.json"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        shutil.copy2(ledger_path, ledger_backup)
        console.print(f"[green]✓[/green] Ledger backed up to: {ledger_backup}")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)
