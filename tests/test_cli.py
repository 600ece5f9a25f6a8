"""Tests for the fintrack command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fintrack.cli import app
from fintrack.config import get_config_path
from fintrack.store.files import get_ledger_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data directories at a temporary location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


def stored_state() -> dict:
    return json.loads(get_ledger_path().read_text())


def add_scenario() -> None:
    for args in (
        ["income", "5000", "Salary", "Pay"],
        ["income", "500", "Bonus", "Bonus"],
        ["expense", "300", "Food", "Dinner"],
        ["expense", "150", "Transport", "Metro"],
        ["expense", "200", "Fun", "Cinema"],
        ["expense", "100", "Food", "Lunch"],
    ):
        result = runner.invoke(app, ["add", *args])
        assert result.exit_code == 0, result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_ledger_and_config(self) -> None:
        """Should create both files."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert get_ledger_path().exists()
        assert get_config_path().exists()
        assert stored_state() == {"next_id": 1, "transactions": []}

    def test_refuses_to_overwrite(self) -> None:
        """Should require --force when files exist."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force_resets_ledger(self) -> None:
        """Should overwrite with --force."""
        runner.invoke(app, ["init"])
        runner.invoke(app, ["add", "income", "10", "Gift", "Card"])

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert stored_state() == {"next_id": 1, "transactions": []}


class TestTransactions:
    """Tests for add, list and delete."""

    def test_add_persists_transaction(self) -> None:
        """Should save the transaction to the ledger file."""
        result = runner.invoke(app, ["add", "expense", "12.5", "Food", "Lunch", "--date", "18/01/2025"])

        assert result.exit_code == 0
        assert "[#1] expense ¥12.50 - Food (Lunch)" in result.output
        (entry,) = stored_state()["transactions"]
        assert entry["amount"] == 12.5
        assert entry["date"].startswith("2025-01-18")

    def test_deleted_id_not_reused_after_reload(self) -> None:
        """Should keep counting past a deleted last id across invocations."""
        runner.invoke(app, ["add", "income", "10", "Gift", "Card"])
        runner.invoke(app, ["add", "expense", "5", "Food", "Snack"])
        runner.invoke(app, ["delete", "2"])

        result = runner.invoke(app, ["add", "expense", "7", "Food", "Tea"])

        assert result.exit_code == 0
        assert "[#3]" in result.output
        assert [entry["id"] for entry in stored_state()["transactions"]] == [1, 3]

    def test_reads_legacy_list_file(self) -> None:
        """Should load a ledger file holding a bare transaction list."""
        runner.invoke(app, ["add", "income", "10", "Gift", "Card"])
        get_ledger_path().write_text(json.dumps(stored_state()["transactions"]))

        result = runner.invoke(app, ["add", "expense", "5", "Food", "Snack"])

        assert result.exit_code == 0
        assert "[#2]" in result.output
        assert stored_state()["next_id"] == 3

    def test_add_invalid_kind(self) -> None:
        """Should report the validation error and exit 1."""
        result = runner.invoke(app, ["add", "transfer", "10", "x", "y"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not get_ledger_path().exists()

    def test_add_zero_amount(self) -> None:
        """Should reject a zero amount."""
        result = runner.invoke(app, ["add", "expense", "0", "x", "y"])

        assert result.exit_code == 1

    def test_add_unparseable_date(self) -> None:
        """Should reject a --date that cannot be parsed."""
        result = runner.invoke(app, ["add", "expense", "5", "x", "y", "--date", "not-a-date"])

        assert result.exit_code == 1
        assert "Could not parse date" in result.output

    def test_list_filters(self) -> None:
        """Should filter by kind, category and month."""
        add_scenario()
        runner.invoke(app, ["add", "expense", "40", "Food", "Old", "--date", "2020-06-01"])

        food = runner.invoke(app, ["list", "--category", "Food"])
        income = runner.invoke(app, ["list", "--kind", "income"])
        june = runner.invoke(app, ["list", "--month", "2020-06"])

        assert "Transactions (3)" in food.output
        assert "Transactions (2)" in income.output
        assert "Transactions (1)" in june.output
        assert "Old" in june.output

    def test_list_empty(self) -> None:
        """Should say when nothing matches."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No transactions found" in result.output

    def test_list_invalid_kind(self) -> None:
        """Should reject an unknown kind filter."""
        result = runner.invoke(app, ["list", "--kind", "transfer"])

        assert result.exit_code == 1

    def test_delete(self) -> None:
        """Should delete existing ids and fail for missing ones."""
        add_scenario()

        deleted = runner.invoke(app, ["delete", "1"])
        again = runner.invoke(app, ["delete", "1"])

        assert deleted.exit_code == 0
        assert "Deleted" in deleted.output
        assert again.exit_code == 1
        assert "not found" in again.output
        assert [entry["id"] for entry in stored_state()["transactions"]] == [2, 3, 4, 5, 6]
        assert stored_state()["next_id"] == 7


class TestReports:
    """Tests for summary, chart and trend."""

    def test_summary(self) -> None:
        """Should show totals and balance."""
        add_scenario()

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0
        assert "¥5500.00" in result.output
        assert "¥750.00" in result.output
        assert "¥4750.00" in result.output

    def test_summary_with_malformed_budgets(self) -> None:
        """Should report a budgets entry that is not a table and exit 1."""
        add_scenario()
        get_config_path().parent.mkdir(parents=True, exist_ok=True)
        get_config_path().write_text("budgets = 5\n")

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "must be a table" in result.output

    def test_summary_negative_balance(self) -> None:
        """Should show a negative balance after deleting the salary."""
        add_scenario()
        runner.invoke(app, ["delete", "1"])

        result = runner.invoke(app, ["summary"])

        assert "-¥250.00" in result.output

    def test_chart(self) -> None:
        """Should show each category's percentage."""
        add_scenario()

        result = runner.invoke(app, ["chart"])

        assert result.exit_code == 0
        assert "53%" in result.output
        assert "20%" in result.output
        assert "27%" in result.output

    def test_chart_without_expenses(self) -> None:
        """Should print the no-expenses message."""
        result = runner.invoke(app, ["chart"])

        assert "No expenses recorded" in result.output

    def test_trend(self) -> None:
        """Should show the requested number of months."""
        add_scenario()

        result = runner.invoke(app, ["trend", "--months", "2"])

        assert result.exit_code == 0
        assert "Monthly trend (2 months)" in result.output

    def test_trend_zero_months(self) -> None:
        """Should show nothing for an empty window."""
        result = runner.invoke(app, ["trend", "--months", "0"])

        assert "No months to show" in result.output


class TestBudget:
    """Tests for the budget command."""

    def test_set_and_status(self) -> None:
        """Should save the budget and report usage."""
        add_scenario()

        set_result = runner.invoke(app, ["budget", "--category", "Food", "--amount", "500"])
        status = runner.invoke(app, ["budget"])

        assert set_result.exit_code == 0
        assert "80%" in set_result.output
        assert "Budget status" in status.output
        assert "¥100.00" in status.output

    def test_invalid_amount(self) -> None:
        """Should reject non-positive budgets."""
        result = runner.invoke(app, ["budget", "--category", "Food", "--amount", "0"])

        assert result.exit_code == 1

    def test_requires_both_options(self) -> None:
        """Should need a category and an amount together."""
        result = runner.invoke(app, ["budget", "--category", "Food"])

        assert result.exit_code == 1

    def test_no_budgets(self) -> None:
        """Should explain how to set a budget."""
        result = runner.invoke(app, ["budget"])

        assert "No budgets set" in result.output


class TestExportImport:
    """Tests for export, import and backup."""

    def test_export_to_file_and_import(self, tmp_path: Path) -> None:
        """Should round trip through a file."""
        add_scenario()
        export_path = tmp_path / "export.json"

        exported = runner.invoke(app, ["export", "--output", str(export_path)])
        runner.invoke(app, ["init", "--force"])
        imported = runner.invoke(app, ["import", str(export_path)])

        assert exported.exit_code == 0
        assert imported.exit_code == 0
        assert stored_state()["transactions"] == json.loads(export_path.read_text())
        assert stored_state()["next_id"] == 7

    def test_export_to_stdout(self) -> None:
        """Should print JSON when no output file is given."""
        add_scenario()

        result = runner.invoke(app, ["export"])

        assert [entry["id"] for entry in json.loads(result.output)] == [1, 2, 3, 4, 5, 6]

    def test_bad_import_leaves_ledger(self, tmp_path: Path) -> None:
        """Should fail without changing the saved ledger."""
        add_scenario()
        before = get_ledger_path().read_text()
        bad = tmp_path / "bad.json"
        bad.write_text('{"not": "a list"}')

        result = runner.invoke(app, ["import", str(bad)])

        assert result.exit_code == 1
        assert "Import failed" in result.output
        assert get_ledger_path().read_text() == before

    def test_backup(self, tmp_path: Path) -> None:
        """Should copy the ledger and config into the backup directory."""
        runner.invoke(app, ["init"])
        backup_dir = tmp_path / "backups"

        result = runner.invoke(app, ["backup", "--output", str(backup_dir)])

        assert result.exit_code == 0
        assert len(list(backup_dir.glob("ledger_*.json"))) == 1
        assert len(list(backup_dir.glob("config_*.toml"))) == 1

    def test_backup_without_ledger(self) -> None:
        """Should fail when there is nothing to back up."""
        result = runner.invoke(app, ["backup"])

        assert result.exit_code == 1
