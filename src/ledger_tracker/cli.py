import typer
from pathlib import Path
from contextlib import contextmanager
from typing import Generator, Optional
from datetime import date

from rich.console import Console

from ledger_tracker.config.settings import LedgerSettings
from ledger_tracker.database.connection import DatabaseConfig, DatabaseManager
from ledger_tracker.domain.enums import Category, TransactionType
from ledger_tracker.domain.models import TransactionForm
from ledger_tracker.logging_utils import configure_logging
from ledger_tracker.parsers.excel_workbook import ExcelWorkbookCodec
from ledger_tracker.repositories.base import StorageError
from ledger_tracker.repositories.sqlite_storage import SQLiteKeyValueStorage
from ledger_tracker.services.exceptions import LedgerError
from ledger_tracker.services.ledger_service import LedgerService
from ledger_tracker.services.ledger_store import LedgerStore
from ledger_tracker.views.console import RichConsoleView
from ledger_tracker.views.formatting import CurrencyFormatter

app = typer.Typer(
    name="ledger-tracker",
    help="Track your income and expenses",
    add_completion=False,
)

console = Console()

class State:
    verbose: bool = False
    db_path: Optional[str] = None
    settings: Optional[LedgerSettings] = None


state = State()

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
    db_path: Optional[str] = typer.Option(
        None,
        "--db",
        help="Path to the ledger database (overrides LEDGER_TRACKER_DB)",
    ),
):
    """
    Ledger Tracker - Record transactions and watch your balance.
    """
    configure_logging("DEBUG" if verbose else None)
    state.verbose = verbose
    state.db_path = db_path
    state.settings = None

def _settings() -> LedgerSettings:
    if state.settings is None:
        state.settings = LedgerSettings.load(db_path=state.db_path)
    return state.settings

@contextmanager
def _session(
    assume_yes: bool = False,
    load: bool = True,
) -> Generator[tuple[LedgerService, RichConsoleView], None, None]:
    """
    Wire storage, view and codec together for one command.

    With load=False the stored ledger is not read, so commands that
    discard it still work when it is unreadable.
    """
    settings = _settings()
    formatter = CurrencyFormatter(settings.locale, settings.currency)
    view = RichConsoleView(formatter, console=console, assume_yes=assume_yes)

    with DatabaseManager(DatabaseConfig(settings.db_path)) as db_manager:
        store = LedgerStore(SQLiteKeyValueStorage(db_manager), key=settings.storage_key)

        service = LedgerService(
            store,
            view,
            ExcelWorkbookCodec(),
            formatter=formatter,
            sheet_name=settings.sheet_name,
            theme_key=settings.theme_key,
        )
        if load:
            service.start()
        yield service, view

def _fail(e: Exception):
    console.print(f"[bold red]Error:[/bold red] {e}")
    if state.verbose:
        console.print_exception()
    raise typer.Exit(code=1)

@app.command(name="add")
def add_transaction(
    title: str = typer.Option("", "--title", "-t", help="What the transaction was for"),
    amount: str = typer.Option("", "--amount", "-a", help="Positive amount"),
    transaction_type: Optional[str] = typer.Option(
        None,
        "--type",
        help=f"One of: {', '.join(t.value for t in TransactionType)}",
    ),
    category: str = typer.Option(
        "",
        "--category", "-c",
        help=f"One of: {', '.join(Category.labels())}",
    ),
    on_date: Optional[str] = typer.Option(
        None,
        "--date", "-d",
        help="Date as YYYY-MM-DD (defaults to today)",
    ),
):
    """
    Add an income or expense transaction.

    Examples:
        ledger-tracker add -t Salary -a 5000 --type income -c salary
        ledger-tracker add -t Groceries -a 200 --type expense -c food -d 2024-01-02
    """
    try:
        with _session() as (service, view):
            form = TransactionForm(
                title=title,
                amount=amount,
                type=transaction_type,
                category=category,
                date=on_date or date.today().isoformat(),
            )
            transaction = service.add_transaction(form)
            view.refresh()
            console.print(f"[bold green]✓ Added[/bold green] {transaction.title} (#{transaction.id})")
    except (LedgerError, StorageError) as e:
        _fail(e)

@app.command(name="delete")
def delete_transaction(
    transaction_id: int = typer.Argument(..., help="Id shown in the transaction list"),
):
    """Delete a transaction by id."""
    try:
        with _session() as (service, view):
            deleted = service.delete_transaction(transaction_id)
            view.refresh()
            if deleted:
                console.print(f"[bold green]✓ Deleted[/bold green] transaction #{transaction_id}")
            else:
                console.print(f"[yellow]No transaction with id {transaction_id}[/yellow]")
    except (LedgerError, StorageError) as e:
        _fail(e)

@app.command(name="list")
def list_transactions(
    search: str = typer.Option("", "--search", "-s", help="Only show titles containing this text"),
):
    """
    Show the dashboard, optionally filtered by title.

    Examples:
        ledger-tracker list
        ledger-tracker list --search groc
    """
    try:
        with _session() as (service, view):
            if search:
                matches = service.search(search)
                view.refresh()
                console.print(f"\n[dim]{len(matches)} of {len(service.transactions)} transactions match '{search}'[/dim]")
            else:
                view.refresh()
    except (LedgerError, StorageError) as e:
        _fail(e)

@app.command(name="summary")
def show_summary():
    """Print balance, income and expense totals."""
    try:
        with _session() as (service, view):
            summary = service.summary()
            formatter = view.formatter
            console.print(f"Balance: {formatter.format(summary.balance)}")
            console.print(f"Income:  {formatter.format(summary.income)}")
            console.print(f"Expense: {formatter.format(summary.expense)}")
    except (LedgerError, StorageError) as e:
        _fail(e)

@app.command(name="reset")
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
):
    """Delete every transaction."""
    try:
        with _session(assume_yes=yes, load=False) as (service, view):
            if service.reset():
                view.refresh()
                console.print("[bold green]✓ All data reset[/bold green]")
            else:
                console.print("[yellow]Reset cancelled[/yellow]")
    except (LedgerError, StorageError) as e:
        _fail(e)

@app.command(name="export")
def export_transactions(
    filepath: Optional[Path] = typer.Argument(
        None,
        help="Destination .xlsx file",
        dir_okay=False,
    ),
):
    """
    Export the ledger to an Excel workbook.

    Examples:
        ledger-tracker export
        ledger-tracker export backups/ledger.xlsx
    """
    try:
        with _session() as (service, _):
            result = service.export_workbook(filepath or Path(_settings().export_filename))
            console.print(f"[bold green]✓ {result}[/bold green]")
    except (LedgerError, StorageError) as e:
        _fail(e)

@app.command(name="import")
def import_transactions(
    filepath: Path = typer.Argument(
        ...,
        help="Excel workbook to import (replaces the current ledger)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Replace the ledger with the rows of an Excel workbook.

    Examples:
        ledger-tracker import transactions.xlsx
    """
    try:
        with _session() as (service, view):
            result = service.import_workbook_sync(filepath)
            view.refresh()
            console.print(str(result))
    except (LedgerError, StorageError) as e:
        _fail(e)

@app.command(name="theme")
def toggle_theme():
    """Switch between light and dark mode."""
    try:
        with _session() as (service, view):
            dark = service.toggle_theme()
            view.refresh()
            console.print(f"[bold]{'🌙 Dark' if dark else '☀️ Light'} mode[/bold]")
    except (LedgerError, StorageError) as e:
        _fail(e)


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
