import asyncio
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ledger_tracker.domain.enums import TransactionType
from ledger_tracker.domain.models import Transaction, TransactionForm
from ledger_tracker.logging_utils import get_logger
from ledger_tracker.parsers.base import Record, WorkbookCodec
from ledger_tracker.services.exceptions import EmptyLedgerError, ValidationError
from ledger_tracker.services.ledger_store import LedgerStore
from ledger_tracker.services.models import ExportResult, ImportResult, Summary
from ledger_tracker.services.summary import summarize
from ledger_tracker.views.base import LedgerView
from ledger_tracker.views.chart import DoughnutChart
from ledger_tracker.views.formatting import CurrencyFormatter
from ledger_tracker.views.presenter import TransactionRow, build_row, build_rows

logger = get_logger(__name__)

EXPORT_COLUMNS = ("ID", "Title", "Amount", "Type", "Category", "Date")

class LedgerService:
    """
    Command handlers for the ledger.

    Every mutating command follows the same order: change the store,
    persist it, then re-render through the view.
    """

    def __init__(
        self,
        store: LedgerStore,
        view: LedgerView,
        codec: WorkbookCodec,
        formatter: Optional[CurrencyFormatter] = None,
        chart: Optional[DoughnutChart] = None,
        sheet_name: str = "Transactions",
        theme_key: str = "theme",
    ):
        self.store = store
        self.view = view
        self.codec = codec
        self.formatter = formatter or CurrencyFormatter()
        self.chart = chart or DoughnutChart()
        self.sheet_name = sheet_name
        self.theme_key = theme_key
        self._rows: List[TransactionRow] = []
        self._import_lock: Optional[asyncio.Lock] = None
        self._import_loop: Optional[asyncio.AbstractEventLoop] = None

    def start(self) -> Summary:
        """Load the ledger and the theme, then draw everything"""
        self.store.load()
        self.view.apply_theme(self.is_dark_theme())
        return self._render_all()

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self.store.transactions

    def summary(self) -> Summary:
        return summarize(self.store.transactions)

    def add_transaction(self, form: TransactionForm) -> Transaction:
        """
        Validate the form and append a new transaction.

        Args:
            form: Form state; reset after a successful add

        Returns:
            The transaction that was added

        Raises:
            ValidationError: If a field is missing or invalid. Nothing changes.
        """
        title, amount, transaction_type, category, display_date = self._validate(form)

        transaction = Transaction(
            id=self.store.next_id(),
            title=title,
            amount=amount,
            type=transaction_type,
            category=category,
            date=display_date,
        )

        self.store.append(transaction)
        self.store.persist()

        row = build_row(transaction, self.formatter)
        self._rows.insert(0, row)
        self.view.prepend_row(row)
        self._refresh_summary()

        form.reset()

        logger.info("Added transaction %s", transaction)
        return transaction

    def delete_transaction(self, transaction_id: int) -> bool:
        """
        Remove a transaction by id.

        Returns:
            True if deleted, False if the id wasn't in the ledger
        """
        if not self.store.remove_by_id(transaction_id):
            logger.debug("Nothing to delete for id %s", transaction_id)
            return False

        self.store.persist()
        self._render_all()

        logger.info("Deleted transaction %s", transaction_id)
        return True

    def reset(self) -> bool:
        """
        Wipe the ledger and its stored copy once the user confirms.

        Returns:
            True if the ledger was reset, False if the user declined
        """
        if not self.view.confirm("Reset all data?"):
            logger.debug("Reset declined")
            return False

        discarded = len(self.store)
        self.store.clear()
        self.store.purge()
        self._render_all()

        logger.info("Reset ledger, discarded %d transactions", discarded)
        return True

    def search(self, query: str) -> List[int]:
        """
        Show only rows whose title contains the query (case-insensitive).

        The ledger itself is untouched.

        Returns:
            Ids of the rows left visible, in display order
        """
        visible_ids = []
        for row in self._rows:
            row.visible = row.matches(query or "")
            self.view.set_row_visible(row.id, row.visible)
            if row.visible:
                visible_ids.append(row.id)
        return visible_ids

    def export_workbook(self, filepath: Path) -> ExportResult:
        """
        Write the ledger to a single-sheet workbook.

        Raises:
            EmptyLedgerError: If there is nothing to export
        """
        transactions = self.store.transactions
        if not transactions:
            raise EmptyLedgerError("No transactions to export")

        records = [
            dict(zip(EXPORT_COLUMNS, (
                index,
                txn.title,
                float(txn.amount),
                txn.type.value,
                txn.category,
                txn.date,
            )))
            for index, txn in enumerate(transactions, start=1)
        ]

        path = self.codec.write(records, Path(filepath), self.sheet_name)

        logger.info("Exported %d transactions to %s", len(records), path)
        return ExportResult(filepath=str(path), rows_written=len(records))

    async def import_workbook(self, filepath: Path) -> ImportResult:
        """
        Replace the ledger with the first sheet of a workbook.

        The file is read off the event loop. Overlapping imports are
        applied one at a time in call order, so the last one wins.

        Raises:
            WorkbookReadError: If the file can't be read; the ledger is unchanged
        """
        path = Path(filepath)
        async with self._lock_for_running_loop():
            records = await asyncio.to_thread(self.codec.read, path)

            transactions = []
            defaulted = 0
            for index, record in enumerate(records, start=1):
                transaction, filled = self._record_to_transaction(index, record)
                transactions.append(transaction)
                defaulted += filled

            replaced = len(self.store)
            self.store.replace_all(transactions)
            self.store.persist()
            self._render_all()

        if defaulted:
            logger.warning("Filled %d blank or invalid cells with defaults", defaulted)
        logger.info("Imported %d transactions from %s", len(transactions), path)

        return ImportResult(
            filepath=str(path),
            rows_imported=len(transactions),
            replaced=replaced,
            defaulted_cells=defaulted,
        )

    def _lock_for_running_loop(self) -> asyncio.Lock:
        """Import lock bound to the current event loop"""
        loop = asyncio.get_running_loop()
        if self._import_loop is not loop:
            self._import_lock = asyncio.Lock()
            self._import_loop = loop
        return self._import_lock

    def import_workbook_sync(self, filepath: Path) -> ImportResult:
        """Run an import to completion from synchronous code"""
        return asyncio.run(self.import_workbook(filepath))

    def is_dark_theme(self) -> bool:
        return self.store.storage.get_item(self.theme_key) == "dark"

    def toggle_theme(self) -> bool:
        """
        Flip between light and dark mode and remember the choice.

        Returns:
            True if dark mode is now on
        """
        dark = not self.is_dark_theme()
        self.store.storage.set_item(self.theme_key, "dark" if dark else "light")
        self.view.apply_theme(dark)
        return dark

    def _validate(self, form: TransactionForm) -> Tuple[str, Decimal, TransactionType, str, str]:
        title = (form.title or "").strip()
        if not title:
            raise ValidationError("Please fill all fields: title is required", field="title")

        try:
            amount = Decimal(str(form.amount).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(
                f"Please fill all fields: amount must be a number, got {form.amount!r}",
                field="amount",
            )
        if not amount.is_finite() or amount <= 0:
            raise ValidationError("Amount must be greater than zero", field="amount")

        transaction_type = TransactionType.parse(form.type)
        if transaction_type is None:
            raise ValidationError("Select Income or Expense", field="type")

        category = (form.category or "").strip()
        if not category:
            raise ValidationError("Please fill all fields: category is required", field="category")

        if not (form.date or "").strip():
            raise ValidationError("Please fill all fields: date is required", field="date")
        try:
            display_date = self.formatter.format_date(form.date)
        except ValueError:
            raise ValidationError(
                f"Date must be YYYY-MM-DD, got {form.date!r}",
                field="date",
            )

        return title, amount, transaction_type, category, display_date

    def _record_to_transaction(self, index: int, record: Record) -> Tuple[Transaction, int]:
        """Map one workbook row to a transaction, returning how many cells were defaulted"""
        filled = 0

        title = record.get("Title")
        if _is_blank(title):
            title = "Untitled"
            filled += 1

        amount = _parse_amount(record.get("Amount"))
        if amount is None:
            amount = Decimal("0")
            filled += 1

        transaction_type = TransactionType.parse(record.get("Type"))
        if transaction_type is None:
            transaction_type = TransactionType.EXPENSE
            filled += 1

        category = record.get("Category")
        if _is_blank(category):
            category = "other"
            filled += 1

        raw_date = record.get("Date")
        if _is_blank(raw_date):
            display_date = self.formatter.today()
            filled += 1
        elif isinstance(raw_date, (date, datetime)):
            display_date = self.formatter.format_date(raw_date)
        else:
            display_date = str(raw_date)

        transaction = Transaction(
            id=index,
            title=str(title),
            amount=amount,
            type=transaction_type,
            category=str(category),
            date=display_date,
        )
        return transaction, filled

    def _render_all(self) -> Summary:
        self._rows = build_rows(self.store.transactions, self.formatter)
        self.view.render_list(self._rows)
        return self._refresh_summary()

    def _refresh_summary(self) -> Summary:
        summary = summarize(self.store.transactions)
        self.view.render_summary(summary)
        self.chart.update(summary.chart_series)
        self.view.render_chart(self.chart)
        return summary

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def _parse_amount(value: Any) -> Optional[Decimal]:
    """Magnitude of a workbook amount cell, None when it isn't a usable number"""
    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount == 0:
        return None
    return abs(amount)
