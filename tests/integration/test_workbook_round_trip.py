import pytest
from decimal import Decimal
from pathlib import Path

import pandas as pd

from ledger_tracker.domain.models import TransactionForm
from ledger_tracker.parsers.excel_workbook import ExcelWorkbookCodec
from ledger_tracker.repositories.memory_storage import InMemoryStorage
from ledger_tracker.services.exceptions import WorkbookReadError, WorkbookWriteError
from ledger_tracker.services.ledger_service import LedgerService
from ledger_tracker.services.ledger_store import LedgerStore

@pytest.fixture
def codec() -> ExcelWorkbookCodec:
    return ExcelWorkbookCodec()

@pytest.fixture
def excel_service(codec, view, formatter) -> LedgerService:
    service = LedgerService(LedgerStore(InMemoryStorage()), view, codec, formatter=formatter)
    service.start()
    return service

def add(service: LedgerService, title: str, amount: str, type: str, category: str, on: str):
    service.add_transaction(TransactionForm(
        title=title, amount=amount, type=type, category=category, date=on,
    ))

@pytest.mark.integration
class TestExcelWorkbookCodec:
    """Test the pandas/openpyxl codec against real files"""

    def test_written_sheet_layout(self, excel_service: LedgerService, tmp_path: Path):
        # Arrange
        add(excel_service, "Salary", "5000", "income", "salary", "2024-01-01")
        add(excel_service, "Groceries", "200", "expense", "food", "2024-01-02")
        target = tmp_path / "transactions.xlsx"

        # Act
        result = excel_service.export_workbook(target)

        # Assert
        assert result.rows_written == 2
        sheets = pd.read_excel(target, sheet_name=None)
        assert list(sheets) == ["Transactions"]
        df = sheets["Transactions"]
        assert list(df.columns) == ["ID", "Title", "Amount", "Type", "Category", "Date"]
        assert df["ID"].tolist() == [1, 2]
        assert df["Date"].tolist() == ["1 Jan 2024", "2 Jan 2024"]

    def test_read_blank_cells_as_none(self, codec: ExcelWorkbookCodec, tmp_path: Path):
        # Arrange
        target = tmp_path / "partial.xlsx"
        pd.DataFrame({
            "Title": ["Lunch", None],
            "Amount": [None, 12.5],
        }).to_excel(target, index=False)

        # Act
        records = codec.read(target)

        # Assert
        assert records[0]["Title"] == "Lunch"
        assert records[0]["Amount"] is None
        assert records[1]["Title"] is None
        assert records[1]["Amount"] == 12.5

    def test_read_missing_file(self, codec: ExcelWorkbookCodec, tmp_path: Path):
        with pytest.raises(WorkbookReadError):
            codec.read(tmp_path / "nope.xlsx")

    def test_read_wrong_suffix(self, codec: ExcelWorkbookCodec, tmp_path: Path):
        target = tmp_path / "ledger.csv"
        target.write_text("Title,Amount\nx,1\n")

        with pytest.raises(WorkbookReadError):
            codec.read(target)

    def test_read_corrupt_workbook(self, codec: ExcelWorkbookCodec, tmp_path: Path):
        target = tmp_path / "corrupt.xlsx"
        target.write_bytes(b"definitely not a zip archive")

        with pytest.raises(WorkbookReadError):
            codec.read(target)

    def test_write_requires_xlsx(self, codec: ExcelWorkbookCodec, tmp_path: Path):
        with pytest.raises(WorkbookWriteError):
            codec.write([{"ID": 1}], tmp_path / "out.xls", "Transactions")

@pytest.mark.integration
class TestExportImportRoundTrip:
    """Exporting then importing keeps everything but the ids"""

    def test_round_trip(self, excel_service: LedgerService, tmp_path: Path):
        # Arrange
        add(excel_service, "Salary", "5000", "income", "salary", "2024-01-01")
        add(excel_service, "Groceries", "200.75", "expense", "food", "2024-01-02")
        add(excel_service, "Cinema", "15", "expense", "gifts", "2024-01-03")
        groceries = excel_service.transactions[1]
        excel_service.delete_transaction(groceries.id)
        add(excel_service, "Freelance", "1234.5", "income", "freelance", "2024-01-04")
        before = excel_service.transactions
        target = tmp_path / "round_trip.xlsx"

        # Act
        excel_service.export_workbook(target)
        excel_service.import_workbook_sync(target)
        after = excel_service.transactions

        # Assert
        assert [t.id for t in after] == [1, 2, 3]

        def fields(t):
            return (t.title, t.amount, t.type, t.category, t.date)
        assert [fields(t) for t in after] == [fields(t) for t in before]
        assert excel_service.summary().balance == Decimal("6219.5")

    @pytest.mark.parametrize("title", ["NA", "N/A", "None", "null", "nan", "=fees", "=SUM(A1:A2)"])
    def test_round_trip_keeps_text_that_looks_missing_or_formula(self, excel_service: LedgerService, tmp_path: Path, title: str):
        # Arrange
        add(excel_service, title, "42", "expense", "NA", "2024-01-05")
        target = tmp_path / "tricky.xlsx"

        # Act
        excel_service.export_workbook(target)
        result = excel_service.import_workbook_sync(target)

        # Assert
        imported = excel_service.transactions[0]
        assert imported.title == title
        assert imported.category == "NA"
        assert imported.amount == Decimal("42")
        assert result.defaulted_cells == 0
