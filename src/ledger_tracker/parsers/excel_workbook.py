from pathlib import Path
from typing import List, Sequence

import pandas as pd

from ledger_tracker.logging_utils import get_logger
from ledger_tracker.parsers.base import Record, WorkbookCodec
from ledger_tracker.services.exceptions import WorkbookReadError, WorkbookWriteError

logger = get_logger(__name__)

class ExcelWorkbookCodec(WorkbookCodec):
    """
    Excel codec backed by pandas.

    Writes .xlsx through openpyxl and reads .xlsx/.xls files,
    always taking the first sheet.
    """

    SUFFIXES = ('.xlsx', '.xls')

    def validate_file(self, filepath: Path) -> None:
        """
        Check the file exists and looks like an Excel workbook.

        Raises:
            WorkbookReadError: If the file is missing or has the wrong suffix
        """
        path = Path(filepath)

        if not path.exists():
            raise WorkbookReadError(f"File does not exist on path {path}")

        if path.suffix.lower() not in self.SUFFIXES:
            raise WorkbookReadError(f"File must be .xlsx or .xls, got {path.suffix}")

    def write(self, records: Sequence[Record], filepath: Path, sheet_name: str) -> Path:
        path = Path(filepath)
        if path.suffix.lower() != '.xlsx':
            raise WorkbookWriteError(f"Export file must be .xlsx, got {path.suffix}")

        df = pd.DataFrame.from_records(list(records))

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                self._store_formulas_as_text(writer.sheets[sheet_name])
        except OSError as e:
            raise WorkbookWriteError(f"Failed to write Excel file: {e}") from e

        logger.debug("Wrote %d rows to %s", len(df), path)
        return path

    def read(self, filepath: Path) -> List[Record]:
        self.validate_file(filepath)

        try:
            df = pd.read_excel(
                filepath,
                sheet_name=0,
                dtype=object,
                # Only truly empty cells are missing; "NA", "None" etc. are text
                keep_default_na=False,
                na_values=[""],
            )
        except Exception as e:
            raise WorkbookReadError(f"Failed to read Excel file: {e}") from e

        # Blank cells come back as NaN; hand them over as None
        df = df.astype(object).where(pd.notna(df), None)

        records = df.to_dict(orient="records")
        logger.debug("Read %d rows from %s", len(records), filepath)
        return records

    @staticmethod
    def _store_formulas_as_text(worksheet) -> None:
        """Keep "="-prefixed text as a plain string instead of a formula"""
        for row in worksheet.iter_rows():
            for cell in row:
                if isinstance(cell.value, str) and cell.value.startswith("="):
                    cell.data_type = "s"
