from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Sequence

Record = Dict[str, Any]

class WorkbookCodec(ABC):
    """
    Abstract base class for spreadsheet codecs.

    A codec turns tabular records into a workbook file and reads the
    first sheet of a workbook back into records.
    """

    @abstractmethod
    def write(self, records: Sequence[Record], filepath: Path, sheet_name: str) -> Path:
        """
        Write records as a single-sheet workbook.

        Args:
            records: Rows keyed by column name, in column order
            filepath: Destination file
            sheet_name: Name of the only sheet

        Returns:
            Path of the written file

        Raises:
            WorkbookWriteError: If the file can't be written
        """
        pass

    @abstractmethod
    def read(self, filepath: Path) -> List[Record]:
        """
        Read the first sheet of a workbook.

        Args:
            filepath: Path to the workbook

        Returns:
            One dict per row keyed by header; blank cells are None

        Raises:
            WorkbookReadError: If the file is missing or can't be decoded
        """
        pass
