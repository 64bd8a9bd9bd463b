"""
Service layer models - results of service operations.

These models describe what an operation did, they are not domain entities.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

@dataclass(frozen=True)
class Summary:
    """
    Derived totals for the whole ledger.

    All values are Decimal; expense is reported as a positive magnitude.
    """
    income: Decimal
    expense: Decimal

    @property
    def balance(self) -> Decimal:
        """Net position (income - expense)"""
        return self.income - self.expense

    @property
    def chart_series(self) -> Tuple[Decimal, Decimal]:
        """The two slices shown in the chart, income then expense"""
        return (self.income, self.expense)

    def __str__(self) -> str:
        return (
            f"Balance: {self.balance:,.2f} "
            f"(income {self.income:,.2f}, expense {self.expense:,.2f})"
        )

@dataclass
class ExportResult:
    """Result of writing the ledger to a workbook"""
    filepath: str
    rows_written: int

    def __str__(self) -> str:
        return f"Exported {self.rows_written} transactions to {self.filepath}"

@dataclass
class ImportResult:
    """
    Result of importing a workbook.

    The import replaces the ledger, so replaced counts what was discarded.
    """
    filepath: str
    rows_imported: int
    replaced: int
    defaulted_cells: int = 0

    def __str__(self) -> str:
        lines = [
            f"Import summary for {self.filepath}:",
            f" ✅ Transactions imported: {self.rows_imported}",
            f" 🗑️ Previous transactions replaced: {self.replaced}",
        ]
        if self.defaulted_cells:
            lines.append(f" ⚠️ Cells filled with defaults: {self.defaulted_cells}")
        return "\n".join(lines)
