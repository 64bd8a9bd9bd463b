from abc import ABC, abstractmethod
from typing import List

from ledger_tracker.services.models import Summary
from ledger_tracker.views.chart import DoughnutChart
from ledger_tracker.views.presenter import TransactionRow

class LedgerView(ABC):
    """
    Display surface the command handlers talk to.

    Handlers never touch a concrete UI, so any implementation
    (terminal, web, headless) can be swapped in.
    """

    @abstractmethod
    def render_list(self, rows: List[TransactionRow]) -> None:
        """Replace the whole transaction list with rows (already most recent first)"""
        pass

    @abstractmethod
    def prepend_row(self, row: TransactionRow) -> None:
        """Insert a freshly added row at the top of the list"""
        pass

    @abstractmethod
    def render_summary(self, summary: Summary) -> None:
        """Show balance, income and expense totals"""
        pass

    @abstractmethod
    def render_chart(self, chart: DoughnutChart) -> None:
        """Redraw the income/expense chart"""
        pass

    @abstractmethod
    def set_row_visible(self, row_id: int, visible: bool) -> None:
        """Show or hide a rendered row without touching the ledger"""
        pass

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask the user to acknowledge a destructive action"""
        pass

    @abstractmethod
    def apply_theme(self, dark: bool) -> None:
        """Switch between light and dark presentation"""
        pass
