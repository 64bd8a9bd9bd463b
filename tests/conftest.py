import pytest
from typing import List

from ledger_tracker.domain.models import TransactionForm
from ledger_tracker.repositories.memory_storage import InMemoryStorage
from ledger_tracker.services.ledger_service import LedgerService
from ledger_tracker.services.ledger_store import LedgerStore
from ledger_tracker.views.base import LedgerView
from ledger_tracker.views.formatting import CurrencyFormatter

class RecordingView(LedgerView):
    """Headless view that remembers what it was asked to draw"""

    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.rows = []
        self.summaries = []
        self.chart_data = []
        self.prompts: List[str] = []
        self.full_renders = 0
        self.dark = False

    def render_list(self, rows):
        self.rows = list(rows)
        self.full_renders += 1

    def prepend_row(self, row):
        self.rows.insert(0, row)

    def render_summary(self, summary):
        self.summaries.append(summary)

    def render_chart(self, chart):
        self.chart_data.append(chart.data)

    def set_row_visible(self, row_id, visible):
        for row in self.rows:
            if row.id == row_id:
                row.visible = visible

    def confirm(self, message):
        self.prompts.append(message)
        return self.confirm_answer

    def apply_theme(self, dark):
        self.dark = dark

    @property
    def last_summary(self):
        return self.summaries[-1]

    @property
    def visible_titles(self):
        return [row.title for row in self.rows if row.visible]

@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()

@pytest.fixture
def store(storage) -> LedgerStore:
    return LedgerStore(storage)

@pytest.fixture
def view() -> RecordingView:
    return RecordingView()

@pytest.fixture
def formatter() -> CurrencyFormatter:
    return CurrencyFormatter("en-IN", "INR")

@pytest.fixture
def mock_codec(mocker):
    """Workbook codec with no real file behaviour"""
    return mocker.Mock()

@pytest.fixture
def service(store, view, mock_codec, formatter) -> LedgerService:
    """Started service over in-memory storage"""
    service = LedgerService(store, view, mock_codec, formatter=formatter)
    service.start()
    return service

@pytest.fixture
def salary_form() -> TransactionForm:
    return TransactionForm(
        title="Salary",
        amount="5000",
        type="income",
        category="salary",
        date="2024-01-01",
    )

@pytest.fixture
def groceries_form() -> TransactionForm:
    return TransactionForm(
        title="Groceries",
        amount="200",
        type="expense",
        category="food",
        date="2024-01-02",
    )

@pytest.fixture
def view_factory():
    """Build extra headless views for tests that need more than one"""
    return RecordingView
