import pytest
from io import StringIO

from rich.console import Console

from ledger_tracker.domain.models import TransactionForm
from ledger_tracker.services.ledger_service import LedgerService
from ledger_tracker.services.ledger_store import LedgerStore
from ledger_tracker.views.console import RichConsoleView

@pytest.fixture
def output() -> StringIO:
    return StringIO()

@pytest.fixture
def console_view(formatter, output) -> RichConsoleView:
    return RichConsoleView(formatter, console=Console(file=output, width=100), assume_yes=True)

@pytest.fixture
def console_service(storage, console_view, mock_codec, formatter) -> LedgerService:
    service = LedgerService(LedgerStore(storage), console_view, mock_codec, formatter=formatter)
    service.start()
    return service

@pytest.mark.unit
class TestRichConsoleView:
    """Test the terminal dashboard"""

    def test_empty_dashboard(self, console_service, console_view, output):
        console_view.refresh()

        text = output.getvalue()
        assert "No transactions" in text
        assert "₹0.00" in text

    def test_dashboard_shows_rows_and_totals(self, console_service, console_view, output):
        # Arrange
        console_service.add_transaction(TransactionForm(
            title="Salary", amount="5000", type="income", category="salary", date="2024-01-01",
        ))
        console_service.add_transaction(TransactionForm(
            title="[Groceries]", amount="200", type="expense", category="food", date="2024-01-02",
        ))

        # Act
        console_view.refresh()

        # Assert
        text = output.getvalue()
        assert "[Groceries]" in text
        assert "-₹200.00" in text
        assert "₹4,800.00" in text
        assert "Income" in text and "Expenses" in text
        assert text.index("[Groceries]") < text.index("Salary", text.index("Transactions"))

    def test_hidden_rows_are_not_printed(self, console_service, console_view, output):
        for title in ("Rent", "Coffee"):
            console_service.add_transaction(TransactionForm(
                title=title, amount="10", type="expense", category="food", date="2024-01-01",
            ))

        console_service.search("cof")
        console_view.refresh()

        text = output.getvalue()
        assert "Coffee" in text
        assert "Rent" not in text

    def test_assume_yes_confirms(self, console_view):
        assert console_view.confirm("Reset all data?") is True

    def test_prompt_answer_is_used(self, formatter, mocker):
        view = RichConsoleView(formatter, console=Console(file=StringIO()))
        ask = mocker.patch("ledger_tracker.views.console.Confirm.ask", return_value=False)

        assert view.confirm("Reset all data?") is False
        ask.assert_called_once()

    def test_theme_switch(self, console_service, console_view, output):
        console_service.toggle_theme()
        console_view.refresh()

        assert console_view.dark is True
        assert "Transactions" in output.getvalue()
