import pytest
from datetime import date
from decimal import Decimal

from ledger_tracker.domain.enums import Category, TransactionType
from ledger_tracker.domain.models import Transaction, TransactionForm
from ledger_tracker.views.chart import DoughnutChart
from ledger_tracker.views.presenter import build_row, build_rows

def txn(id: int, title: str, type: TransactionType = TransactionType.EXPENSE,
        category: str = "food") -> Transaction:
    return Transaction(id=id, title=title, amount=Decimal("200"), type=type,
                       category=category, date="2 Jan 2024")

@pytest.mark.unit
class TestRows:
    """Test how transactions become list rows"""

    def test_rows_are_most_recent_first(self, formatter):
        rows = build_rows([txn(1, "First"), txn(2, "Second"), txn(3, "Third")], formatter)

        assert [row.title for row in rows] == ["Third", "Second", "First"]

    def test_row_contents(self, formatter):
        row = build_row(txn(7, "Groceries"), formatter)

        assert row.id == 7
        assert row.icon == "fa-utensils"
        assert row.caption == "2 Jan 2024 • food"
        assert row.amount_text == "-₹200.00"
        assert row.type == "expense"
        assert row.visible is True

    def test_income_row_is_positive(self, formatter):
        row = build_row(txn(1, "Salary", TransactionType.INCOME, "salary"), formatter)

        assert row.amount_text == "+₹200.00"
        assert row.icon == "fa-money-bill"

    def test_unknown_category_uses_default_icon(self, formatter):
        row = build_row(txn(1, "Gift", category="gifts"), formatter)

        assert row.icon == Category.OTHER.icon
        assert row.caption.endswith("gifts")

    def test_matches_title_case_insensitively(self, formatter):
        row = build_row(txn(1, "Weekly Groceries"), formatter)

        assert row.matches("groc")
        assert row.matches("")
        assert not row.matches("food")

@pytest.mark.unit
class TestCategoryTable:
    """Test the fixed icon table"""

    def test_every_category_has_an_icon(self):
        assert Category.labels() == [
            "salary", "freelance", "investment", "food", "shopping",
            "transport", "entertainment", "utilities", "health", "other",
        ]
        assert all(member.icon.startswith("fa-") for member in Category)

    def test_lookup_falls_back_to_other(self):
        assert Category.from_label("transport") is Category.TRANSPORT
        assert Category.from_label("bitcoin") is Category.OTHER
        assert Category.from_label(None) is Category.OTHER

@pytest.mark.unit
class TestDoughnutChart:
    """Test the chart data holder"""

    def test_fixed_labels_and_colors(self):
        chart = DoughnutChart()

        assert chart.labels == ("Income", "Expenses")
        assert chart.colors == ("#2ecc71", "#e74c3c")

    def test_update_replaces_data_and_counts_redraws(self):
        chart = DoughnutChart()

        chart.update([Decimal("30"), Decimal("10")])

        assert chart.data == (Decimal("30"), Decimal("10"))
        assert chart.revision == 1
        assert chart.shares() == (0.75, 0.25)

    def test_empty_chart_shares(self):
        assert DoughnutChart().shares() == (0.0, 0.0)

    def test_update_needs_two_values(self):
        with pytest.raises(ValueError):
            DoughnutChart().update([Decimal("1")])

@pytest.mark.unit
class TestTransactionModel:
    """Test the domain models"""

    def test_signed_amount(self):
        assert txn(1, "x").signed_amount == Decimal("-200")
        assert txn(1, "x", TransactionType.INCOME).signed_amount == Decimal("200")

    def test_round_trip_record(self):
        bus = txn(3, "Bus", category="transport")

        assert Transaction.from_dict(bus.to_dict()) == bus

    def test_from_dict_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            Transaction.from_dict({"id": 1, "title": "x", "amount": 1, "type": "refund"})

    def test_form_reset_defaults_date_to_today(self):
        form = TransactionForm(title="a", amount="1", type="income", category="food", date="2020-01-01")

        form.reset()

        assert form.type is None
        assert form.title == ""
        assert form.date == date.today().isoformat()

    def test_transaction_type_parse(self):
        assert TransactionType.parse(" Income ") is TransactionType.INCOME
        assert TransactionType.parse("EXPENSE") is TransactionType.EXPENSE
        assert TransactionType.parse("other") is None
        assert TransactionType.parse(None) is None
