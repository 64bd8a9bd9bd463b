"""
Turns ledger entries into display rows.

Rows are what the views render and what the search box filters.
"""
from dataclasses import dataclass
from typing import Iterable, List

from ledger_tracker.domain.enums import Category
from ledger_tracker.domain.models import Transaction
from ledger_tracker.views.formatting import CurrencyFormatter

@dataclass
class TransactionRow:
    """One rendered line of the transaction list"""
    id: int
    icon: str
    glyph: str
    title: str
    caption: str
    amount_text: str
    type: str
    visible: bool = True

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against the title only"""
        return query.lower() in self.title.lower()

def build_row(transaction: Transaction, formatter: CurrencyFormatter) -> TransactionRow:
    category = Category.from_label(transaction.category)
    return TransactionRow(
        id=transaction.id,
        icon=category.icon,
        glyph=category.glyph,
        title=transaction.title,
        caption=f"{transaction.date} • {transaction.category}",
        amount_text=formatter.format_signed(transaction.amount, transaction.is_income),
        type=transaction.type.value,
    )

def build_rows(
    transactions: Iterable[Transaction],
    formatter: CurrencyFormatter,
) -> List[TransactionRow]:
    """Build rows for the list, most recent transaction first"""
    return [build_row(txn, formatter) for txn in reversed(list(transactions))]
