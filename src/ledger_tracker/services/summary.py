from decimal import Decimal
from typing import Iterable

from ledger_tracker.domain.models import Transaction
from ledger_tracker.services.models import Summary

def summarize(transactions: Iterable[Transaction]) -> Summary:
    """
    Compute income and expense totals from scratch.

    Args:
        transactions: Ledger entries in any order

    Returns:
        Summary with income, expense and balance
    """
    income = Decimal("0")
    expense = Decimal("0")

    for txn in transactions:
        if txn.is_income:
            income += txn.amount
        else:
            expense += txn.amount

    return Summary(income=income, expense=expense)
