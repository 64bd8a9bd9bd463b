from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional
from ledger_tracker.domain.enums import TransactionType

@dataclass(frozen=True)
class Transaction:
    """
    Core domain model representing a single ledger entry.

    Transactions are never edited in place: a change is a delete
    followed by a new transaction.
    """
    id: int
    title: str
    amount: Decimal # always a positive magnitude, sign comes from type
    type: TransactionType
    category: str
    date: str # already formatted for display

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def signed_amount(self) -> Decimal:
        """Return amount with sign for balance calculations"""
        return self.amount if self.is_income else -self.amount

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the durable JSON record"""
        return {
            "id": self.id,
            "title": self.title,
            "amount": float(self.amount),
            "type": self.type.value,
            "category": self.category,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Transaction":
        """
        Build a transaction from a durable JSON record.

        Raises:
            KeyError: If a required field is missing
            ValueError: If the type or amount can't be interpreted
        """
        transaction_type = TransactionType.parse(record["type"])
        if transaction_type is None:
            raise ValueError(f"Unknown transaction type: {record['type']!r}")

        return cls(
            id=int(record["id"]),
            title=str(record["title"]),
            amount=Decimal(str(record["amount"])),
            type=transaction_type,
            category=str(record.get("category") or "other"),
            date=str(record.get("date") or ""),
        )

    def __repr__(self):
        sign = "+" if self.is_income else "-"
        return f"Transaction({self.id}, {self.title[:30]}, {sign}{self.amount})"

@dataclass
class TransactionForm:
    """
    Raw state of the add-transaction form.

    Values are kept as entered; validation happens in the service.
    """
    title: str = ""
    amount: str = ""
    type: Optional[str] = None
    category: str = ""
    date: str = field(default_factory=lambda: date.today().isoformat())

    def reset(self) -> None:
        """Clear the inputs, default the date to today and drop the type selection"""
        self.title = ""
        self.amount = ""
        self.type = None
        self.category = ""
        self.date = date.today().isoformat()
