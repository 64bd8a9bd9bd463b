import json
from typing import Iterable, List, Tuple

from ledger_tracker.domain.models import Transaction
from ledger_tracker.logging_utils import get_logger
from ledger_tracker.repositories.base import KeyValueStorage
from ledger_tracker.services.exceptions import CorruptLedgerError

logger = get_logger(__name__)

class LedgerStore:
    """
    Owns the in-memory transaction sequence and its durable mirror.

    The mutation methods only change the in-memory sequence. Callers
    persist afterwards, so the stored form matches memory once the
    command completes.
    """

    def __init__(self, storage: KeyValueStorage, key: str = "transactions"):
        self.storage = storage
        self.key = key
        self._transactions: List[Transaction] = []
        self._next_id = 1

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        """Insertion-ordered snapshot of the ledger"""
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def load(self) -> Tuple[Transaction, ...]:
        """
        Read the ledger from durable storage.

        Absent or unparseable content yields an empty ledger.

        Raises:
            CorruptLedgerError: If a stored record is missing fields
        """
        raw = self.storage.get_item(self.key)
        records = []

        if raw is not None:
            try:
                records = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.warning("Ignoring unreadable ledger in slot %r: %s", self.key, e)
                records = []

        if not isinstance(records, list):
            logger.warning("Ignoring ledger in slot %r: expected a list", self.key)
            records = []

        transactions = []
        for index, record in enumerate(records):
            try:
                transactions.append(Transaction.from_dict(record))
            except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                raise CorruptLedgerError(
                    f"Stored transaction #{index + 1} is malformed: {e!r}"
                ) from e

        self._transactions = transactions
        self._advance_counter(transactions)
        logger.debug("Loaded %d transactions", len(transactions))
        return self.transactions

    def persist(self) -> None:
        """Serialize the whole sequence and overwrite the stored slot"""
        payload = json.dumps([txn.to_dict() for txn in self._transactions])
        self.storage.set_item(self.key, payload)

    def purge(self) -> None:
        """Remove the ledger slot from durable storage"""
        self.storage.remove_item(self.key)

    def next_id(self) -> int:
        """Hand out the next id; ids never repeat within the store's lifetime"""
        value = self._next_id
        self._next_id += 1
        return value

    def append(self, transaction: Transaction) -> None:
        self._transactions.append(transaction)
        self._advance_counter([transaction])

    def remove_by_id(self, transaction_id: int) -> bool:
        """
        Drop the transaction with the given id.

        Returns:
            True if something was removed, False if the id wasn't present
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        removed = len(remaining) != len(self._transactions)
        self._transactions = remaining
        return removed

    def clear(self) -> None:
        self._transactions = []

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        self._transactions = list(transactions)
        self._advance_counter(self._transactions)

    def _advance_counter(self, transactions: Iterable[Transaction]) -> None:
        highest = max((t.id for t in transactions), default=0)
        self._next_id = max(self._next_id, highest + 1)
