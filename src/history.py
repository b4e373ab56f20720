"""History of accepted deposits and withdrawals, keyed by transaction id."""

from typing import Dict, Optional

from models import Transaction


class TransactionHistory:
    """
    Accepted deposits and withdrawals keyed by transaction id.
    These are the only transactions a dispute, resolve or chargeback can reference.
    """

    def __init__(self):
        self._transactions: Dict[int, Transaction] = {}

    def record(self, transaction: Transaction) -> None:
        """Store transaction for future dispute lookups, overwriting any previous entry."""
        self._transactions[transaction.transaction_id] = transaction

    def lookup(self, transaction_id: int) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def remove(self, transaction_id: int) -> Optional[Transaction]:
        """Take the entry out of the history. Only chargebacks do this."""
        return self._transactions.pop(transaction_id, None)

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._transactions
