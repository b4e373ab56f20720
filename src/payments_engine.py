"""Sequential replay of transactions into a ledger."""

import logging
from typing import Iterable, Iterator

from csv_io import read_transactions
from history import TransactionHistory
from ledger import Ledger
from models import AccountSnapshot, ProcessingResult, ProcessingStats, Transaction
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Replays transactions, strictly in input order, against a ledger it owns.
    Every engine has its own ledger and history, so separate runs never interfere.
    """

    def __init__(self):
        self._ledger = Ledger()
        self._history = TransactionHistory()
        self._processor = TransactionProcessor(self._ledger, self._history)
        self._stats = ProcessingStats()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def history(self) -> TransactionHistory:
        return self._history

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process(self, transactions: Iterable[Transaction]) -> Ledger:
        """
        Apply every transaction in order and return the ledger.

        The first fatal error (including one raised by the source while being
        iterated) stops the run and propagates. Records applied before it stay
        applied, and the ledger is consistent after each one.
        """
        logger.info("Starting transaction processing")

        for transaction in transactions:
            result = self._processor.process_transaction(transaction)
            if result == ProcessingResult.SUCCESS:
                self._stats.record_success()
            else:
                self._stats.record_rejection()

        logger.info(
            f"Transaction processing complete: {self._stats.processed} processed, "
            f"{self._stats.rejected} rejected, {len(self._ledger)} accounts"
        )
        return self._ledger

    def process_file(self, filepath: str) -> Ledger:
        """Process CSV file and return the final ledger."""
        with open(filepath, "r", newline="", encoding="utf-8") as f:
            return self.process(read_transactions(f))

    def snapshot(self) -> Iterator[AccountSnapshot]:
        return snapshot(self._ledger)


def process(transactions: Iterable[Transaction]) -> Ledger:
    """Fold a fresh engine over the transactions and return its ledger."""
    return PaymentsEngine().process(transactions)


def snapshot(ledger: Ledger) -> Iterator[AccountSnapshot]:
    """Lazily render every account with 4 fractional digits."""
    for _, account in ledger.items():
        yield AccountSnapshot.from_account(account)
