"""Per-kind rules for applying a transaction to a ledger."""

import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation

from errors import InvalidAmountError, MissingAmountError, TransactionRejected, UnknownTransactionKindError
from history import TransactionHistory
from ledger import Ledger
from models import ClientAccount, ProcessingResult, Transaction, TransactionType, normalize_amount

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to a ledger and the history of accepted deposits/withdrawals.

    Handlers check everything before touching a balance, so a record is either
    applied in full or not at all. Non-fatal rejections are raised as
    TransactionRejected and turned into a warning here; fatal errors
    (MissingAmountError, InvalidAmountError, UnknownTransactionKindError) propagate to the caller.
    """

    def __init__(self, ledger: Ledger, history: TransactionHistory):
        self._ledger = ledger
        self._history = history

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Applied to the ledger
            REJECTED: Ignored with a warning (locked account, insufficient funds, unknown tx)
        """
        try:
            self.apply(transaction)
        except TransactionRejected as rejection:
            logger.warning(f"Rejected {rejection.transaction}: {rejection.reason}")
            return ProcessingResult.REJECTED
        return ProcessingResult.SUCCESS

    def apply(self, transaction: Transaction) -> None:
        account = self._ledger.get_or_create_account(transaction.client_id)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(account, transaction)
            case kind:
                raise UnknownTransactionKindError(getattr(kind, "value", kind))

    def _normalized(self, transaction: Transaction) -> Transaction:
        if transaction.amount is None:
            raise MissingAmountError(transaction)
        try:
            amount = normalize_amount(transaction.amount)
        except InvalidOperation:
            raise InvalidAmountError(transaction) from None
        return replace(transaction, amount=amount)

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> None:
        transaction = self._normalized(transaction)

        if account.locked:
            raise TransactionRejected(transaction, f"cannot deposit, client account {account.client_id} is locked")

        account.credit(transaction.amount)
        self._history.record(transaction)

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> None:
        transaction = self._normalized(transaction)

        if account.locked:
            raise TransactionRejected(transaction, f"cannot withdraw, client account {account.client_id} is locked")

        if account.available < transaction.amount:
            raise TransactionRejected(
                transaction,
                f"insufficient available funds ({account.available}) in client account {account.client_id}",
            )

        account.debit(transaction.amount)
        self._history.record(transaction)

    def _referenced_amount(self, transaction: Transaction) -> Decimal:
        original = self._history.lookup(transaction.transaction_id)
        if original is None:
            raise TransactionRejected(transaction, "references unknown transaction")
        return original.amount

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> None:
        amount = self._referenced_amount(transaction)

        # Applies to disputed withdrawals too, and to a tx whose amount is already held.
        if account.available < amount:
            raise TransactionRejected(transaction, f"cannot dispute {amount}, more than what is available")

        account.hold(amount)

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> None:
        amount = self._referenced_amount(transaction)

        if account.held < amount:
            raise TransactionRejected(transaction, f"cannot resolve {amount}, more than what is held")

        account.release_hold(amount)

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> None:
        # Removed up front so the same deposit can never be charged back twice.
        original = self._history.remove(transaction.transaction_id)

        if original is None:
            raise TransactionRejected(transaction, "references unknown transaction")

        if original.transaction_type != TransactionType.DEPOSIT:
            self._history.record(original)
            raise TransactionRejected(
                transaction,
                f"chargeback acts on a {original.transaction_type.value}, only deposits can be charged back",
            )

        # May drive held and total negative; accepted as historical behaviour.
        account.charge_back(original.amount)


def apply_transaction(ledger: Ledger, history: TransactionHistory, transaction: Transaction) -> ProcessingResult:
    """Apply one record to the given ledger and history."""
    return TransactionProcessor(ledger, history).process_transaction(transaction)
