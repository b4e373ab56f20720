"""Fatal processing errors and non-fatal record rejections."""

from typing import Dict, Optional

from models import Transaction


class ProcessingError(Exception):
    """Fatal error: aborts the whole run."""


class MissingAmountError(ProcessingError):
    def __init__(self, transaction: Transaction):
        self.transaction = transaction
        kind = getattr(transaction.transaction_type, "value", transaction.transaction_type)
        super().__init__(f"{kind} tx {transaction.transaction_id} has no amount")


class InvalidAmountError(ProcessingError):
    def __init__(self, transaction: Transaction):
        self.transaction = transaction
        super().__init__(f"tx {transaction.transaction_id} amount {transaction.amount} cannot be held to 4 decimal places")


class UnknownTransactionKindError(ProcessingError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f'Unknown transaction type "{kind}"')


class RecordParseError(ProcessingError):
    """Raised by a record source when an input row cannot be turned into a Transaction."""

    def __init__(self, line_number: int, row: Optional[Dict[str, str]], reason: str):
        self.line_number = line_number
        self.row = row
        self.reason = reason
        super().__init__(f"line {line_number}: {reason} (row: {row})")


class TransactionRejected(Exception):
    """
    Non-fatal rejection of a single record.
    The ledger is left untouched and processing continues with the next record.
    """

    def __init__(self, transaction: Transaction, reason: str):
        self.transaction = transaction
        self.reason = reason
        super().__init__(reason)
