"""Transactions, client accounts and amount helpers."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

AMOUNT_QUANTUM = Decimal("0.0001")


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class ProcessingResult(Enum):
    SUCCESS = "success"
    REJECTED = "rejected"


def normalize_amount(amount: Decimal) -> Decimal:
    """Round to 4 decimal places, half away from zero."""
    return Decimal(amount).quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal) -> str:
    """Render with exactly 4 fractional digits."""
    return f"{normalize_amount(amount):f}"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        kind = getattr(self.transaction_type, "value", self.transaction_type)
        return f"Transaction({kind}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0.0000")
    held: Decimal = Decimal("0.0000")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def charge_back(self, amount: Decimal) -> None:
        """Remove held funds for good and freeze the account."""
        self.held -= amount
        self.locked = True


@dataclass(frozen=True)
class AccountSnapshot:
    client: int
    available: str
    held: str
    total: str
    locked: bool

    @classmethod
    def from_account(cls, account: ClientAccount) -> "AccountSnapshot":
        return cls(
            client=account.client_id,
            available=format_amount(account.available),
            held=format_amount(account.held),
            total=format_amount(account.total),
            locked=account.locked,
        )


class ProcessingStats:
    """Counters for a single engine run."""

    def __init__(self):
        self.processed = 0
        self.rejected = 0

    def record_success(self):
        self.processed += 1

    def record_rejection(self):
        self.rejected += 1

    def __repr__(self) -> str:
        return f"ProcessingStats(processed={self.processed}, rejected={self.rejected})"
