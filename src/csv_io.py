"""CSV record source and account sink around the ledger core."""

import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, Optional, TextIO

from errors import RecordParseError, UnknownTransactionKindError
from models import AccountSnapshot, Transaction, TransactionType, normalize_amount

logger = logging.getLogger(__name__)

INPUT_FIELDS = ("type", "client", "tx", "amount")
OUTPUT_FIELDS = ("client", "available", "held", "total", "locked")

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1


def read_transactions(stream: TextIO) -> Iterator[Transaction]:
    """
    Lazily parse `type, client, tx, amount` rows into Transactions.

    Whitespace around headers and values is ignored and the trailing amount
    column may be left out entirely (disputes, resolves, chargebacks).
    Raises RecordParseError for malformed rows and UnknownTransactionKindError
    for a type outside the known vocabulary.
    """
    reader = csv.DictReader(stream)
    try:
        fieldnames = reader.fieldnames
    except (csv.Error, UnicodeDecodeError) as e:
        raise RecordParseError(reader.line_num, None, str(e)) from e
    if fieldnames is None:
        return

    reader.fieldnames = [name.strip() for name in fieldnames]
    missing = [name for name in INPUT_FIELDS[:3] if name not in reader.fieldnames]
    if missing:
        raise RecordParseError(reader.line_num, None, f"header is missing column(s) {', '.join(missing)}")

    for row in _read_rows(reader):
        if None in row:
            raise RecordParseError(reader.line_num, row, "too many fields")

        normalized = {k: (v or "").strip() for k, v in row.items()}
        if not any(normalized.values()):
            continue

        yield _parse_csv_row(reader.line_num, normalized)


def _read_rows(reader: csv.DictReader) -> Iterator[Dict[str, str]]:
    """Surface reader and decoding failures as RecordParseError."""
    try:
        yield from reader
    except (csv.Error, UnicodeDecodeError) as e:
        raise RecordParseError(reader.line_num, None, str(e)) from e


def _parse_csv_row(line_number: int, row: Dict[str, str]) -> Transaction:
    """Parse a whitespace-trimmed CSV row into a Transaction."""
    type_str = row["type"].lower()
    try:
        transaction_type = TransactionType(type_str)
    except ValueError:
        raise UnknownTransactionKindError(row["type"]) from None

    client_id = _parse_id(line_number, row, "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(line_number, row, "tx", MAX_TRANSACTION_ID)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=_parse_amount(line_number, row),
    )


def _parse_id(line_number: int, row: Dict[str, str], field: str, maximum: int) -> int:
    try:
        value = int(row[field])
    except ValueError as e:
        raise RecordParseError(line_number, row, f"invalid {field}: {e}") from e

    if not 0 <= value <= maximum:
        raise RecordParseError(line_number, row, f"{field} {value} is out of range 0..{maximum}")
    return value


def _parse_amount(line_number: int, row: Dict[str, str]) -> Optional[Decimal]:
    amount_str = row.get("amount", "")
    if not amount_str:
        return None

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise RecordParseError(line_number, row, f"invalid amount {amount_str!r}") from None

    if not amount.is_finite():
        raise RecordParseError(line_number, row, f"invalid amount {amount_str!r}")

    try:
        normalize_amount(amount)
    except InvalidOperation:
        raise RecordParseError(line_number, row, f"amount {amount_str!r} is too large") from None
    return amount


def write_accounts(snapshots: Iterable[AccountSnapshot], stream: TextIO) -> int:
    """Write account snapshots as CSV and return how many rows were written."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_FIELDS)

    count = 0
    for snapshot in snapshots:
        writer.writerow([
            snapshot.client,
            snapshot.available,
            snapshot.held,
            snapshot.total,
            str(snapshot.locked).lower(),
        ])
        count += 1

    logger.info(f"Wrote {count} account rows")
    return count
