"""Command line entry point: CSV transactions in, account balances out."""

import sys
import logging

from config import load_config
from csv_io import write_accounts
from errors import ProcessingError, RecordParseError
from payments_engine import PaymentsEngine


def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    config = load_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if len(argv) != 2:
        print("Usage: payments-ledger <input.csv>", file=sys.stderr)
        return 1

    filepath = argv[1]
    engine = PaymentsEngine()
    try:
        engine.process_file(filepath)
    except OSError as e:
        print(f"Failed to open the input file {filepath}: {e}", file=sys.stderr)
        return 1
    except RecordParseError as e:
        print(f"Failed to parse CSV input: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"Failed to process transactions: {e}", file=sys.stderr)
        return 1

    snapshots = engine.snapshot()
    if config.sort_output:
        snapshots = sorted(snapshots, key=lambda snapshot: snapshot.client)
    try:
        write_accounts(snapshots, sys.stdout)
        sys.stdout.flush()
    except OSError as e:
        print(f"Failed to print the ledger: {e}", file=sys.stderr)
        return 1

    if config.report_stats:
        print(
            f"Processed: {engine.stats.processed}, "
            f"Rejected: {engine.stats.rejected}",
            file=sys.stderr
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
