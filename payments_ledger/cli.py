"""
Command Line Entry Point

    payments-ledger transactions.csv > accounts.csv

Applies every record in the input file and prints the final account table
on standard output. Rejected transactions are reported on standard error
and do not affect the exit code; an unreadable file or malformed record
aborts the run with exit code 1 and no table. Invalid PAYMENTS_LEDGER_*
settings exit with code 2.
"""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .config import get_config
from .ingest import RecordError, read_transactions
from .ledger import Ledger
from .logging_config import get_logger, setup_logging
from .reporting import write_accounts

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payments-ledger",
        description="Apply a CSV stream of transactions and print final client balances",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("input", help="CSV file with columns: type, client, tx, amount")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Diagnostics level (default from PAYMENTS_LEDGER_LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        help="Diagnostics format (default from PAYMENTS_LEDGER_LOG_FORMAT)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = get_config()
    except ValidationError as e:
        setup_logging()
        get_logger("payments_ledger.cli").error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    setup_logging(
        level=args.log_level or config.log_level,
        fmt=args.log_format or config.log_format,
        log_file=config.log_file,
    )
    logger = get_logger("payments_ledger.cli")

    ledger = Ledger()
    try:
        ledger.apply_all(read_transactions(args.input))
    except OSError as e:
        logger.error(f"Input file read failed, {args.input}: {e}")
        return EXIT_INPUT_ERROR
    except RecordError as e:
        logger.error(f"Invalid input in {args.input}, {e}")
        return EXIT_INPUT_ERROR

    logger.info(
        f"Read the input file, {args.input}. Applied {ledger.applied} transactions, "
        f"rejected {ledger.rejected}, {len(ledger.accounts)} accounts."
    )

    if config.sort_output:
        accounts = ledger.accounts_by_client()
    else:
        accounts = list(ledger.accounts.values())
    write_accounts(accounts, sys.stdout)
    return EXIT_OK
