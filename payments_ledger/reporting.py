"""
Account Reporting Module

Renders the final account table as CSV:

    client,available,held,total,locked

Amounts are written with four fractional digits and ``locked`` as a
lowercase boolean literal.
"""

import csv
from typing import IO, Iterable, List

from .accounts import Account
from .currency import format_amount

HEADERS = ["client", "available", "held", "total", "locked"]


def account_row(account: Account) -> List[str]:
    """Format one account as a list of CSV fields"""
    return [
        str(account.client),
        format_amount(account.available),
        format_amount(account.held),
        format_amount(account.total),
        "true" if account.locked else "false",
    ]


def write_accounts(accounts: Iterable[Account], stream: IO[str]) -> int:
    """
    Write the header and one row per account to a text stream

    Args:
        accounts: Accounts in the order they should appear
        stream: Destination, e.g. sys.stdout

    Returns:
        Number of account rows written
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADERS)

    count = 0
    for account in accounts:
        writer.writerow(account_row(account))
        count += 1
    return count
