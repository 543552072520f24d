"""
CSV Ingestion Module

Reads transaction records from a delimited file and normalizes each row
into a TransactionMessage, in file order. Expected header:

    type, client, tx, amount

Whitespace around headers and values is ignored. ``amount`` may be empty
or missing for dispute, resolve and chargeback rows. Any malformed row is
fatal to the run and raises RecordError with the offending line number.
"""

import csv
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .currency import NegativeAmountError, parse_amount
from .logging_config import get_logger, log_action
from .transactions import TransactionMessage, TransactionType

CLIENT_MAX = 2 ** 16 - 1
TX_MAX = 2 ** 32 - 1

FIELDNAMES = ("type", "client", "tx", "amount")
REQUIRED_FIELDS = ("type", "client", "tx")

logger = get_logger("payments_ledger.ingest")


class RecordError(ValueError):
    """Raised when an input row cannot be turned into a transaction"""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class TransactionRecord(BaseModel):
    """One validated input row, before amount conversion"""
    type: str = Field(..., min_length=1, description="Transaction kind as spelled in the file")
    client: int = Field(..., ge=0, le=CLIENT_MAX, description="Client id (unsigned 16-bit)")
    tx: int = Field(..., ge=0, le=TX_MAX, description="Transaction id (unsigned 32-bit)")
    amount: str = Field("", description="Decimal amount as string, may be empty")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()


def parse_row(row: Dict[str, Optional[str]], line: Optional[int] = None) -> TransactionRecord:
    """
    Validate one CSV row

    Raises:
        RecordError: If a field is missing or out of range
    """
    data = {}
    for name in FIELDNAMES:
        value = _clean(row.get(name))
        if value is None or (value == "" and name != "amount"):
            if name in REQUIRED_FIELDS:
                raise RecordError(f"missing value for '{name}'", line=line)
            continue
        data[name] = value

    try:
        return TransactionRecord(**data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise RecordError(f"invalid record ({details})", line=line) from e


def to_message(record: TransactionRecord, sequence: int) -> TransactionMessage:
    """
    Normalize a validated record into a TransactionMessage

    A negative amount is reported as a warning and applied as zero, so the
    rest of the file is still processed.

    Raises:
        UnknownTransactionType: If the type string is not recognized
        AmountError: If the amount is not a valid finite decimal
        ValueError: If a deposit or withdrawal has no amount
    """
    transaction_type = TransactionType.parse(record.type)

    if transaction_type.requires_amount and not record.amount:
        raise ValueError(f"{transaction_type.value} requires an amount")

    try:
        amount = parse_amount(record.amount)
    except NegativeAmountError as e:
        log_action(
            logger, "warning", f"{e}. Amount applied as 0.0000.",
            action=transaction_type.value,
            client=record.client,
            tx=record.tx,
            sequence=sequence
        )
        amount = 0

    return TransactionMessage(
        sequence=sequence,
        tx=record.tx,
        transaction_type=transaction_type,
        client=record.client,
        amount=amount,
    )


def _read_rows(reader: csv.DictReader) -> Iterator[TransactionMessage]:
    if not reader.fieldnames:
        return

    reader.fieldnames = [name.strip() for name in reader.fieldnames]
    missing = [name for name in REQUIRED_FIELDS if name not in reader.fieldnames]
    if missing:
        raise RecordError(f"header is missing column(s): {', '.join(missing)}", line=1)

    sequence = 0
    for row in reader:
        line = reader.line_num
        record = parse_row(row, line=line)
        sequence += 1
        try:
            message = to_message(record, sequence)
        except ValueError as e:
            raise RecordError(str(e), line=line) from e
        yield message


def read_transactions(path: Union[str, Path]) -> Iterator[TransactionMessage]:
    """
    Yield a TransactionMessage for every row of a CSV file, in file order

    Sequence numbers start at 1. The file is read lazily, so rows before a
    malformed one have already been yielded when RecordError is raised.

    Raises:
        OSError: If the file cannot be opened or read
        RecordError: If the file is not UTF-8 CSV, or the header or any row
            is malformed
    """
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle, skipinitialspace=True)
        try:
            yield from _read_rows(reader)
        except UnicodeDecodeError as e:
            raise RecordError(
                f"file is not valid UTF-8 text ({e.reason})", line=reader.line_num + 1
            ) from e
        except csv.Error as e:
            raise RecordError(f"malformed CSV ({e})", line=reader.line_num) from e
