"""
Diagnostics Logging Configuration Module

Rejected transactions and run summaries are reported through the
``payments_ledger`` logger, never on standard output. Output is plain text
by default, with a JSON formatter for machine collection.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import IO, Optional

LOGGER_NAME = "payments_ledger"

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module if hasattr(record, 'module') else record.name,
            "message": record.getMessage(),
            "action": getattr(record, 'action', None),
            "client": getattr(record, 'client', None),
            "tx": getattr(record, 'tx', None),
            "sequence": getattr(record, 'sequence', None),
        }

        # Remove None values
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "WARNING",
    fmt: str = "text",
    stream: Optional[IO[str]] = None,
    log_file: Optional[str] = None,
    logger_name: str = LOGGER_NAME
) -> logging.Logger:
    """
    Setup diagnostics logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "text" for human-readable lines, "json" for structured lines
        stream: Output stream, defaults to standard error
        log_file: Write to this file instead of a stream when given
        logger_name: Name of the logger

    Returns:
        Configured logger instance
    """
    if fmt not in ("text", "json"):
        raise ValueError(f"Unsupported log format: {fmt}")

    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)

    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, client: Optional[int] = None,
               tx: Optional[int] = None, sequence: Optional[int] = None):
    """
    Log a ledger action with structured data.

    Args:
        logger: Logger instance
        level: Log level (info, warning, error, etc.)
        message: Log message
        action: Transaction type being applied
        client: Client the record refers to
        tx: Transaction id the record refers to
        sequence: Arrival position of the record
    """
    fields = {
        "action": action,
        "client": client,
        "tx": tx,
        "sequence": sequence,
    }
    extra = {k: v for k, v in fields.items() if v is not None}
    logger.log(getattr(logging, level.upper()), message, extra=extra)
