import logging

import pytest

from payments_ledger.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog sees records in every test"""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def make_csv(tmp_path):
    """Write lines to a CSV file under tmp_path and return its path"""
    def _make(lines, name="transactions.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path
    return _make
