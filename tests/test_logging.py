import logging
import logging.handlers

import pytest

from dummydata.logging_setup import ROOT_LOGGER, configure_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(ROOT_LOGGER)
    before = list(logger.handlers)
    yield logger
    for h in logger.handlers:
        if h not in before:
            logger.removeHandler(h)
            h.close()


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


def test_file_handler_added_on_later_call(clean_logger, tmp_path):
    configure_logging("INFO")
    assert _file_handlers(clean_logger) == []
    configure_logging("INFO", str(tmp_path))
    handlers = _file_handlers(clean_logger)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str(tmp_path / "dummydata.log")


def test_repeated_calls_do_not_duplicate(clean_logger, tmp_path):
    configure_logging("DEBUG", str(tmp_path))
    configure_logging("DEBUG", str(tmp_path))
    assert len(_file_handlers(clean_logger)) == 1
    assert sum(1 for h in clean_logger.handlers if getattr(h, "_dummydata", False)) == 1
    assert clean_logger.level == logging.DEBUG
