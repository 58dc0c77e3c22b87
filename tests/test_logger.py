# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

import pytest

from site_fetcher.logger import LOGGER_NAME, NOISY_LOGGERS, configure, get_logger, init_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging()


def test_component_loggers_are_children():
    assert get_logger().name == LOGGER_NAME
    child = get_logger("crawler")
    assert child.name == "SiteFetcher.crawler"
    assert child.parent is logging.getLogger(LOGGER_NAME)


def test_file_handler_added_and_replaced(tmp_path):
    root = configure(level="DEBUG", log_file=tmp_path / "run.log")
    assert root.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
    assert len(root.handlers) == 2

    root = configure(level="INFO")
    assert len(root.handlers) == 1
    assert root.propagate is False


def test_component_records_reach_log_file(tmp_path):
    log_file = tmp_path / "run.log"
    init_logging(level="INFO", log_file=log_file)
    get_logger("engine").info("Downloaded %d resources", 3)
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "SiteFetcher.engine" in text
    assert "Downloaded 3 resources" in text


def test_library_loggers_quiet_unless_debug():
    logging.getLogger("aiohttp.access").setLevel(logging.NOTSET)
    init_logging(level="INFO")
    assert all(logging.getLogger(name).level == logging.WARNING for name in NOISY_LOGGERS)

    logging.getLogger("aiohttp.access").setLevel(logging.NOTSET)
    init_logging(level="DEBUG")
    assert logging.getLogger("aiohttp.access").level == logging.NOTSET
