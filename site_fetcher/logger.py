# === FILE: site_fetcher/logger.py ===
"""Logging setup for **site_fetcher**.

The project logs under one root logger, ``SiteFetcher``. Each pipeline stage
gets a child (``SiteFetcher.crawler``, ``SiteFetcher.fetcher``, ...) through
:func:`get_logger`, so the format's ``%(name)s`` tells which stage spoke.

Usage::

      from site_fetcher.logger import get_logger
      log = get_logger("crawler")
      log.info("Starting crawl: %s", url)

The CLI calls :func:`init_logging` once with the options given on the command
line; until then the stdout handler installed at import time is used.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Iterable, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteFetcher"

# third-party loggers that flood DEBUG output during a crawl
NOISY_LOGGERS: Final[tuple[str, ...]] = ("aiohttp.access", "aiohttp.client", "aiohttp.internal", "charset_normalizer")

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _formatted(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _quiet(names: Iterable[str], level: int) -> None:
    for name in names:
        logging.getLogger(name).setLevel(level)


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
    verbose_libraries: bool = False,
) -> logging.Logger:
    """(Re)configure the ``SiteFetcher`` logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Optional log file, rotated at ``LOG_FILE_MAX_BYTES``.
    log_format
        Format string shared by every handler.
    replace_handlers
        Close and drop existing handlers first.
    verbose_libraries
        Leave aiohttp/charset_normalizer at their own levels instead of WARNING.
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)

    if replace_handlers:
        for handler in list(root.handlers):
            handler.close()
        root.handlers.clear()

    root.addHandler(_formatted(logging.StreamHandler(sys.stdout), log_format))
    if log_file is not None:
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        root.addHandler(_formatted(file_handler, log_format))

    root.propagate = False
    if not verbose_libraries:
        _quiet(NOISY_LOGGERS, logging.WARNING)
    return root


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """CLI entry: replace all handlers; library loggers stay quiet unless level is DEBUG."""
    debug = logging.getLevelName(level) == logging.DEBUG if isinstance(level, str) else level <= logging.DEBUG
    return configure(
        level=level,
        log_file=log_file,
        log_format=log_format,
        replace_handlers=True,
        verbose_libraries=debug,
    )


def get_logger(component: str | None = None) -> logging.Logger:
    """Project logger, or its ``SiteFetcher.<component>`` child."""
    return logging.getLogger(f"{LOGGER_NAME}.{component}" if component else LOGGER_NAME)


logger: logging.Logger = init_logging()

__all__ = [
    "DEFAULT_FORMAT",
    "LOGGER_NAME",
    "NOISY_LOGGERS",
    "configure",
    "get_logger",
    "init_logging",
    "logger",
]
