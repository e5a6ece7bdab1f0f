"""
Centralized Logging Configuration
==================================
One stdout handler per package logger, plus an optional log file.

Usage:
    from lanka_pantry.utils.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

PACKAGE_PREFIX = 'lanka_pantry'
DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _formatted(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
    return handler


def _file_handler(log_file: str, level: int) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return _formatted(logging.FileHandler(log_path, encoding='utf-8'), level)


def get_logger(
    name: str,
    log_file: Optional[str] = None,
    level: int = logging.INFO
) -> logging.Logger:
    """
    Return the logger for ``name``, configuring it on first use.

    Parameters
    ----------
    name : str
        Usually ``__name__`` of the calling module
    log_file : str, optional
        Also write records to this file
    level : int
        Logging level (default: INFO)
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    logger.addHandler(_formatted(logging.StreamHandler(sys.stdout), level))
    if log_file:
        logger.addHandler(_file_handler(log_file, level))

    # Records stay out of the root logger
    logger.propagate = False
    return logger


def set_package_level(level: int, log_file: Optional[str] = None) -> None:
    """
    Apply ``level`` to every package logger created so far.

    With ``log_file``, loggers without a file handler gain one.
    """
    for name, candidate in logging.Logger.manager.loggerDict.items():
        if not name.startswith(PACKAGE_PREFIX) or not isinstance(candidate, logging.Logger):
            continue
        candidate.setLevel(level)
        for handler in candidate.handlers:
            handler.setLevel(level)
        if log_file and not any(isinstance(h, logging.FileHandler) for h in candidate.handlers):
            candidate.addHandler(_file_handler(log_file, level))


def log_dataframe_info(logger: logging.Logger, df_name: str, df) -> None:
    """Row and column counts of a table, with a warning when values are missing."""
    logger.info(f"Table '{df_name}': {len(df):,} rows, {len(df.columns)} columns")
    logger.debug(f"Table '{df_name}' columns: {list(df.columns)}")

    missing_count = int(df.isnull().sum().sum())
    if missing_count > 0:
        logger.warning(f"Table '{df_name}' has {missing_count:,} missing values")


class LogContext:
    """
    Logs the start, duration and outcome of a block.

    Usage:
        with LogContext(logger, "Projecting monthly needs"):
            ...
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.info(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if exc_type is None:
            self.logger.info(f"Completed: {self.operation} ({elapsed:.2f}s)")
        else:
            self.logger.error(f"Failed: {self.operation} ({elapsed:.2f}s) - {exc_val}")
        return False
