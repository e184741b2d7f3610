"""Logging utilities for the CLI and pipeline modules."""

from __future__ import annotations

import logging
from pathlib import Path


DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_FILE_NAME = "log_compressor.log"


def resolve_log_file(log_file: Path | None) -> Path | None:
    """Return the absolute file the file handler writes to, if any."""

    if log_file is None:
        return None
    if log_file.is_dir():
        log_file = log_file / DEFAULT_LOG_FILE_NAME
    return log_file.resolve()


def configure_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """Configure process-wide console logging plus an optional file handler."""

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter(fmt=DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    root_logger.addHandler(stream_handler)

    log_file = resolve_log_file(log_file)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger("log_compressor")
    logger.setLevel(level)
    return logger
