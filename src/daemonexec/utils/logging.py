"""Logging utilities for Daemonexec.

Logging is a debug-only diagnostic sink. Once a process is detached its
standard streams point at the null device, so the only useful destinations
are the local syslog socket and an optional log file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler, SysLogHandler
from pathlib import Path
from typing import Optional

from daemonexec.utils.constants import (
    LOG_DATE_FORMAT,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_FORMAT,
    LOGGER_NAME,
    SYSLOG_FORMAT,
    SYSLOG_SOCKET,
)


def setup_logging(
    debug: bool = False,
    log_file: Optional[Path] = None,
    syslog_socket: str = SYSLOG_SOCKET,
) -> logging.Logger:
    """Setup logging for Daemonexec.

    Args:
        debug: Enable the diagnostic sink. When False nothing is emitted anywhere.
        log_file: Optional file to write diagnostics to (debug only)
        syslog_socket: Path of the local syslog socket

    Returns:
        Root logger for daemonexec
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.propagate = False

    if not debug:
        logger.setLevel(logging.CRITICAL + 1)
        logger.addHandler(logging.NullHandler())
        return logger

    logger.setLevel(logging.DEBUG)

    # Only the local socket; SysLogHandler would otherwise fall back to UDP.
    if os.path.exists(syslog_socket):
        try:
            syslog_handler = SysLogHandler(address=syslog_socket)
        except OSError:
            syslog_handler = None
        if syslog_handler is not None:
            syslog_handler.setLevel(logging.DEBUG)
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_FORMAT))
            logger.addHandler(syslog_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
