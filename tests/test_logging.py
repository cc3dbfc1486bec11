"""Tests for daemonexec.utils.logging (debug-only diagnostic sink)."""

import logging
from logging.handlers import RotatingFileHandler, SysLogHandler
from pathlib import Path

from daemonexec.utils.logging import setup_logging


class TestNonDebug:
    """Without debug nothing is emitted."""

    def test_null_handler_only(self) -> None:
        """Only a NullHandler is attached and nothing propagates."""
        logger = setup_logging(debug=False)
        assert logger.name == "daemonexec"
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.NullHandler)
        assert logger.propagate is False

    def test_errors_suppressed(self) -> None:
        """Even errors are below the logger level."""
        logger = setup_logging(debug=False)
        assert not logger.isEnabledFor(logging.CRITICAL)

    def test_log_file_ignored(self, tmp_path: Path) -> None:
        """A log file is not created outside debug mode."""
        log_file = tmp_path / "daemonexec.log"
        setup_logging(debug=False, log_file=log_file)
        logging.getLogger("daemonexec.core.launcher").error("not written")
        assert not log_file.exists()


class TestDebug:
    """Debug mode writes to syslog and/or a file."""

    def test_writes_log_file(self, tmp_path: Path) -> None:
        """Messages from child loggers reach the log file."""
        log_file = tmp_path / "logs" / "daemonexec.log"
        logger = setup_logging(debug=True, log_file=log_file, syslog_socket=str(tmp_path / "no-socket"))

        logging.getLogger("daemonexec.core.launcher").debug("Launch attempt 1/16 failed")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "DEBUG" in content
        assert "Launch attempt 1/16 failed" in content
        assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

    def test_missing_syslog_socket_skipped(self, tmp_path: Path) -> None:
        """Without a local syslog socket no network fallback is used."""
        logger = setup_logging(debug=True, syslog_socket=str(tmp_path / "no-socket"))
        assert not any(isinstance(h, SysLogHandler) for h in logger.handlers)
        assert not any(isinstance(h, logging.StreamHandler) for h in logger.handlers)

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path) -> None:
        """Calling setup again does not stack handlers."""
        log_file = tmp_path / "daemonexec.log"
        socket = str(tmp_path / "no-socket")
        setup_logging(debug=True, log_file=log_file, syslog_socket=socket)
        logger = setup_logging(debug=True, log_file=log_file, syslog_socket=socket)
        assert len(logger.handlers) == 1
