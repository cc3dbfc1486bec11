"""Shared fixtures for Daemonexec tests."""

import logging

import pytest

from daemonexec.utils.constants import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logger():
    """Leave the daemonexec logger without handlers after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
