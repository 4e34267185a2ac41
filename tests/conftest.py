"""
Shared fixtures for the brew-pretty tests.
"""

import pytest

from brew_pretty import logging_config


@pytest.fixture(autouse=True)
def reset_logger():
    """Give every test a fresh logger and release handlers a test installed."""
    yield
    logger = logging_config._logger
    if logger is not None:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
    logging_config._logger = None
