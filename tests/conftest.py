"""Test configuration for pytest."""

import pytest

from src.utils.logging import ROOT_LOGGER, get_logger


@pytest.fixture(autouse=True)
def restore_log_level():
    """Restore the package log level changed by config or set_level."""
    logger = get_logger(ROOT_LOGGER)
    level = logger.level
    yield
    logger.setLevel(level)
