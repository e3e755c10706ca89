"""Unit tests for the logging helpers."""

import logging

from src.utils.logging import ROOT_LOGGER, get_logger, set_level


class TestGetLogger:
    """Test suite for get_logger and set_level."""

    def test_single_handler(self):
        """Test that repeated calls do not add handlers."""
        get_logger("src.lanes.a")
        get_logger("src.lanes.b")
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1

    def test_level_argument(self):
        """Test setting the level of a single logger."""
        logger = get_logger("src.lanes.level_test", level=logging.DEBUG)
        assert logger.level == logging.DEBUG

    def test_set_level(self):
        """Test setting the package level by name."""
        set_level("warning")
        assert logging.getLogger(ROOT_LOGGER).level == logging.WARNING
        set_level(logging.INFO)
        assert logging.getLogger(ROOT_LOGGER).level == logging.INFO
