"""Utility functions shared across the package."""

from .logging import get_logger, set_level
from .config import load_config, get_section

__all__ = ["get_logger", "set_level", "load_config", "get_section"]
