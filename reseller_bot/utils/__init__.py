"""Utility functions for ResellerBot.

The ``logging_system`` module provides the console logging setup that
honours the ``LOG_LEVEL`` and ``NO_COLOR`` environment variables.
"""

from .logging_system import configure_logging, setup_log_system, get_logger  # noqa: F401

__all__ = ["configure_logging", "setup_log_system", "get_logger"]
