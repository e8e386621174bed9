"""Logging infrastructure for anchorsnap.

This module provides structured logging with JSON output and run context
tracking (run id, program id) for decoding runs.
"""

from anchorsnap.logging.filters import ContextFilter
from anchorsnap.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
