"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
so every line emitted during a decoding run carries the run and program it
belongs to.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Any, Dict, List, Optional

from anchorsnap.__version__ import __version__

run_id_var: ContextVar[Optional[str]] = ContextVar("run_id", default=None)
program_id_var: ContextVar[Optional[str]] = ContextVar("program_id", default=None)

_static_context: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Static context (set once per process with ``set_logging_context``) is
    added first, then the per-run context variables.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        for key, value in _static_context.items():
            setattr(record, key, value)
        setattr(record, "run_id", run_id_var.get())
        setattr(record, "program_id", program_id_var.get())
        setattr(record, "sdk_name", "anchorsnap")
        setattr(record, "sdk_version", __version__)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Replace the static context attached to every record."""
    _static_context.clear()
    if environment is not None:
        _static_context["environment"] = environment
    if extra:
        _static_context.update(extra)


def set_run_context(
    run_id: Optional[str] = None,
    program_id: Optional[str] = None,
) -> List[Token]:
    """Set run context variables.

    Returns:
        Tokens for ``reset_run_context``, one per variable that was set
    """
    tokens: List[Token] = []
    if run_id is not None:
        tokens.append(run_id_var.set(run_id))
    if program_id is not None:
        tokens.append(program_id_var.set(program_id))
    return tokens


def reset_run_context(tokens: List[Token]) -> None:
    """Restore the run context that was active before ``set_run_context``."""
    for token in reversed(tokens):
        token.var.reset(token)


def clear_run_context() -> None:
    """Clear all run context variables."""
    run_id_var.set(None)
    program_id_var.set(None)
