"""Observability utilities for anchorsnap."""

from .context import RunContext, run_scope, sanitize_extras

__all__ = [
    "RunContext",
    "run_scope",
    "sanitize_extras",
]
