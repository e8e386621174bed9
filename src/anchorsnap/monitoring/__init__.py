"""Monitoring module for anchorsnap."""

from .metrics import DecodeMetrics, RunStats

__all__ = [
    "DecodeMetrics",
    "RunStats",
]
