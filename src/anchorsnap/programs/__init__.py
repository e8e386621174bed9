"""Decoder registrations for specific on-chain programs."""

from . import meteora

__all__ = [
    "meteora",
]
