"""Type definitions shared across anchorsnap."""

from .base import SnapBaseModel

__all__ = [
    'SnapBaseModel',
]
