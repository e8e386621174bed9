"""Protocol definitions for anchorsnap.

Protocols provide type-safe interfaces without requiring inheritance,
following Python's structural subtyping (duck typing with type hints).
"""

from .sources import AccountSource, SnapshotWriter

__all__ = [
    "AccountSource",
    "SnapshotWriter",
]
