"""Snapshot aggregation and persistence.

Key Components:
    - **SnapshotAggregator**: decodes a stream of raw accounts into a
      Snapshot with per-item failure isolation
    - **Snapshot**: decoded accounts keyed by pubkey
    - **StaticAccountSource / Base64AccountSource**: in-memory inputs
    - **JsonSnapshotWriter**: pretty-printed JSON output
"""

from .aggregator import RawAccount, SnapshotAggregator
from .sources import Base64AccountSource, StaticAccountSource
from .types import AggregationResult, DecodeFailure, Snapshot
from .writer import JsonSnapshotWriter

__all__ = [
    "SnapshotAggregator",
    "RawAccount",
    "Snapshot",
    "DecodeFailure",
    "AggregationResult",
    "StaticAccountSource",
    "Base64AccountSource",
    "JsonSnapshotWriter",
]
