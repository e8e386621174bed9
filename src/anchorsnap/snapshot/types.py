"""Snapshot and aggregation result types."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from anchorsnap.common.exceptions import AnchorSnapError
from anchorsnap.decoding.types import DecodedAccount
from anchorsnap.monitoring.metrics import RunStats
from anchorsnap.types.base import SnapBaseModel


class Snapshot(Mapping[str, DecodedAccount]):
    """Decoded accounts keyed by identifier.

    Built incrementally by the aggregator and frozen once the input stream
    is exhausted. Key order carries no meaning; two snapshots with the same
    records compare equal.
    """

    def __init__(self, accounts: Optional[Mapping[str, DecodedAccount]] = None):
        self._accounts: Dict[str, DecodedAccount] = dict(accounts or {})
        self._frozen = False

    def insert(self, record: DecodedAccount) -> bool:
        """Insert ``record`` under its pubkey.

        Returns:
            True if the key was already present and has been replaced

        Raises:
            RuntimeError: If the snapshot has been frozen
        """
        if self._frozen:
            raise RuntimeError("Snapshot is frozen; no further records can be inserted")
        replaced = record.pubkey in self._accounts
        self._accounts[record.pubkey] = record
        return replaced

    def freeze(self) -> "Snapshot":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __getitem__(self, pubkey: str) -> DecodedAccount:
        return self._accounts[pubkey]

    def __iter__(self) -> Iterator[str]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Snapshot):
            return self._accounts == other._accounts
        return NotImplemented

    def __repr__(self) -> str:
        return f"Snapshot(accounts={len(self._accounts)})"

    def account_type_counts(self) -> Dict[str, int]:
        """Number of records per account type."""
        return dict(Counter(record.account_type for record in self._accounts.values()))

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serializable view: ``{pubkey: {pubkey, account_type, data}}``."""
        return {pubkey: record.to_dict() for pubkey, record in self._accounts.items()}


class DecodeFailure(SnapBaseModel):
    """A blob skipped because it could not be resolved or decoded.

    Attributes:
        pubkey: Identifier of the skipped account
        error_code: Error code value (e.g. ``DECODE_001``)
        error_name: Error code name (e.g. ``DECODE_TRUNCATED``)
        message: Human-readable description
        field_path: Dotted path of the failing field, when known
    """

    pubkey: str
    error_code: str
    error_name: str
    message: str
    field_path: Optional[str] = None

    @classmethod
    def from_error(cls, pubkey: str, error: AnchorSnapError) -> "DecodeFailure":
        return cls(
            pubkey=pubkey,
            error_code=error.error_code.value,
            error_name=error.error_code.name,
            message=error.message,
            field_path=error.details.get("field_path"),
        )


@dataclass
class AggregationResult:
    """Outcome of one aggregation run.

    Attributes:
        snapshot: Accepted records keyed by pubkey
        failures: Skipped blobs with their errors
        stats: Per-outcome counters
    """

    snapshot: Snapshot
    failures: List[DecodeFailure] = field(default_factory=list)
    stats: RunStats = field(default_factory=RunStats)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "snapshot": self.snapshot.to_dict(),
            "failures": [failure.to_dict() for failure in self.failures],
            "stats": self.stats.to_dict(),
        }
