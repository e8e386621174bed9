"""Metrics collection for decoding runs.

This module provides the counters and histograms recorded while blobs are
classified and decoded, exported through OpenTelemetry.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from anchorsnap.logging import get_logger
from anchorsnap.telemetry import get_meter
from anchorsnap.__version__ import __version__


@dataclass
class RunStats:
    """Counters for a single aggregation run.

    Attributes:
        processed: Blobs taken from the input stream
        decoded: Blobs decoded structurally by a registered decoder
        fallback: Blobs that produced a fallback record
        filtered: Records dropped because their type is not allowed
        failed: Blobs skipped because of a resolve or decode error
    """

    processed: int = 0
    decoded: int = 0
    fallback: int = 0
    filtered: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DecodeMetrics:
    """Collector for per-blob decode metrics.

    Without an OpenTelemetry SDK configured, every instrument is a no-op.
    """

    def __init__(self, meter_name: str = "anchorsnap", meter_version: Optional[str] = None):
        self.logger = get_logger(__name__)
        self.meter = get_meter(meter_name, meter_version or __version__)
        self._setup_instruments()

    def _setup_instruments(self) -> None:
        """Setup OpenTelemetry instruments."""
        self.accounts_counter = self.meter.create_counter(
            "anchorsnap_accounts_total",
            description="Accounts processed, by outcome",
            unit="accounts"
        )

        self.bytes_counter = self.meter.create_counter(
            "anchorsnap_bytes_total",
            description="Raw account bytes processed",
            unit="bytes"
        )

        self.duration_histogram = self.meter.create_histogram(
            "anchorsnap_decode_duration_seconds",
            description="Time spent resolving and decoding a single account",
            unit="s"
        )

    def record_account(
        self,
        outcome: str,
        account_type: Optional[str],
        size: int,
        duration_seconds: float,
    ) -> None:
        """Record one processed blob.

        Args:
            outcome: One of ``decoded``, ``fallback``, ``filtered`` or ``failed``
            account_type: Resolved type name, if known
            size: Length of the raw blob
            duration_seconds: Time spent resolving and decoding it
        """
        tags = {"outcome": outcome, "account_type": account_type or "none"}
        self.accounts_counter.add(1, tags)
        self.bytes_counter.add(size, tags)
        self.duration_histogram.record(duration_seconds, tags)
