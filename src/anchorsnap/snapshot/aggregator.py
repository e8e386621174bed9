"""Snapshot aggregation over a stream of raw accounts.

Each ``(pubkey, blob)`` pair is resolved and decoded independently. A blob
that fails (too short, truncated, bad enum tag) is recorded and skipped;
it never stops the rest of the stream. Decoding may fan out over a thread
pool, but only the aggregating thread writes to the snapshot.
"""

import contextvars
import time
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Deque, Iterable, Iterator, NamedTuple, Optional, Set, Tuple, Union

from anchorsnap.common.exceptions import DecodeError, ResolveError
from anchorsnap.decoding.account import AccountDecoder
from anchorsnap.decoding.types import DecodedAccount
from anchorsnap.logging import get_logger
from anchorsnap.monitoring.metrics import DecodeMetrics, RunStats
from anchorsnap.observability.context import RunContext, run_scope, sanitize_extras
from anchorsnap.snapshot.types import AggregationResult, DecodeFailure, Snapshot

logger = get_logger(__name__)

RawAccount = Tuple[str, bytes]

_PREFETCH_PER_WORKER = 4


class _Outcome(NamedTuple):
    pubkey: str
    size: int
    duration: float
    record: Optional[DecodedAccount]
    failure: Optional[DecodeFailure]


class SnapshotAggregator:
    """Builds a Snapshot from raw account blobs.

    Attributes:
        decoder: Per-blob decode pipeline
        allowed_types: Account types kept in the snapshot. ``None`` keeps
            every structurally decoded record and drops fallback records.
        max_workers: Decode threads; 1 decodes inline
        metrics: OpenTelemetry instruments for per-blob outcomes
    """

    def __init__(
        self,
        decoder: AccountDecoder,
        allowed_types: Optional[Iterable[str]] = None,
        max_workers: int = 1,
        metrics: Optional[DecodeMetrics] = None,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.decoder = decoder
        self.allowed_types: Optional[Set[str]] = set(allowed_types) if allowed_types is not None else None
        self.max_workers = max_workers
        self.metrics = metrics or DecodeMetrics()

    def is_allowed(self, record: DecodedAccount) -> bool:
        """Whether ``record`` belongs in the snapshot."""
        if self.allowed_types is None:
            return not record.fallback
        return record.account_type in self.allowed_types

    def aggregate(
        self,
        accounts: Iterable[RawAccount],
        ctx: Optional[RunContext] = None,
    ) -> AggregationResult:
        """Resolve, decode and collect every account in ``accounts``.

        Args:
            accounts: ``(pubkey, blob)`` pairs; pubkeys are expected to be unique
            ctx: Run context for logging and tracing; generated when omitted

        Returns:
            AggregationResult with the frozen snapshot, failures and counters
        """
        ctx = ctx or RunContext.generate()
        snapshot = Snapshot()
        failures = []
        stats = RunStats()

        with run_scope(ctx, operation="anchorsnap.snapshot.aggregate") as telemetry:
            logger.info(
                "snapshot.aggregate.start",
                extra=sanitize_extras({
                    **telemetry,
                    "max_workers": self.max_workers,
                    "allowed_types": ",".join(sorted(self.allowed_types)) if self.allowed_types else None,
                }),
            )

            for outcome in self._outcomes(accounts):
                stats.processed += 1

                if outcome.failure is not None:
                    stats.failed += 1
                    failures.append(outcome.failure)
                    logger.warning(
                        "snapshot.account.failed",
                        extra={
                            "pubkey": outcome.pubkey,
                            "error_code": outcome.failure.error_code,
                            "field_path": outcome.failure.field_path,
                            "reason": outcome.failure.message,
                        },
                    )
                    self.metrics.record_account("failed", None, outcome.size, outcome.duration)
                    continue

                record = outcome.record
                if record.fallback:
                    stats.fallback += 1
                else:
                    stats.decoded += 1

                if not self.is_allowed(record):
                    stats.filtered += 1
                    self.metrics.record_account("filtered", record.account_type, outcome.size, outcome.duration)
                    continue

                if snapshot.insert(record):
                    logger.warning("snapshot.account.duplicate", extra={"pubkey": record.pubkey})
                self.metrics.record_account(
                    "fallback" if record.fallback else "decoded",
                    record.account_type,
                    outcome.size,
                    outcome.duration,
                )

            snapshot.freeze()
            logger.info(
                "snapshot.aggregate.complete",
                extra={**stats.to_dict(), "accounts": len(snapshot)},
            )

        return AggregationResult(snapshot=snapshot, failures=failures, stats=stats)

    def _outcomes(self, accounts: Iterable[RawAccount]) -> Iterator[_Outcome]:
        if self.max_workers == 1:
            for pubkey, blob in accounts:
                yield self._process(pubkey, blob)
            return

        # at most this many blobs are pulled from the source ahead of the consumer
        window = self.max_workers * _PREFETCH_PER_WORKER
        pending: Deque[Future] = deque()
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="anchorsnap-decode") as executor:
            for pubkey, blob in accounts:
                # tasks run in a copy of the caller context to keep run_id and program_id in worker logs
                pending.append(executor.submit(contextvars.copy_context().run, self._process, pubkey, blob))
                if len(pending) >= window:
                    yield pending.popleft().result()
            while pending:
                yield pending.popleft().result()

    def _process(self, pubkey: str, blob: Union[bytes, bytearray, memoryview]) -> _Outcome:
        start = time.perf_counter()
        try:
            record = self.decoder.decode_account(pubkey, bytes(blob))
        except (ResolveError, DecodeError) as exc:
            return _Outcome(pubkey, len(blob), time.perf_counter() - start, None, DecodeFailure.from_error(pubkey, exc))
        return _Outcome(pubkey, len(blob), time.perf_counter() - start, record, None)
