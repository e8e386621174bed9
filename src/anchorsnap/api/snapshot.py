"""High-level entry points wiring schema, decoder and aggregator together."""

from typing import TYPE_CHECKING, Iterable, Optional, Union

from anchorsnap.common.exceptions import configuration_error
from anchorsnap.decoding.account import AccountDecoder
from anchorsnap.decoding.layout import DEFAULT_MAX_DEPTH, LayoutDecoder
from anchorsnap.decoding.registry import DecoderRegistry
from anchorsnap.logging import setup_logging
from anchorsnap.observability.context import RunContext
from anchorsnap.protocols import AccountSource, SnapshotWriter
from anchorsnap.schema.loader import load_schema, load_schema_file
from anchorsnap.schema.model import Schema
from anchorsnap.snapshot.aggregator import RawAccount, SnapshotAggregator
from anchorsnap.snapshot.types import AggregationResult
from anchorsnap.snapshot.writer import JsonSnapshotWriter

if TYPE_CHECKING:
    from anchorsnap.settings.main import _Settings


def registry_for_schema(schema: Schema) -> DecoderRegistry:
    """Registry decoding every account type of ``schema`` in full."""
    registry = DecoderRegistry()
    for account in schema.accounts:
        registry.register(account.name)
    return registry


def configure_logging(settings: Optional["_Settings"] = None) -> None:
    """Apply ``log_level`` and ``log_json`` from ``settings`` to root logging."""
    if settings is None:
        from anchorsnap.settings import get_settings
        settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)


def build_snapshot(
    schema: Union[Schema, str, bytes],
    accounts: Iterable[RawAccount],
    *,
    registry: Optional[DecoderRegistry] = None,
    allowed_types: Optional[Iterable[str]] = None,
    max_workers: int = 1,
    max_depth: int = DEFAULT_MAX_DEPTH,
    strict_trailing_bytes: bool = False,
    ctx: Optional[RunContext] = None,
) -> AggregationResult:
    """Decode ``accounts`` against ``schema`` into a snapshot.

    The schema is loaded (and validated) before any account is touched, so
    an invalid schema fails the call without partial work.

    Args:
        schema: Loaded Schema or IDL JSON text
        accounts: ``(pubkey, blob)`` pairs
        registry: Account types decoded structurally; defaults to every
            account type in the schema
        allowed_types: Account types kept in the snapshot; defaults to every
            structurally decoded record
        max_workers: Decode threads
        max_depth: Maximum nesting of named type references
        strict_trailing_bytes: Reject bytes left after the last field
        ctx: Run context for logs and spans

    Returns:
        AggregationResult

    Raises:
        SchemaError: If ``schema`` is text that does not load
    """
    if not isinstance(schema, Schema):
        schema = load_schema(schema)

    decoder = AccountDecoder(
        schema,
        registry if registry is not None else registry_for_schema(schema),
        layout=LayoutDecoder(schema, max_depth=max_depth, strict_trailing_bytes=strict_trailing_bytes),
    )
    aggregator = SnapshotAggregator(decoder, allowed_types=allowed_types, max_workers=max_workers)
    return aggregator.aggregate(accounts, ctx=ctx)


def run_snapshot(
    source: AccountSource,
    *,
    settings: Optional["_Settings"] = None,
    registry: Optional[DecoderRegistry] = None,
    writer: Optional[SnapshotWriter] = None,
    setup_logs: bool = False,
) -> AggregationResult:
    """Decode every account from ``source`` and persist the snapshot.

    Configuration (schema path, allow-list, worker count, output file) comes
    from ``settings``, or from ``get_settings()`` when omitted.

    Args:
        source: Supplier of raw accounts
        settings: Loaded settings
        registry: Account types decoded structurally; defaults to every
            account type in the schema
        writer: Snapshot writer; defaults to a JSON file at
            ``settings.output.snapshot_path``
        setup_logs: Configure root logging from ``settings`` before the run

    Returns:
        AggregationResult of the run

    Raises:
        AnchorSnapError: CONFIG_INVALID if no schema path is configured or
            it cannot be read
        SchemaError: If the schema is invalid
    """
    if settings is None:
        from anchorsnap.settings import get_settings
        settings = get_settings()

    if setup_logs:
        configure_logging(settings)

    if settings.schema_path is None:
        raise configuration_error("No schema path configured", config_key="schema_path")

    try:
        schema = load_schema_file(settings.schema_path)
    except OSError as exc:
        raise configuration_error(
            f"Cannot read schema file {settings.schema_path}",
            config_key="schema_path",
            cause=exc,
        ) from exc

    ctx = RunContext.generate(
        program_id=settings.program_id,
        attributes={"schema": schema.name, "schema_version": schema.version},
    )
    result = build_snapshot(
        schema,
        source.iter_accounts(),
        registry=registry,
        allowed_types=settings.decoding.get_allowed_account_types(),
        max_workers=settings.max_workers,
        max_depth=settings.decoding.max_depth,
        strict_trailing_bytes=settings.decoding.strict_trailing_bytes,
        ctx=ctx,
    )

    writer = writer or JsonSnapshotWriter(settings.output.snapshot_path, indent=settings.output.indent)
    writer.write(result.snapshot)
    return result
