
from anchorsnap.__version__ import __version__

from anchorsnap.api import (
    build_snapshot,
    configure_logging,
    registry_for_schema,
    run_snapshot,
)

from anchorsnap.schema import Schema, load_schema, load_schema_file
from anchorsnap.discriminator import DiscriminatorResolver, account_discriminator, resolve
from anchorsnap.decoding import (
    AccountDecoder,
    DecodedAccount,
    DecoderRegistry,
    LayoutDecoder,
    register_decoder,
)
from anchorsnap.snapshot import (
    AggregationResult,
    Base64AccountSource,
    JsonSnapshotWriter,
    Snapshot,
    SnapshotAggregator,
    StaticAccountSource,
)

from anchorsnap.common.exceptions import (
    AnchorSnapError,
    DecodeError,
    ErrorCode,
    ResolveError,
    SchemaError,
    UnknownDiscriminatorError,
)


__all__ = [
    "__version__",

    # api
    "build_snapshot",
    "configure_logging",
    "registry_for_schema",
    "run_snapshot",

    # Schema
    "Schema",
    "load_schema",
    "load_schema_file",

    # Resolution and decoding
    "DiscriminatorResolver",
    "account_discriminator",
    "resolve",
    "AccountDecoder",
    "DecodedAccount",
    "DecoderRegistry",
    "LayoutDecoder",
    "register_decoder",

    # Snapshots
    "AggregationResult",
    "Snapshot",
    "SnapshotAggregator",
    "StaticAccountSource",
    "Base64AccountSource",
    "JsonSnapshotWriter",

    # Exceptions (public API)
    "AnchorSnapError",
    "ErrorCode",
    "SchemaError",
    "ResolveError",
    "UnknownDiscriminatorError",
    "DecodeError",
]
