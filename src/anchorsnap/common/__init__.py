"""Common exceptions for anchorsnap.

Exception Design:
    The exception system uses error codes for categorization rather than
    one class per failure. All exceptions inherit from AnchorSnapError and
    carry structured details. Family subclasses (SchemaError, ResolveError,
    DecodeError) let callers decide what is fatal:

    - SchemaError aborts a run before any blob is processed.
    - ResolveError and DecodeError are per-blob; the aggregator records
      them and moves on.
    - UnknownDiscriminatorError is not a failure at all; it routes the
      blob to the fallback record.
"""

from anchorsnap.common.exceptions import (
    AnchorSnapError,
    ErrorCode,
    SchemaError,
    ResolveError,
    UnknownDiscriminatorError,
    DecodeError,
    # Helper functions
    schema_malformed_error,
    unresolved_reference_error,
    too_short_error,
    truncated_error,
    invalid_variant_error,
    field_mismatch_error,
    configuration_error,
    source_error,
    write_error,
)

__all__ = [
    # Base Exception and Error Codes
    "AnchorSnapError",
    "ErrorCode",
    # Families
    "SchemaError",
    "ResolveError",
    "UnknownDiscriminatorError",
    "DecodeError",
    # Helper functions
    "schema_malformed_error",
    "unresolved_reference_error",
    "too_short_error",
    "truncated_error",
    "invalid_variant_error",
    "field_mismatch_error",
    "configuration_error",
    "source_error",
    "write_error",
]
