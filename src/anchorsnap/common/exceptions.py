from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for anchorsnap operations.

    Error codes identify error types without creating a separate exception
    class for every failure. Each family has its own prefix.

    Attributes:
        CONFIG_*: Configuration-related errors
        SCHEMA_*: Interface description (IDL) errors, fatal before decoding
        RESOLVE_*: Discriminator resolution outcomes for a single blob
        DECODE_*: Binary layout errors for a single blob
        IO_*: Errors at the source/writer boundary
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"

    # Schema errors
    SCHEMA_MALFORMED = "SCHEMA_001"
    SCHEMA_UNRESOLVED_REFERENCE = "SCHEMA_002"

    # Resolve outcomes
    RESOLVE_TOO_SHORT = "RESOLVE_001"
    RESOLVE_UNKNOWN = "RESOLVE_002"

    # Decode errors
    DECODE_TRUNCATED = "DECODE_001"
    DECODE_INVALID_VARIANT = "DECODE_002"
    DECODE_FIELD_MISMATCH = "DECODE_003"

    # Boundary errors
    IO_SOURCE_ERROR = "IO_001"
    IO_WRITE_ERROR = "IO_002"


class AnchorSnapError(Exception):
    """Base exception for all anchorsnap errors.

    A single exception type categorized by error code. Subclasses exist only
    so callers can catch a whole family (schema, resolve, decode) at once.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


class SchemaError(AnchorSnapError):
    """The interface description is invalid. Aborts before any decoding."""


class ResolveError(AnchorSnapError):
    """A blob could not be classified by its discriminator."""


class UnknownDiscriminatorError(ResolveError):
    """No account type in the schema matches the blob's leading tag.

    This is a classification outcome rather than a failure: callers route
    it to the fallback record instead of skipping the blob.
    """

    def __init__(self, discriminator: bytes):
        super().__init__(
            f"No account type matches discriminator {discriminator.hex()}",
            error_code=ErrorCode.RESOLVE_UNKNOWN,
            details={"discriminator": discriminator.hex()},
        )
        self.discriminator = discriminator

    @property
    def discriminator_hex(self) -> str:
        return self.discriminator.hex()


class DecodeError(AnchorSnapError):
    """A blob's payload does not match the layout of its account type."""

    @property
    def field_path(self) -> Optional[str]:
        return self.details.get("field_path")


# Helper functions for common error scenarios
def schema_malformed_error(
    message: str,
    location: Optional[str] = None,
    **kwargs
) -> SchemaError:
    """Create a malformed-schema error.

    Args:
        message: Error message
        location: Where in the document the problem was found
        **kwargs: Additional error details

    Returns:
        SchemaError with SCHEMA_MALFORMED code
    """
    details = kwargs.pop('details', {})
    if location:
        details["location"] = location

    return SchemaError(
        message=message,
        error_code=ErrorCode.SCHEMA_MALFORMED,
        details=details,
        **kwargs
    )


def unresolved_reference_error(
    name: str,
    location: Optional[str] = None,
    **kwargs
) -> SchemaError:
    """Create an error for a ``defined`` reference with no matching type.

    Args:
        name: The type name that could not be found
        location: Where the reference was made
        **kwargs: Additional error details

    Returns:
        SchemaError with SCHEMA_UNRESOLVED_REFERENCE code
    """
    details = kwargs.pop('details', {})
    details["name"] = name
    if location:
        details["location"] = location

    where = f" (referenced from {location})" if location else ""
    return SchemaError(
        message=f"Unresolved type reference '{name}'{where}",
        error_code=ErrorCode.SCHEMA_UNRESOLVED_REFERENCE,
        details=details,
        **kwargs
    )


def too_short_error(length: int, required: int) -> ResolveError:
    """Create an error for a blob that cannot hold a discriminator."""
    return ResolveError(
        message=f"Account data too short: {length} bytes, need at least {required}",
        error_code=ErrorCode.RESOLVE_TOO_SHORT,
        details={"length": length, "required": required},
    )


def truncated_error(field_path: str, needed: int, available: int) -> DecodeError:
    """Create an error for a buffer exhausted before a field was fully read.

    Args:
        field_path: Dotted path of the field being read
        needed: Bytes the field required
        available: Bytes left in the buffer

    Returns:
        DecodeError with DECODE_TRUNCATED code
    """
    return DecodeError(
        message=f"Buffer exhausted reading '{field_path}': needed {needed} bytes, {available} available",
        error_code=ErrorCode.DECODE_TRUNCATED,
        details={"field_path": field_path, "needed": needed, "available": available},
    )


def invalid_variant_error(field_path: str, tag: int, variant_count: int) -> DecodeError:
    """Create an error for an enum discriminant with no matching variant."""
    return DecodeError(
        message=f"Invalid enum variant {tag} at '{field_path}' ({variant_count} variants defined)",
        error_code=ErrorCode.DECODE_INVALID_VARIANT,
        details={"field_path": field_path, "tag": tag, "variant_count": variant_count},
    )


def field_mismatch_error(
    field_path: str,
    message: str,
    cause: Optional[Exception] = None,
    **details: Any,
) -> DecodeError:
    """Create an error for bytes that are present but not a valid encoding."""
    return DecodeError(
        message=f"Invalid value at '{field_path}': {message}",
        error_code=ErrorCode.DECODE_FIELD_MISMATCH,
        details={"field_path": field_path, **details},
        cause=cause,
    )


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> AnchorSnapError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        AnchorSnapError with CONFIG_INVALID code
    """
    details = kwargs.pop('details', {})
    if config_key:
        details["config_key"] = config_key

    return AnchorSnapError(
        message=message,
        error_code=ErrorCode.CONFIG_INVALID,
        details=details,
        **kwargs
    )


def source_error(message: str, identifier: Optional[str] = None, **kwargs) -> AnchorSnapError:
    """Create an error raised while reading raw account data from a source."""
    details = kwargs.pop('details', {})
    if identifier:
        details["pubkey"] = identifier
    return AnchorSnapError(
        message=message,
        error_code=ErrorCode.IO_SOURCE_ERROR,
        details=details,
        **kwargs
    )


def write_error(message: str, path: Optional[str] = None, **kwargs) -> AnchorSnapError:
    """Create an error raised while persisting a snapshot."""
    details = kwargs.pop('details', {})
    if path:
        details["path"] = path
    return AnchorSnapError(
        message=message,
        error_code=ErrorCode.IO_WRITE_ERROR,
        details=details,
        **kwargs
    )
