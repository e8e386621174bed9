"""Loading and validation of interface descriptions."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from anchorsnap.common.exceptions import (
    SchemaError,
    schema_malformed_error,
    unresolved_reference_error,
)
from anchorsnap.logging import get_logger
from anchorsnap.schema.model import Schema

logger = get_logger(__name__)


def _format_location(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def _from_validation_error(exc: ValidationError) -> SchemaError:
    errors = exc.errors(include_url=False)
    first = errors[0]
    location = _format_location(first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return schema_malformed_error(
        f"Malformed schema at '{location}': {message}" if location else f"Malformed schema: {message}",
        location=location or None,
        details={"error_count": len(errors)},
        cause=exc,
    )


def validate_references(schema: Schema) -> None:
    """Check that every ``defined`` reference resolves through the type index.

    Raises:
        SchemaError: With SCHEMA_UNRESOLVED_REFERENCE for the first missing name
    """
    index = schema.type_index
    for name, location in schema.iter_references():
        if name not in index:
            raise unresolved_reference_error(name, location=location)


def build_schema(document: Dict[str, Any]) -> Schema:
    """Build and validate a schema from an already-parsed document.

    Args:
        document: The decoded JSON object

    Returns:
        Validated, immutable Schema with its type index built

    Raises:
        SchemaError: If the document is malformed or has unresolved references
    """
    if not isinstance(document, dict):
        raise schema_malformed_error(
            f"Schema document must be an object, got {type(document).__name__}"
        )

    try:
        schema = Schema.model_validate(document)
    except ValidationError as exc:
        raise _from_validation_error(exc) from exc

    validate_references(schema)

    logger.debug(
        "schema.loaded",
        extra={
            "schema_name": schema.name,
            "schema_version": schema.version,
            "account_types": len(schema.accounts),
            "named_types": len(schema.types),
        },
    )
    return schema


def load_schema(raw_text: Union[str, bytes]) -> Schema:
    """Parse an interface description from JSON text.

    Args:
        raw_text: The JSON document

    Returns:
        Validated Schema

    Raises:
        SchemaError: SCHEMA_MALFORMED on syntax or shape errors,
            SCHEMA_UNRESOLVED_REFERENCE when a ``defined`` type is missing
    """
    try:
        document = json.loads(raw_text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise schema_malformed_error(f"Schema is not valid JSON: {exc}", cause=exc) from exc
    return build_schema(document)


def load_schema_file(path: Union[str, Path]) -> Schema:
    """Read an interface description from disk and load it."""
    return load_schema(Path(path).read_text(encoding="utf-8"))
