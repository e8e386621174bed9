"""Schema-driven binary layout decoder.

Walks the field list of a type definition and decodes the payload with the
fixed little-endian encoding used for on-chain accounts:

- integers are fixed width little-endian; u64/u128/i64/i128 are rendered
  as decimal strings so text formats keep full precision
- ``f32``/``f64`` NaN and infinities are rendered as strings, since JSON
  has no literal for them
- ``bool`` is one byte, 0 or 1
- ``publicKey`` is 32 raw bytes, rendered base58
- structs are their fields back to back, in declaration order
- enums are one variant index byte followed by that variant's fields
- ``[T; N]`` is N consecutive encodings of T
- ``Option<T>`` is a presence byte (0 or 1) followed by T when present

Decoding stops at the first structural error and reports the dotted path
of the field being read.
"""

import math
from typing import Any, Dict, List, Tuple

from solders.pubkey import Pubkey

from anchorsnap.common.exceptions import (
    field_mismatch_error,
    invalid_variant_error,
)
from anchorsnap.constants import WIDE_INTEGERS, Primitive, TypeKind
from anchorsnap.decoding.reader import ByteReader
from anchorsnap.logging import get_logger
from anchorsnap.schema.model import FieldDef, Schema, TypeDef, VariantDef
from anchorsnap.schema.types import ArrayType, DefinedType, OptionType, PrimitiveType

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 32


class LayoutDecoder:
    """Decodes payloads of the types defined in one schema.

    The decoder only reads from the schema's type index; it holds no
    mutable state and can be shared across threads.

    Attributes:
        schema: Schema whose types are decoded
        max_depth: Maximum nesting of ``defined`` references
        strict_trailing_bytes: Reject payloads with bytes left after the last field
    """

    def __init__(
        self,
        schema: Schema,
        max_depth: int = DEFAULT_MAX_DEPTH,
        strict_trailing_bytes: bool = False,
    ):
        self.schema = schema
        self.index = schema.type_index
        self.max_depth = max_depth
        self.strict_trailing_bytes = strict_trailing_bytes

    def decode(self, type_name: str, payload: bytes) -> Any:
        """Decode ``payload`` as an instance of ``type_name``.

        Args:
            type_name: Account type or named type defined in the schema
            payload: Bytes following the discriminator

        Returns:
            JSON-compatible value tree

        Raises:
            DecodeError: DECODE_TRUNCATED, DECODE_INVALID_VARIANT or
                DECODE_FIELD_MISMATCH, with the field path in ``details``
        """
        type_def = self.index.get(type_name)
        if type_def is None:
            raise field_mismatch_error(type_name, f"type '{type_name}' is not defined in schema '{self.schema.name}'")

        reader = ByteReader(payload)
        value = self._decode_definition(type_def, reader, type_name, depth=0)

        if reader.remaining:
            if self.strict_trailing_bytes:
                raise field_mismatch_error(
                    type_name,
                    f"{reader.remaining} trailing bytes after last field",
                    trailing=reader.remaining,
                )
            logger.debug(
                "decode.trailing_bytes",
                extra={"account_type": type_name, "trailing": reader.remaining, "consumed": reader.offset},
            )
        return value

    def _decode_definition(self, type_def: TypeDef, reader: ByteReader, path: str, depth: int) -> Any:
        if depth > self.max_depth:
            raise field_mismatch_error(path, f"type nesting exceeds {self.max_depth} levels", max_depth=self.max_depth)

        body = type_def.body
        if body.kind == TypeKind.STRUCT:
            return self._decode_fields(body.fields or (), reader, path, depth)
        return self._decode_enum(body.variants or (), reader, path, depth)

    def _decode_fields(
        self,
        fields: Tuple[FieldDef, ...],
        reader: ByteReader,
        path: str,
        depth: int,
    ) -> Dict[str, Any]:
        return {
            field.name: self._decode_value(field.field_type, reader, f"{path}.{field.name}", depth)
            for field in fields
        }

    def _decode_enum(
        self,
        variants: Tuple[VariantDef, ...],
        reader: ByteReader,
        path: str,
        depth: int,
    ) -> Any:
        tag = reader.read_tag(path)
        if tag >= len(variants):
            raise invalid_variant_error(path, tag, len(variants))

        variant = variants[tag]
        if not variant.fields:
            return variant.name

        variant_path = f"{path}::{variant.name}"
        if variant.tuple_fields:
            values: List[Any] = [
                self._decode_value(field.field_type, reader, f"{variant_path}.{field.name}", depth)
                for field in variant.fields
            ]
            return {variant.name: values}
        return {
            variant.name: {
                field.name: self._decode_value(
                    field.field_type, reader, f"{variant_path}.{field.name}", depth
                )
                for field in variant.fields
            }
        }

    def _decode_value(self, field_type: Any, reader: ByteReader, path: str, depth: int) -> Any:
        if isinstance(field_type, PrimitiveType):
            return _render_primitive(field_type.name, reader.read_primitive(field_type.name, path), path)

        if isinstance(field_type, DefinedType):
            # References were validated at load time
            return self._decode_definition(self.index[field_type.name], reader, path, depth + 1)

        if isinstance(field_type, ArrayType):
            element = field_type.element
            if isinstance(element, PrimitiveType):
                raw = reader.read_primitive_array(element.name, field_type.length, path)
                return [_render_primitive(element.name, value, f"{path}[{i}]") for i, value in enumerate(raw)]
            return [
                self._decode_value(element, reader, f"{path}[{i}]", depth)
                for i in range(field_type.length)
            ]

        if isinstance(field_type, OptionType):
            flag = reader.read_tag(path)
            if flag == 0:
                return None
            if flag != 1:
                raise field_mismatch_error(path, f"option flag must be 0 or 1, got {flag}", flag=flag)
            return self._decode_value(field_type.inner, reader, path, depth)

        raise TypeError(f"Unsupported field type {type(field_type).__name__} at '{path}'")


def _render_float(value: float) -> Any:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


def _render_primitive(primitive: Primitive, value: Any, path: str) -> Any:
    """Turn a parsed primitive into its JSON-compatible rendering."""
    if primitive == Primitive.BOOL:
        if value > 1:
            raise field_mismatch_error(path, f"bool must be 0 or 1, got {value}", value=value)
        return value == 1

    if primitive == Primitive.PUBLIC_KEY:
        return str(Pubkey.from_bytes(bytes(value)))

    if primitive in (Primitive.F32, Primitive.F64):
        return _render_float(value)

    return str(value) if primitive in WIDE_INTEGERS else value
