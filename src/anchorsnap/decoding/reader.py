"""Cursor over an account payload.

Primitive values are parsed with the borsh-construct codecs; the cursor
only tracks the position and turns short reads into Truncated decode
errors naming the field being read.
"""

import io
from typing import Any, Dict, List

from borsh_construct import F32, F64, I8, I16, I32, I64, I128, U8, U16, U32, U64, U128
from construct import Construct, ConstructError

from anchorsnap.common.exceptions import truncated_error
from anchorsnap.constants import PUBKEY_SIZE, Primitive

# bool is parsed as U8 so values other than 0 and 1 can be rejected
PRIMITIVE_CODECS: Dict[Primitive, Construct] = {
    Primitive.BOOL: U8,
    Primitive.U8: U8,
    Primitive.U16: U16,
    Primitive.U32: U32,
    Primitive.U64: U64,
    Primitive.U128: U128,
    Primitive.I8: I8,
    Primitive.I16: I16,
    Primitive.I32: I32,
    Primitive.I64: I64,
    Primitive.I128: I128,
    Primitive.F32: F32,
    Primitive.F64: F64,
    Primitive.PUBLIC_KEY: U8[PUBKEY_SIZE],
}


class ByteReader:
    """Sequential reader over an immutable byte buffer."""

    __slots__ = ("_stream", "_size")

    def __init__(self, data: bytes):
        data = bytes(data)
        self._stream = io.BytesIO(data)
        self._size = len(data)

    @property
    def offset(self) -> int:
        return self._stream.tell()

    @property
    def remaining(self) -> int:
        return self._size - self._stream.tell()

    def read(self, codec: Construct, path: str) -> Any:
        """Parse one fixed-size value with ``codec``.

        Raises:
            DecodeError: DECODE_TRUNCATED if fewer bytes remain than the codec needs
        """
        needed = codec.sizeof()
        available = self.remaining
        if needed > available:
            raise truncated_error(path, needed, available)
        try:
            return codec.parse_stream(self._stream)
        except ConstructError as exc:
            raise truncated_error(path, needed, available) from exc

    def read_tag(self, path: str) -> int:
        """Read a one-byte enum discriminant or option presence flag."""
        return self.read(U8, path)

    def read_primitive(self, primitive: Primitive, path: str) -> Any:
        return self.read(PRIMITIVE_CODECS[primitive], path)

    def read_primitive_array(self, primitive: Primitive, length: int, path: str) -> List[Any]:
        """Read ``length`` consecutive primitives in one parse.

        A short buffer is reported against the first element that does not
        fit, e.g. ``Widget.data[2]``.
        """
        codec = PRIMITIVE_CODECS[primitive]
        size = codec.sizeof()
        available = self.remaining
        if size * length > available:
            raise truncated_error(f"{path}[{available // size}]", size, available % size)
        if length == 0:
            return []
        return list(self.read(codec[length], path))
