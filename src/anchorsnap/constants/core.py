from enum import Enum


DISCRIMINATOR_SIZE = 8
PUBKEY_SIZE = 32
ACCOUNT_DISCRIMINATOR_NAMESPACE = "account"
UNKNOWN_ACCOUNT_TYPE = "Unknown"


class TypeKind(str, Enum):
    """Shape of an account or named type body.

    Values:
        STRUCT: Ordered list of named fields, encoded back to back
        ENUM: One discriminant byte followed by the chosen variant's fields
    """
    STRUCT = "struct"
    ENUM = "enum"


class Primitive(str, Enum):
    """Primitive field type tags as written in the interface description.

    Every primitive has a fixed encoded width; the codec for each lives in
    ``anchorsnap.decoding.reader.PRIMITIVE_CODECS``.
    """
    BOOL = "bool"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    F32 = "f32"
    F64 = "f64"
    PUBLIC_KEY = "publicKey"


# Rendered as decimal strings so text output formats keep full precision
WIDE_INTEGERS = frozenset({Primitive.U64, Primitive.U128, Primitive.I64, Primitive.I128})
