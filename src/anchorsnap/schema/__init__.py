"""Schema model for interface descriptions (IDLs).

Quick start::

    >>> from anchorsnap.schema import load_schema
    >>> schema = load_schema(idl_text)
    >>> schema.account_names
    ['Pool', 'LockEscrow']
    >>> schema.type_index["PoolFees"].kind
    <TypeKind.STRUCT: 'struct'>
"""

from .loader import build_schema, load_schema, load_schema_file, validate_references
from .model import (
    AccountTypeDef,
    ErrorDef,
    EventDef,
    FieldDef,
    InstructionDef,
    Schema,
    TypeBody,
    TypeDef,
    TypeIndex,
    VariantDef,
)
from .types import (
    ArrayType,
    DefinedType,
    FieldType,
    OptionType,
    PrimitiveType,
    parse_field_type,
)

__all__ = [
    # Loading
    "load_schema",
    "load_schema_file",
    "build_schema",
    "validate_references",
    # Model
    "Schema",
    "AccountTypeDef",
    "TypeDef",
    "TypeBody",
    "FieldDef",
    "VariantDef",
    "TypeIndex",
    "InstructionDef",
    "EventDef",
    "ErrorDef",
    # Field types
    "FieldType",
    "PrimitiveType",
    "DefinedType",
    "ArrayType",
    "OptionType",
    "parse_field_type",
]
