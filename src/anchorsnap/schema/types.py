"""Field type union for the schema model.

The interface description encodes a field type either as a bare primitive
tag (``"u64"``) or as an object with exactly one key (``{"defined": ...}``,
``{"array": [...]}``, ``{"option": ...}``). ``parse_field_type`` turns that
untagged encoding into the closed ``FieldType`` union once, at load time;
the decoder never looks at raw JSON.
"""

from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import Field

from anchorsnap.constants import Primitive
from anchorsnap.types.base import SnapBaseModel


class PrimitiveType(SnapBaseModel):
    """Fixed-width primitive (integer, float, bool or public key)."""

    kind: Literal["primitive"] = "primitive"
    name: Primitive

    def __str__(self) -> str:
        return self.name.value


class DefinedType(SnapBaseModel):
    """Reference to a named type or account type, resolved by name."""

    kind: Literal["defined"] = "defined"
    name: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return self.name


class ArrayType(SnapBaseModel):
    """Fixed-length homogeneous sequence."""

    kind: Literal["array"] = "array"
    element: "FieldType"
    length: int = Field(..., ge=0)

    def __str__(self) -> str:
        return f"[{self.element}; {self.length}]"


class OptionType(SnapBaseModel):
    """Presence byte followed by the inner value when present."""

    kind: Literal["option"] = "option"
    inner: "FieldType"

    def __str__(self) -> str:
        return f"Option<{self.inner}>"


FieldType = Annotated[
    Union[PrimitiveType, DefinedType, ArrayType, OptionType],
    Field(discriminator="kind"),
]

ArrayType.model_rebuild()
OptionType.model_rebuild()


_FIELD_TYPE_MODELS = (PrimitiveType, DefinedType, ArrayType, OptionType)
_COMPOSITE_KEYS = ("defined", "array", "option")


def parse_field_type(raw: Any) -> Union[PrimitiveType, DefinedType, ArrayType, OptionType]:
    """Convert the untagged IDL encoding of a field type into the closed union.

    Args:
        raw: A primitive tag string or a single-key object

    Returns:
        The corresponding ``FieldType`` member

    Raises:
        ValueError: If ``raw`` is not a recognized field type shape
    """
    if isinstance(raw, _FIELD_TYPE_MODELS):
        return raw

    if isinstance(raw, str):
        try:
            return PrimitiveType(name=Primitive(raw))
        except ValueError:
            supported = ", ".join(p.value for p in Primitive)
            raise ValueError(f"Unknown primitive type '{raw}' (supported: {supported})") from None

    if not isinstance(raw, dict):
        raise ValueError(f"Field type must be a string or an object, got {type(raw).__name__}")

    keys = [key for key in raw if key in _COMPOSITE_KEYS]
    unexpected = sorted(set(raw) - set(_COMPOSITE_KEYS))
    if len(keys) != 1 or unexpected:
        raise ValueError(
            f"Field type object must have exactly one of {', '.join(_COMPOSITE_KEYS)}; "
            f"got keys {sorted(raw)}"
        )

    key = keys[0]
    value = raw[key]

    if key == "defined":
        # Newer IDLs wrap the reference: {"defined": {"name": "Foo"}}
        if isinstance(value, dict) and isinstance(value.get("name"), str):
            value = value["name"]
        if not isinstance(value, str) or not value:
            raise ValueError(f"'defined' must name a type, got {value!r}")
        return DefinedType(name=value)

    if key == "option":
        return OptionType(inner=parse_field_type(value))

    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"'array' must be [element, length], got {value!r}")
    element, length = value
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValueError(f"Array length must be an integer, got {length!r}")
    if length < 0:
        raise ValueError(f"Array length must be non-negative, got {length}")
    return ArrayType(element=parse_field_type(element), length=length)


def iter_defined_references(field_type: Any) -> Iterator[DefinedType]:
    """Yield every ``DefinedType`` reachable inside a field type."""
    if isinstance(field_type, DefinedType):
        yield field_type
    elif isinstance(field_type, ArrayType):
        yield from iter_defined_references(field_type.element)
    elif isinstance(field_type, OptionType):
        yield from iter_defined_references(field_type.inner)
