"""Schema model: the in-memory form of an interface description.

Account types and named types are fully modeled and validated because the
decoder walks them. Instructions, events and errors are carried through
unmodified: they are kept with all their original keys but their field
types are not interpreted.
"""

from functools import cached_property
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import ConfigDict, Field, field_validator, model_validator

from anchorsnap.constants import TypeKind
from anchorsnap.schema.types import FieldType, iter_defined_references, parse_field_type
from anchorsnap.types.base import SnapBaseModel

if TYPE_CHECKING:
    from anchorsnap.discriminator.resolver import DiscriminatorResolver


def _find_duplicate(names: List[str]) -> Optional[str]:
    seen = set()
    for name in names:
        if name in seen:
            return name
        seen.add(name)
    return None


def _is_named_field(entry: Any) -> bool:
    if isinstance(entry, dict):
        return "name" in entry and "type" in entry
    return isinstance(entry, FieldDef)


class FieldDef(SnapBaseModel):
    """A named field of a struct or enum variant."""

    name: str = Field(..., min_length=1)
    field_type: FieldType = Field(..., alias="type")
    docs: Optional[List[str]] = None

    @field_validator("field_type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Any:
        return parse_field_type(v)


class VariantDef(SnapBaseModel):
    """One variant of an enum.

    Variants may carry no fields, named fields (``{name, type}`` entries) or
    tuple fields (bare types). Tuple fields are stored as ``FieldDef``
    entries named by position and flagged with ``tuple_fields``.
    """

    name: str = Field(..., min_length=1)
    fields: Tuple[FieldDef, ...] = ()
    tuple_fields: bool = False

    @model_validator(mode="before")
    @classmethod
    def normalize_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw_fields = data.get("fields")
        if raw_fields is None:
            return {**data, "fields": ()}
        if not isinstance(raw_fields, (list, tuple)):
            raise ValueError(f"Variant fields must be a list, got {type(raw_fields).__name__}")
        if not raw_fields:
            return {**data, "fields": ()}

        named = [_is_named_field(f) for f in raw_fields]
        if all(named):
            return {**data, "fields": list(raw_fields)}
        if any(named):
            raise ValueError(f"Variant '{data.get('name')}' mixes named and tuple fields")
        return {
            **data,
            "fields": [{"name": str(i), "type": f} for i, f in enumerate(raw_fields)],
            "tuple_fields": True,
        }

    @model_validator(mode="after")
    def check_unique_fields(self) -> "VariantDef":
        duplicate = _find_duplicate([f.name for f in self.fields])
        if duplicate:
            raise ValueError(f"Duplicate field '{duplicate}' in variant '{self.name}'")
        return self


class TypeBody(SnapBaseModel):
    """Struct or enum body of a type definition."""

    kind: TypeKind
    fields: Optional[Tuple[FieldDef, ...]] = None
    variants: Optional[Tuple[VariantDef, ...]] = None

    @model_validator(mode="after")
    def check_shape(self) -> "TypeBody":
        if self.kind == TypeKind.STRUCT:
            if self.fields is None:
                raise ValueError("Struct type requires 'fields'")
            if self.variants is not None:
                raise ValueError("Struct type cannot declare 'variants'")
            duplicate = _find_duplicate([f.name for f in self.fields])
            if duplicate:
                raise ValueError(f"Duplicate field '{duplicate}'")
        else:
            if self.variants is None:
                raise ValueError("Enum type requires 'variants'")
            if self.fields is not None:
                raise ValueError("Enum type cannot declare 'fields'")
            if len(self.variants) > 256:
                raise ValueError(f"Enum has {len(self.variants)} variants, at most 256 fit a one-byte tag")
            duplicate = _find_duplicate([v.name for v in self.variants])
            if duplicate:
                raise ValueError(f"Duplicate enum variant '{duplicate}'")
        return self


class TypeDef(SnapBaseModel):
    """A named type definition (an entry of ``types`` or ``accounts``)."""

    name: str = Field(..., min_length=1)
    docs: Optional[List[str]] = None
    body: TypeBody = Field(..., alias="type")

    @property
    def kind(self) -> TypeKind:
        return self.body.kind


class AccountTypeDef(TypeDef):
    """An account type: a named type whose instances are stored on chain
    prefixed with an 8-byte discriminator."""


class _CarriedModel(SnapBaseModel):
    """Definitions carried through unmodified, unknown keys included."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)


class InstructionDef(_CarriedModel):
    name: str
    docs: Optional[List[str]] = None
    accounts: List[Dict[str, Any]] = Field(default_factory=list)
    args: List[Dict[str, Any]] = Field(default_factory=list)


class EventDef(_CarriedModel):
    name: str
    fields: List[Dict[str, Any]] = Field(default_factory=list)


class ErrorDef(_CarriedModel):
    code: int
    name: str
    msg: Optional[str] = None


class TypeIndex:
    """Read-only name index over account types and named types.

    Built once per schema and handed to the decoder so ``defined``
    references never go through global state. Named types win over account
    types sharing the same name.
    """

    def __init__(self, accounts: Tuple[AccountTypeDef, ...], types: Tuple[TypeDef, ...]):
        entries: Dict[str, TypeDef] = {account.name: account for account in accounts}
        entries.update({type_def.name: type_def for type_def in types})
        self._entries: Mapping[str, TypeDef] = MappingProxyType(entries)

    def get(self, name: str) -> Optional[TypeDef]:
        return self._entries.get(name)

    def __getitem__(self, name: str) -> TypeDef:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> List[str]:
        return list(self._entries)


class Schema(SnapBaseModel):
    """A loaded interface description.

    Immutable once built; safe to share across decode workers.
    """

    version: str
    name: str
    docs: Optional[List[str]] = None
    instructions: Tuple[InstructionDef, ...] = ()
    accounts: Tuple[AccountTypeDef, ...]
    types: Tuple[TypeDef, ...] = ()
    events: Tuple[EventDef, ...] = ()
    errors: Tuple[ErrorDef, ...] = ()
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("instructions", "types", "events", "errors", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @model_validator(mode="after")
    def check_unique_names(self) -> "Schema":
        duplicate = _find_duplicate([a.name for a in self.accounts])
        if duplicate:
            raise ValueError(f"Duplicate account type '{duplicate}'")
        duplicate = _find_duplicate([t.name for t in self.types])
        if duplicate:
            raise ValueError(f"Duplicate named type '{duplicate}'")
        return self

    @cached_property
    def type_index(self) -> TypeIndex:
        return TypeIndex(self.accounts, self.types)

    @cached_property
    def resolver(self) -> "DiscriminatorResolver":
        """Discriminator lookup table, computed once per loaded schema."""
        # Lazy import to avoid circular dependency
        from anchorsnap.discriminator.resolver import DiscriminatorResolver
        return DiscriminatorResolver(self)

    def account(self, name: str) -> Optional[AccountTypeDef]:
        """Return the account type called ``name``, if any."""
        for account in self.accounts:
            if account.name == name:
                return account
        return None

    @property
    def account_names(self) -> List[str]:
        return [account.name for account in self.accounts]

    def iter_references(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(referenced_name, location)`` for every ``defined`` reference
        in account types and named types."""
        definitions: List[Union[AccountTypeDef, TypeDef]] = [*self.accounts, *self.types]
        for definition in definitions:
            body = definition.body
            if body.fields:
                for field in body.fields:
                    for ref in iter_defined_references(field.field_type):
                        yield ref.name, f"{definition.name}.{field.name}"
            for variant in body.variants or ():
                for field in variant.fields:
                    for ref in iter_defined_references(field.field_type):
                        yield ref.name, f"{definition.name}::{variant.name}.{field.name}"
