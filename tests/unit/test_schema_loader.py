"""Tests for loading and validating interface descriptions."""

import json

import pytest

from anchorsnap.common.exceptions import ErrorCode, SchemaError
from anchorsnap.constants import Primitive, TypeKind
from anchorsnap.schema import (
    ArrayType,
    DefinedType,
    OptionType,
    PrimitiveType,
    build_schema,
    load_schema,
    load_schema_file,
    parse_field_type,
)


class TestParseFieldType:
    """Test conversion of the untagged field type encoding."""

    def test_primitive(self):
        assert parse_field_type("u64") == PrimitiveType(name=Primitive.U64)
        assert parse_field_type("publicKey").name == Primitive.PUBLIC_KEY

    def test_composites(self):
        """Test arrays, options and references nest as expected."""
        field_type = parse_field_type({"option": {"array": [{"defined": "Fees"}, 3]}})

        assert isinstance(field_type, OptionType)
        assert isinstance(field_type.inner, ArrayType)
        assert field_type.inner.length == 3
        assert field_type.inner.element == DefinedType(name="Fees")
        assert str(field_type) == "Option<[Fees; 3]>"

    def test_wrapped_defined_reference(self):
        assert parse_field_type({"defined": {"name": "Fees"}}) == DefinedType(name="Fees")

    def test_zero_length_array(self):
        assert parse_field_type({"array": ["u8", 0]}).length == 0

    @pytest.mark.parametrize("raw", [
        "u256",
        {"vec": "u8"},
        {"array": ["u8"]},
        {"array": ["u8", -1]},
        {"array": ["u8", True]},
        {"option": "u8", "defined": "X"},
        {"defined": ""},
        42,
    ])
    def test_rejects_unsupported_shapes(self, raw):
        with pytest.raises(ValueError):
            parse_field_type(raw)


class TestLoadSchema:
    """Test load_schema on well-formed documents."""

    def test_loads_accounts_and_types(self, widget_idl):
        schema = load_schema(json.dumps(widget_idl))

        assert schema.name == "widgets"
        assert schema.account_names == ["Widget", "Gadget"]
        assert schema.account("Widget").kind == TypeKind.STRUCT
        assert schema.type_index["Status"].kind == TypeKind.ENUM
        assert set(schema.type_index.names()) == {"Widget", "Gadget", "Status"}

    def test_field_types_are_typed(self, widget_schema):
        fields = {f.name: f.field_type for f in widget_schema.account("Widget").body.fields}

        assert isinstance(fields["data"], ArrayType)
        assert isinstance(fields["parent"], OptionType)
        assert fields["status"] == DefinedType(name="Status")

    def test_tuple_and_unit_variants(self, widget_schema):
        variants = widget_schema.type_index["Status"].body.variants

        assert variants[0].fields == ()
        assert not variants[1].tuple_fields
        assert variants[2].tuple_fields
        assert [f.name for f in variants[2].fields] == ["0", "1"]

    def test_carried_sections_are_kept(self, widget_schema):
        """Test instructions and errors survive with their original keys."""
        instruction = widget_schema.instructions[0]

        assert instruction.name == "initialize"
        assert instruction.accounts[0]["isMut"] is True
        assert widget_schema.errors[0].code == 6000

    def test_null_sections_become_empty(self, widget_idl):
        widget_idl["types"] = None
        widget_idl["accounts"] = [widget_idl["accounts"][1]]
        widget_idl["events"] = None

        schema = load_schema(json.dumps(widget_idl))

        assert schema.types == ()
        assert schema.events == ()

    def test_named_type_shadows_account_of_same_name(self, widget_idl):
        widget_idl["types"].append({
            "name": "Gadget",
            "type": {"kind": "struct", "fields": [{"name": "count", "type": "u32"}]},
        })

        schema = load_schema(json.dumps(widget_idl))

        assert schema.type_index["Gadget"].body.fields[0].field_type.name == Primitive.U32
        assert schema.account("Gadget").body.fields[0].field_type.name == Primitive.U16

    def test_load_schema_file(self, tmp_path, widget_idl):
        path = tmp_path / "idl.json"
        path.write_text(json.dumps(widget_idl), encoding="utf-8")

        assert load_schema_file(path).account_names == ["Widget", "Gadget"]

    def test_accepts_bytes(self, widget_idl):
        assert load_schema(json.dumps(widget_idl).encode("utf-8")).name == "widgets"


class TestSchemaErrors:
    """Test schema failures are reported before any decoding."""

    def test_invalid_json(self):
        with pytest.raises(SchemaError) as exc_info:
            load_schema("{not json")
        assert exc_info.value.error_code == ErrorCode.SCHEMA_MALFORMED

    def test_document_must_be_object(self):
        with pytest.raises(SchemaError) as exc_info:
            build_schema([])
        assert exc_info.value.error_code == ErrorCode.SCHEMA_MALFORMED

    def test_missing_accounts(self, widget_idl):
        del widget_idl["accounts"]
        with pytest.raises(SchemaError) as exc_info:
            load_schema(json.dumps(widget_idl))
        assert exc_info.value.error_code == ErrorCode.SCHEMA_MALFORMED
        assert exc_info.value.details["location"] == "accounts"

    def test_unknown_primitive_reports_location(self, widget_idl):
        widget_idl["accounts"][0]["type"]["fields"][0]["type"] = "u256"

        with pytest.raises(SchemaError) as exc_info:
            load_schema(json.dumps(widget_idl))

        error = exc_info.value
        assert error.error_code == ErrorCode.SCHEMA_MALFORMED
        assert error.details["location"].startswith("accounts.0.type.fields.0")

    def test_unresolved_reference(self, widget_idl):
        widget_idl["accounts"][0]["type"]["fields"][5]["type"] = {"defined": "Missing"}

        with pytest.raises(SchemaError) as exc_info:
            load_schema(json.dumps(widget_idl))

        error = exc_info.value
        assert error.error_code == ErrorCode.SCHEMA_UNRESOLVED_REFERENCE
        assert error.details == {"name": "Missing", "location": "Widget.status"}

    def test_unresolved_reference_inside_variant(self, widget_idl):
        widget_idl["types"][0]["type"]["variants"][1]["fields"][0]["type"] = {
            "option": {"defined": "Timestamp"}
        }

        with pytest.raises(SchemaError) as exc_info:
            load_schema(json.dumps(widget_idl))

        assert exc_info.value.details["location"] == "Status::Active.since"

    @pytest.mark.parametrize("body", [
        {"kind": "struct"},
        {"kind": "enum", "fields": []},
        {"kind": "union", "fields": []},
        {"kind": "struct", "fields": [{"name": "a", "type": "u8"}, {"name": "a", "type": "u8"}]},
        {"kind": "enum", "variants": [{"name": "A"}, {"name": "A"}]},
        {"kind": "enum", "variants": [{"name": "A", "fields": ["u8", {"name": "b", "type": "u8"}]}]},
    ])
    def test_malformed_type_bodies(self, widget_idl, body):
        widget_idl["types"].append({"name": "Broken", "type": body})

        with pytest.raises(SchemaError) as exc_info:
            load_schema(json.dumps(widget_idl))
        assert exc_info.value.error_code == ErrorCode.SCHEMA_MALFORMED

    def test_duplicate_account_names(self, widget_idl):
        widget_idl["accounts"].append(widget_idl["accounts"][0])

        with pytest.raises(SchemaError) as exc_info:
            load_schema(json.dumps(widget_idl))
        assert "Duplicate account type 'Widget'" in exc_info.value.message

    def test_too_many_variants(self, widget_idl):
        variants = [{"name": f"V{i}"} for i in range(257)]
        widget_idl["types"].append({"name": "Huge", "type": {"kind": "enum", "variants": variants}})

        with pytest.raises(SchemaError):
            load_schema(json.dumps(widget_idl))

    def test_error_string_carries_code(self):
        with pytest.raises(SchemaError) as exc_info:
            load_schema("[")
        assert str(exc_info.value).startswith("[SCHEMA_001]")
