"""Tests for the schema model and the document parser.

Tests cover:
- SchemaNode construction and invariants
- Document shape produced by to_document
- Document parsing, aliases and structural validation
"""

import json

import pytest
from pydantic import ValidationError

from schema_bridge.errors import InvalidSchemaDocument, MalformedInput
from schema_bridge.schemas import (
    DocumentSchemaParser,
    SchemaKind,
    SchemaNode,
    is_schema_document,
    parse_document,
)


# =============================================================================
# SchemaNode Tests
# =============================================================================

class TestSchemaNode:
    """Tests for the SchemaNode model."""

    def test_primitive_defaults(self):
        node = SchemaNode(kind=SchemaKind.STRING)
        assert node.description is None
        assert node.nullable is False
        assert node.optional is False
        assert node.properties is None

    def test_containers_default_to_empty(self):
        assert SchemaNode(kind=SchemaKind.OBJECT).properties == {}
        assert SchemaNode(kind=SchemaKind.ENUM).enum_values == []
        assert SchemaNode(kind=SchemaKind.UNION).union_members == []

    def test_kind_from_string(self):
        node = SchemaNode(kind="number")
        assert node.kind == SchemaKind.NUMBER

    def test_aliases(self):
        node = SchemaNode(kind="enum", enumValues=["a", "b"])
        assert node.enum_values == ["a", "b"]

        literal = SchemaNode(kind="literal", literalValue=3)
        assert literal.literal_value == 3

    def test_auxiliary_field_on_wrong_kind(self):
        with pytest.raises(ValidationError):
            SchemaNode(kind=SchemaKind.STRING, items=SchemaNode(kind=SchemaKind.NUMBER))

        with pytest.raises(ValidationError):
            SchemaNode(kind=SchemaKind.ARRAY, enum_values=["a"])

    def test_nodes_are_immutable(self):
        node = SchemaNode(kind=SchemaKind.STRING)
        with pytest.raises(ValidationError):
            node.description = "changed"

    def test_structural_equality(self):
        assert SchemaNode(kind="string", description="x") == SchemaNode(kind="string", description="x")
        assert SchemaNode(kind="string") != SchemaNode(kind="string", nullable=True)

    def test_with_modifiers(self):
        node = SchemaNode(kind=SchemaKind.STRING)
        modified = node.with_modifiers(nullable=True, description="A name")

        assert modified.nullable is True
        assert modified.optional is False
        assert modified.description == "A name"
        assert node.nullable is False

    def test_with_modifiers_nothing_to_apply(self):
        node = SchemaNode(kind=SchemaKind.STRING, nullable=True)
        assert node.with_modifiers() is node

    def test_kind_properties(self):
        assert SchemaKind.STRING.is_primitive
        assert not SchemaKind.OBJECT.is_primitive
        assert SchemaKind.NULLABLE.is_modifier
        assert not SchemaKind.ANY.is_modifier

    def test_walk(self):
        node = SchemaNode(
            kind=SchemaKind.OBJECT,
            properties={
                "tags": SchemaNode(kind=SchemaKind.ARRAY, items=SchemaNode(kind=SchemaKind.STRING)),
                "id": SchemaNode(
                    kind=SchemaKind.UNION,
                    union_members=[SchemaNode(kind="string"), SchemaNode(kind="number")],
                ),
            },
        )

        paths = [path for path, _ in node.walk()]
        assert paths == ["$", "$.tags", "$.tags[]", "$.id", "$.id|0", "$.id|1"]


class TestToDocument:
    """Tests for SchemaNode.to_document."""

    def test_primitive(self):
        assert SchemaNode(kind="string").to_document() == {"type": "string"}

    def test_field_order(self):
        node = SchemaNode(
            kind=SchemaKind.OBJECT,
            description="User",
            nullable=True,
            optional=True,
            properties={"a": SchemaNode(kind="string")},
        )
        assert list(node.to_document()) == ["type", "description", "properties", "nullable", "optional"]

    def test_empty_object_keeps_properties(self):
        assert SchemaNode(kind="object").to_document() == {"type": "object", "properties": {}}

    def test_enum_union_literal(self):
        assert SchemaNode(kind="enum", enum_values=["a", 1]).to_document() == {
            "type": "enum",
            "enum": ["a", 1],
        }
        assert SchemaNode(kind="union", union_members=[SchemaNode(kind="null")]).to_document() == {
            "type": "union",
            "oneOf": [{"type": "null"}],
        }
        assert SchemaNode(kind="literal", literal_value=None).to_document() == {
            "type": "literal",
            "const": None,
        }

    def test_array_without_items(self):
        assert SchemaNode(kind="array").to_document() == {"type": "array"}


# =============================================================================
# Document Parser Tests
# =============================================================================

class TestDocumentSchemaParser:
    """Tests for DocumentSchemaParser."""

    def test_parse_nested(self):
        content = """
        {
          "type": "object",
          // A user record
          "description": "User",
          "properties": {
            "role": {"type": "enum", "enum": ["admin", "user"]},
            "tags": {"type": "array", "items": {"type": "string"}, "optional": true},
            "id": {"type": "union", "oneOf": [{"type": "string"}, {"type": "number"}]},
            "kind": {"type": "literal", "const": "user"},
          }
        }
        """
        node = parse_document(content)

        assert node.kind == SchemaKind.OBJECT
        assert node.description == "User"
        assert list(node.properties) == ["role", "tags", "id", "kind"]
        assert node.properties["role"].enum_values == ["admin", "user"]
        assert node.properties["tags"].optional is True
        assert node.properties["tags"].items == SchemaNode(kind=SchemaKind.STRING)
        assert len(node.properties["id"].union_members) == 2
        assert node.properties["kind"].literal_value == "user"

    def test_alternate_spellings(self):
        node = parse_document(json.dumps({
            "type": "object",
            "properties": {
                "a": {"type": "enum", "enumValues": ["x"]},
                "b": {"type": "union", "unionTypes": [{"type": "boolean"}]},
                "c": {"type": "literal", "literal": 5},
            },
        }))

        assert node.properties["a"].enum_values == ["x"]
        assert node.properties["b"].union_members == [SchemaNode(kind=SchemaKind.BOOLEAN)]
        assert node.properties["c"].literal_value == 5

    def test_unknown_type_accepts_anything(self):
        node = parse_document('{"type": "record", "description": "Lookup"}')
        assert node.kind == SchemaKind.ANY
        assert node.description == "Lookup"

    def test_fields_of_other_kinds_ignored(self):
        node = parse_document('{"type": "string", "items": {"type": "number"}}')
        assert node == SchemaNode(kind=SchemaKind.STRING)

    def test_missing_properties_is_empty_object(self):
        assert parse_document('{"type": "object"}').properties == {}

    def test_not_an_object(self):
        with pytest.raises(InvalidSchemaDocument) as exc_info:
            parse_document("[1, 2]")
        assert exc_info.value.path == "$"

    def test_type_must_be_string(self):
        with pytest.raises(InvalidSchemaDocument) as exc_info:
            parse_document('{"type": 5}')
        assert exc_info.value.path == "$.type"

    def test_nested_record_requires_type(self):
        with pytest.raises(InvalidSchemaDocument) as exc_info:
            parse_document('{"type": "object", "properties": {"a": {"description": "x"}}}')
        assert exc_info.value.path == "$.properties.a"
        assert "$.properties.a" in str(exc_info.value)

    def test_wrong_container_type(self):
        with pytest.raises(InvalidSchemaDocument):
            parse_document('{"type": "enum", "enum": "abc"}')

    def test_malformed_text(self):
        with pytest.raises(MalformedInput):
            DocumentSchemaParser.from_string('{"type": "string"')

    def test_is_schema_document(self):
        assert is_schema_document('{"type": "string"}')
        assert is_schema_document("// comment\n{type: 'number',}")
        assert not is_schema_document('{"name": "x"}')
        assert not is_schema_document("z.string()")
        assert not is_schema_document("")
