"""Schema document parser.

Reads comment-bearing schema documents (the JSON side of the conversion)
into the intermediate schema model. Document text is decoded with the
tolerant JSONC reader, then checked against a recursive meta-schema.

Document format:
    {
      "type": "object",
      // Shown as a comment when comments are enabled
      "description": "A user",
      "properties": {
        "role": {"type": "enum", "enum": ["admin", "user"]},
        "tags": {"type": "array", "items": {"type": "string"}, "optional": true}
      }
    }
"""

import logging
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from schema_bridge.errors import InvalidSchemaDocument, MalformedInput
from schema_bridge.schemas.base import SchemaKind, SchemaNode
from schema_bridge.schemas.jsonc import decode_jsonc

logger = logging.getLogger(__name__)


# Accepted spellings for the kind-specific fields, preferred first
ENUM_KEYS = ("enum", "enumValues")
UNION_KEYS = ("oneOf", "unionMembers", "unionTypes")
LITERAL_KEYS = ("const", "literalValue", "literal")

DOCUMENT_META_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["type"],
    "properties": {
        "type": {"type": "string"},
        "description": {"type": ["string", "null"]},
        "nullable": {"type": "boolean"},
        "optional": {"type": "boolean"},
        "properties": {"type": "object", "additionalProperties": {"$ref": "#"}},
        "items": {"$ref": "#"},
        **{key: {"type": "array", "items": {"type": ["string", "number"]}} for key in ENUM_KEYS},
        **{key: {"type": "array", "items": {"$ref": "#"}} for key in UNION_KEYS},
        **{key: {"type": ["string", "number", "boolean", "null"]} for key in LITERAL_KEYS},
    },
}

_VALIDATOR = Draft7Validator(DOCUMENT_META_SCHEMA)


def _first_present(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


class DocumentSchemaParser:
    """Parser for schema documents."""

    def __init__(self, data: Any):
        """Initialize parser with decoded document data.

        Args:
            data: Decoded document (plain dicts and lists)
        """
        self.data = data
        self._validate_structure()

    @classmethod
    def from_string(cls, content: str) -> "DocumentSchemaParser":
        """Create parser from document text.

        Args:
            content: Document text, comments and common mistakes allowed

        Returns:
            Initialized DocumentSchemaParser

        Raises:
            MalformedInput: If the text cannot be decoded
        """
        return cls(decode_jsonc(content))

    def _validate_structure(self) -> None:
        """Validate the document against the meta-schema."""
        if not isinstance(self.data, dict):
            raise InvalidSchemaDocument("Schema document must be a JSON object")

        error = best_match(_VALIDATOR.iter_errors(self.data))
        if error is not None:
            path = "$" + "".join(
                f"[{part}]" if isinstance(part, int) else f".{part}"
                for part in error.absolute_path
            )
            raise InvalidSchemaDocument(error.message, path)

    def parse(self) -> SchemaNode:
        """Parse the document into a SchemaNode.

        Returns:
            Root SchemaNode
        """
        return self._parse_node(self.data, "$")

    def _parse_node(self, data: dict[str, Any], path: str) -> SchemaNode:
        """Parse a single document record.

        Fields that do not belong to the record's kind are ignored.

        Args:
            data: Document record
            path: Path for log messages

        Returns:
            Parsed SchemaNode
        """
        try:
            kind = SchemaKind(data["type"])
        except ValueError:
            logger.debug("%s: unsupported type '%s', accepting anything", path, data["type"])
            kind = SchemaKind.ANY

        fields: dict[str, Any] = {
            "kind": kind,
            "description": data.get("description"),
            "nullable": data.get("nullable", False),
            "optional": data.get("optional", False),
        }

        if kind == SchemaKind.OBJECT:
            fields["properties"] = {
                name: self._parse_node(prop, f"{path}.{name}")
                for name, prop in data.get("properties", {}).items()
            }
        elif kind == SchemaKind.ARRAY and "items" in data:
            fields["items"] = self._parse_node(data["items"], f"{path}[]")
        elif kind == SchemaKind.ENUM:
            fields["enum_values"] = list(_first_present(data, ENUM_KEYS) or [])
        elif kind == SchemaKind.UNION:
            fields["union_members"] = [
                self._parse_node(member, f"{path}|{index}")
                for index, member in enumerate(_first_present(data, UNION_KEYS) or [])
            ]
        elif kind == SchemaKind.LITERAL:
            fields["literal_value"] = _first_present(data, LITERAL_KEYS)

        return SchemaNode(**fields)


def is_schema_document(content: str) -> bool:
    """Check if content appears to be a schema document.

    Args:
        content: Text to check

    Returns:
        True if content decodes to a record with a string ``type``
    """
    try:
        data = decode_jsonc(content)
    except MalformedInput:
        return False

    return isinstance(data, dict) and isinstance(data.get("type"), str)


def parse_document(content: str) -> SchemaNode:
    """Convenience function to parse document text.

    Args:
        content: Document text

    Returns:
        Parsed SchemaNode
    """
    return DocumentSchemaParser.from_string(content).parse()
