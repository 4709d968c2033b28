"""Document generator.

Renders the schema model as a JSON schema document, optionally annotated
with ``// description`` comment lines at the top of every described node.
Stripping the comments always leaves valid JSON.
"""

import json
from typing import Any

from schema_bridge.generators.base import Generator, OutputFormat
from schema_bridge.schemas.base import SchemaKind, SchemaNode


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _comment_text(description: str) -> str:
    return " ".join(description.splitlines())


class DocumentGenerator(Generator):
    """Generator for (comment-bearing) schema documents."""

    output_format = OutputFormat.DOCUMENT

    def __init__(self, include_comments: bool = True, indent: int = 2):
        """Initialize the generator.

        Args:
            include_comments: Emit a comment line for every description
            indent: Number of spaces per nesting level
        """
        super().__init__(indent=indent)
        self.include_comments = include_comments

    def generate(self, node: SchemaNode) -> str:
        if not self.include_comments:
            return json.dumps(node.to_document(), indent=self.indent, ensure_ascii=False)
        return self._render_node(node, 0)

    def _render_node(self, node: SchemaNode, level: int) -> str:
        """Render one node record, fields in document order."""
        fields: list[tuple[str, str]] = [("type", _dumps(node.kind.value))]

        if node.description is not None:
            fields.append(("description", _dumps(node.description)))

        if node.kind == SchemaKind.OBJECT:
            fields.append(("properties", self._render_properties(node.properties or {}, level + 1)))
        elif node.kind == SchemaKind.ARRAY and node.items is not None:
            fields.append(("items", self._render_node(node.items, level + 1)))
        elif node.kind == SchemaKind.ENUM:
            values = [_dumps(value) for value in node.enum_values or []]
            fields.append(("enum", self._render_sequence(values, level + 1)))
        elif node.kind == SchemaKind.UNION:
            members = [self._render_node(member, level + 2) for member in node.union_members or []]
            fields.append(("oneOf", self._render_sequence(members, level + 1)))
        elif node.kind == SchemaKind.LITERAL:
            fields.append(("const", _dumps(node.literal_value)))

        if node.nullable:
            fields.append(("nullable", "true"))
        if node.optional:
            fields.append(("optional", "true"))

        lines = []
        if node.description:
            lines.append(f"{self._pad(level + 1)}// {_comment_text(node.description)}")
        lines.append(",\n".join(
            f"{self._pad(level + 1)}{_dumps(key)}: {value}" for key, value in fields
        ))
        return "{\n" + "\n".join(lines) + "\n" + self._pad(level) + "}"

    def _render_properties(self, properties: dict[str, SchemaNode], level: int) -> str:
        if not properties:
            return "{}"
        entries = ",\n".join(
            f"{self._pad(level + 1)}{_dumps(name)}: {self._render_node(child, level + 1)}"
            for name, child in properties.items()
        )
        return "{\n" + entries + "\n" + self._pad(level) + "}"

    def _render_sequence(self, rendered: list[str], level: int) -> str:
        if not rendered:
            return "[]"
        entries = ",\n".join(f"{self._pad(level + 1)}{item}" for item in rendered)
        return "[\n" + entries + "\n" + self._pad(level) + "]"


def generate_document(node: SchemaNode, include_comments: bool = True, indent: int = 2) -> str:
    """Convenience function to render a schema document.

    Args:
        node: Root schema node
        include_comments: Emit description comment lines
        indent: Number of spaces per nesting level

    Returns:
        Document text
    """
    return DocumentGenerator(include_comments=include_comments, indent=indent).generate(node)
