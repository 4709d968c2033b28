"""Zod source generator.

Renders the schema model as Zod constructor chains. The flat rendering
is produced first and then laid out by :func:`reindent`.
"""

import json
from typing import Any

from schema_bridge.generators.base import Generator, OutputFormat
from schema_bridge.schemas.base import SchemaKind, SchemaNode
from schema_bridge.utils.helpers import is_identifier

_OPENERS = {"{": "}", "[": "]"}
_CLOSERS = set(_OPENERS.values())
_QUOTES = "\"'`"


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _property_key(name: str) -> str:
    return name if is_identifier(name) else _dumps(name)


def render_zod(node: SchemaNode) -> str:
    """Render a schema node as single-line Zod source.

    Args:
        node: Schema node to render

    Returns:
        Flat constructor chain, e.g. ``z.object({a: z.string()}).optional()``
    """
    kind = node.kind

    if kind.is_primitive:
        code = f"z.{kind.value}()"
    elif kind == SchemaKind.LITERAL:
        code = f"z.literal({_dumps(node.literal_value)})"
    elif kind == SchemaKind.ENUM:
        values = ", ".join(_dumps(value) for value in node.enum_values or [])
        code = f"z.enum([{values}])"
    elif kind == SchemaKind.ARRAY:
        items = render_zod(node.items) if node.items is not None else "z.any()"
        code = f"z.array({items})"
    elif kind == SchemaKind.OBJECT:
        entries = ", ".join(
            f"{_property_key(name)}: {render_zod(child)}"
            for name, child in (node.properties or {}).items()
        )
        code = f"z.object({{{entries}}})"
    elif kind == SchemaKind.UNION and node.union_members:
        members = ", ".join(render_zod(member) for member in node.union_members)
        code = f"z.union([{members}])"
    else:
        code = "z.any()"

    if node.nullable:
        code += ".nullable()"
    if node.optional:
        code += ".optional()"
    if node.description is not None:
        code += f".description({_dumps(node.description)})"

    return code


def reindent(text: str, indent: int = 2) -> str:
    """Lay out Zod source with one entry per line.

    Breaks lines after ``{``/``[``, before ``}``/``]`` and after commas
    nested inside them. Quoted strings are copied verbatim. Applying the
    function to its own output returns it unchanged.

    Args:
        text: Zod source, flat or already indented
        indent: Number of spaces per nesting level

    Returns:
        Re-indented source
    """
    result: list[str] = []
    depth = 0
    quote = ""
    escaped = False
    skip_whitespace = False

    def newline() -> None:
        result.append("\n" + " " * (indent * depth))

    def next_significant(position: int) -> str:
        for char in text[position:]:
            if not char.isspace():
                return char
        return ""

    for i, char in enumerate(text):
        if quote:
            result.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = ""
            continue

        if skip_whitespace:
            if char.isspace():
                continue
            skip_whitespace = False

        if char in _QUOTES:
            quote = char
            result.append(char)
        elif char in _OPENERS:
            result.append(char)
            depth += 1
            if next_significant(i + 1) != _OPENERS[char]:
                newline()
            skip_whitespace = True
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
            while result and result[-1].isspace():
                result.pop()
            if not (result and result[-1] in _OPENERS):
                newline()
            result.append(char)
        elif char == "," and depth > 0:
            result.append(char)
            if next_significant(i + 1) not in _CLOSERS:
                newline()
                skip_whitespace = True
        else:
            result.append(char)

    return "".join(result)


class ZodGenerator(Generator):
    """Generator for Zod schema source."""

    output_format = OutputFormat.ZOD

    def __init__(self, reindent: bool = True, indent: int = 2):
        """Initialize the generator.

        Args:
            reindent: Lay the output out over multiple lines
            indent: Number of spaces per nesting level
        """
        super().__init__(indent=indent)
        self.reindent = reindent

    def generate(self, node: SchemaNode) -> str:
        code = render_zod(node)
        if self.reindent:
            return reindent(code, self.indent)
        return code


def generate_zod(node: SchemaNode, reindent: bool = True, indent: int = 2) -> str:
    """Convenience function to render Zod source.

    Args:
        node: Root schema node
        reindent: Lay the output out over multiple lines
        indent: Number of spaces per nesting level

    Returns:
        Zod source text
    """
    return ZodGenerator(reindent=reindent, indent=indent).generate(node)
