"""Zod source parser.

Extracts the intermediate schema model from Zod schema source text. This
is a heuristic extractor, not a compiler front end: it reads canonical
constructor chains (``z.object({...}).nullable().describe("...")``) and
falls back to the fixed rules in ``schema_bridge.schemas.rules`` for
anything else. References to other named schemas are never resolved.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from schema_bridge.errors import MalformedInput, UnrecognizedSchema, UnsupportedConstruct
from schema_bridge.schemas.base import SchemaKind, SchemaNode
from schema_bridge.schemas.jsonc import convert_single_quotes, decode_jsonc, strip_comments
from schema_bridge.schemas.rules import (
    classify,
    match_vocabulary_properties,
    node_for_kind,
    PROPERTY_VOCABULARY,
)

logger = logging.getLogger(__name__)


_PREAMBLE_PATTERNS = [
    # import { z } from 'zod';  /  import * as z from "zod"
    re.compile(r"^[ \t]*import\s+[^;]*?\bfrom\s+['\"][^'\"\n]*['\"][ \t]*;?", re.MULTILINE),
    # import 'reflect-metadata';
    re.compile(r"^[ \t]*import\s+['\"][^'\"\n]*['\"][ \t]*;?", re.MULTILINE),
    # const { z } = require('zod');
    re.compile(
        r"^[ \t]*(?:const|let|var)\s+[\w${},\s]+?=\s*require\(\s*['\"][^'\"\n]*['\"]\s*\)[ \t]*;?",
        re.MULTILINE,
    ),
]

_EXPORTED_DECLARATION = re.compile(
    r"export\s+(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*(?::[^=;]+?)?=\s*(?=z\s*\.)"
)
_DECLARATION = re.compile(
    r"(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*(?::[^=;]+?)?=\s*(?=z\s*\.)"
)

_CALL_HEAD = re.compile(r"\s*z\s*\.\s*([A-Za-z_$][\w$]*)\s*\(")
_REFERENCE_HEAD = re.compile(r"\s*[A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*(?=\s*\.|\s*$)")
_CHAIN_LINK = re.compile(r"\s*\.\s*([A-Za-z_$][\w$]*)\s*\(")
_PROPERTY_ENTRY = re.compile(
    r"\s*(?:(\"(?:[^\"\\]|\\.)*\")|('(?:[^'\\]|\\.)*')|([A-Za-z_$][\w$]*))\s*:\s*(.*)$",
    re.DOTALL,
)

_AS_CONST = re.compile(r"\s+as\s+const\s*$")

_PRIMITIVE_CONSTRUCTORS = {
    "string": SchemaKind.STRING,
    "number": SchemaKind.NUMBER,
    "boolean": SchemaKind.BOOLEAN,
    "null": SchemaKind.NULL,
    "undefined": SchemaKind.UNDEFINED,
    "bigint": SchemaKind.BIGINT,
    "date": SchemaKind.DATE,
    "any": SchemaKind.ANY,
    "unknown": SchemaKind.ANY,
}

_OPENERS = "([{"
_CLOSERS = ")]}"


@dataclass
class _CallChain:
    """A constructor call split into head and trailing links."""

    constructor: str | None
    arguments: str = ""
    links: list[tuple[str, str]] = field(default_factory=list)


def _iter_code(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """Yield ``(index, char)`` for characters outside string literals."""
    quote = ""
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = ""
            continue
        if char in "\"'`":
            quote = char
            continue
        yield index, char


def _property_name(match: re.Match) -> str:
    """Decode a matched property key, unescaping quoted names."""
    if match.group(1) is not None:
        return json.loads(match.group(1))
    if match.group(2) is not None:
        return json.loads(convert_single_quotes(match.group(2)))
    return match.group(3)


def _find_closing(text: str, open_index: int) -> int:
    depth = 0
    for index, char in _iter_code(text, open_index):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth == 0:
                return index
    raise UnsupportedConstruct(f"Unbalanced brackets after: {text[open_index:open_index + 40]!r}")


def _statement_end(text: str, start: int) -> int:
    """Find where the statement starting at ``start`` ends.

    A statement ends at a top-level ``;``, at an unmatched closer, or at a
    top-level line break that is not followed by a ``.`` continuation.
    """
    depth = 0
    for index, char in _iter_code(text, start):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth < 0:
                return index
        elif depth == 0 and char == ";":
            return index
        elif depth == 0 and char == "\n" and not text[index:].lstrip().startswith("."):
            return index
    return len(text)


def _split_top_level(text: str) -> list[str]:
    """Split text at commas that are not nested in brackets or strings."""
    pieces = []
    depth = 0
    last = 0
    for index, char in _iter_code(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == "," and depth == 0:
            pieces.append(text[last:index])
            last = index + 1
    pieces.append(text[last:])
    return [piece for piece in pieces if piece.strip()]


class ZodSourceParser:
    """Parser for Zod schema source text."""

    def __init__(self, source: str):
        """Initialize parser with source text.

        Args:
            source: Zod schema source, optionally with imports and several
                named declarations
        """
        self.source = source
        self.cleaned = self._clean(source)

    @staticmethod
    def _clean(source: str) -> str:
        """Strip import-like preamble lines and comments."""
        for pattern in _PREAMBLE_PATTERNS:
            source = pattern.sub("", source)
        return strip_comments(source, quotes="\"'`")

    def parse(self) -> SchemaNode:
        """Extract the schema.

        Strategies are tried in order; the first that yields a node wins.

        Returns:
            Root SchemaNode

        Raises:
            UnrecognizedSchema: If no strategy could identify a schema
        """
        if not self.cleaned.strip():
            raise UnrecognizedSchema("Please enter a Zod schema to convert")

        strategies: list[tuple[str, Callable[[], SchemaNode | None]]] = [
            ("exported declaration", self._from_exported_declaration),
            ("declaration", self._from_declaration),
            ("bare invocation", self._from_bare_invocation),
            ("reference schema", self._from_reference_schema),
        ]
        for name, strategy in strategies:
            node = strategy()
            if node is not None:
                logger.debug("Schema extracted from %s", name)
                return node

        raise UnrecognizedSchema()

    # -- strategies ---------------------------------------------------------

    def _from_exported_declaration(self) -> SchemaNode | None:
        match = _EXPORTED_DECLARATION.search(self.cleaned)
        if match is None:
            return None
        return self._read_declaration(match)

    def _from_declaration(self) -> SchemaNode | None:
        match = _DECLARATION.search(self.cleaned)
        if match is None:
            return None
        return self._read_declaration(match)

    def _from_bare_invocation(self) -> SchemaNode | None:
        if not _CALL_HEAD.match(self.cleaned):
            return None
        start = len(self.cleaned) - len(self.cleaned.lstrip())
        end = _statement_end(self.cleaned, start)
        return self._read_top_level(self.cleaned[start:end])

    def _from_reference_schema(self) -> SchemaNode | None:
        rule = classify(self.cleaned)
        if rule is not None and rule.is_special_case:
            logger.debug("Falling back to fixed schema '%s'", rule.name)
            return rule.result
        return None

    def _read_declaration(self, match: re.Match) -> SchemaNode | None:
        start = match.end()
        end = _statement_end(self.cleaned, start)
        logger.debug("Reading declaration '%s'", match.group(1))
        return self._read_top_level(self.cleaned[start:end])

    def _read_top_level(self, expression: str) -> SchemaNode | None:
        """Read a declaration right-hand side or bare expression.

        Falls back to the classification table when the expression is not
        a plain constructor chain.
        """
        try:
            return self._read_expression(expression)
        except UnsupportedConstruct as e:
            logger.debug("Expression not readable (%s), classifying instead", e)

        rule = classify(expression)
        if rule is None:
            return None
        if rule.is_special_case:
            return rule.result

        node = node_for_kind(rule.result)
        if node.kind == SchemaKind.OBJECT:
            node = SchemaNode(kind=SchemaKind.OBJECT, properties=match_vocabulary_properties(self.cleaned))
        return self._apply_links(node, self._trailing_links(expression))

    # -- expressions --------------------------------------------------------

    def _split_call(self, expression: str) -> _CallChain:
        """Split an expression into constructor, arguments and chain links.

        Expressions headed by a reference to another schema have no
        constructor but still expose their links.
        """
        head = _CALL_HEAD.match(expression)
        if head is not None:
            open_index = head.end() - 1
            close_index = _find_closing(expression, open_index)
            chain = _CallChain(head.group(1), expression[open_index + 1:close_index])
            position = close_index + 1
        else:
            reference = _REFERENCE_HEAD.match(expression)
            if reference is None:
                raise UnsupportedConstruct(f"Unsupported expression: {expression.strip()[:40]!r}")
            chain = _CallChain(None)
            position = reference.end()

        while True:
            link = _CHAIN_LINK.match(expression, position)
            if link is None:
                break
            open_index = link.end() - 1
            close_index = _find_closing(expression, open_index)
            chain.links.append((link.group(1), expression[open_index + 1:close_index]))
            position = close_index + 1

        return chain

    def _trailing_links(self, expression: str) -> list[tuple[str, str]]:
        try:
            return self._split_call(expression).links
        except UnsupportedConstruct:
            return []

    def _read_expression(self, expression: str) -> SchemaNode:
        chain = self._split_call(expression)
        if chain.constructor is None:
            raise UnsupportedConstruct(f"Reference to another schema: {expression.strip()[:40]!r}")
        node = self._build_base(chain.constructor, chain.arguments)
        return self._apply_links(node, chain.links)

    def _build_base(self, constructor: str, arguments: str) -> SchemaNode:
        if constructor in _PRIMITIVE_CONSTRUCTORS:
            return SchemaNode(kind=_PRIMITIVE_CONSTRUCTORS[constructor])

        if constructor == "literal":
            value = self._decode_argument(arguments)
            if isinstance(value, (list, dict)):
                raise UnsupportedConstruct("Literal values must be scalars")
            return SchemaNode(kind=SchemaKind.LITERAL, literal_value=value)

        if constructor == "enum":
            values = self._decode_argument(arguments)
            if not isinstance(values, list) or not all(
                isinstance(v, (str, int, float)) and not isinstance(v, bool) for v in values
            ):
                raise UnsupportedConstruct("Enum values must be a list of strings or numbers")
            return SchemaNode(kind=SchemaKind.ENUM, enum_values=values)

        if constructor == "array":
            items = self._read_expression(arguments) if arguments.strip() else None
            return SchemaNode(kind=SchemaKind.ARRAY, items=items)

        if constructor == "object":
            return SchemaNode(kind=SchemaKind.OBJECT, properties=self._read_object_body(arguments))

        if constructor == "union":
            body = arguments.strip()
            if not (body.startswith("[") and body.endswith("]")):
                raise UnsupportedConstruct("Union members must be an array literal")
            members = [self._read_expression(member) for member in _split_top_level(body[1:-1])]
            return SchemaNode(kind=SchemaKind.UNION, union_members=members)

        raise UnsupportedConstruct(f"Unsupported constructor z.{constructor}()")

    def _read_object_body(self, arguments: str) -> dict[str, SchemaNode]:
        body = arguments.strip()
        if not body:
            return {}
        if not (body.startswith("{") and body.endswith("}")):
            raise UnsupportedConstruct("Object shape must be an object literal")

        properties: dict[str, SchemaNode] = {}
        for entry in _split_top_level(body[1:-1]):
            match = _PROPERTY_ENTRY.match(entry)
            if match is None:
                logger.debug("Skipping object entry %r", entry.strip()[:40])
                continue
            name = _property_name(match)
            properties[name] = self._read_property(name, match.group(4))
        return properties

    def _read_property(self, name: str, expression: str) -> SchemaNode:
        """Read a property value, falling back per property when unreadable.

        Fallback order: the property vocabulary, then the classification
        table, then an "accept anything" node. The property's own
        modifiers and description are applied on top.
        """
        try:
            return self._read_expression(expression)
        except UnsupportedConstruct as e:
            logger.debug("Property '%s' not readable: %s", name, e)

        if name in PROPERTY_VOCABULARY:
            node = PROPERTY_VOCABULARY[name]
        else:
            rule = classify(expression, include_special_cases=False)
            node = node_for_kind(rule.result) if rule is not None else SchemaNode(kind=SchemaKind.ANY)
        return self._apply_links(node, self._trailing_links(expression))

    def _apply_links(self, node: SchemaNode, links: list[tuple[str, str]]) -> SchemaNode:
        for name, arguments in links:
            if name == "nullable":
                node = node.with_modifiers(nullable=True)
            elif name == "optional":
                node = node.with_modifiers(optional=True)
            elif name == "nullish":
                node = node.with_modifiers(nullable=True, optional=True)
            elif name in ("describe", "description"):
                description = self._read_description(arguments)
                if description is not None:
                    node = node.with_modifiers(description=description)
            elif name == "array":
                node = SchemaNode(kind=SchemaKind.ARRAY, items=node)
            else:
                logger.debug("Ignoring chained call .%s()", name)
        return node

    def _read_description(self, arguments: str) -> str | None:
        text = arguments.strip()
        if len(text) >= 2 and text[0] == text[-1] == "`":
            return text[1:-1]
        try:
            value = self._decode_argument(text)
        except UnsupportedConstruct as e:
            logger.debug("Description not readable: %s", e)
            return None
        return value if isinstance(value, str) else None

    @staticmethod
    def _decode_argument(arguments: str) -> Any:
        try:
            return decode_jsonc(_AS_CONST.sub("", arguments))
        except MalformedInput as e:
            raise UnsupportedConstruct(f"Unreadable argument {arguments.strip()[:40]!r}") from e


def parse_zod_source(source: str) -> SchemaNode:
    """Convenience function to extract a schema from Zod source text.

    Args:
        source: Zod schema source text

    Returns:
        Extracted SchemaNode
    """
    return ZodSourceParser(source).parse()
