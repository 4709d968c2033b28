"""Schema model and parsers for both sides of the conversion.

Example usage:
    from schema_bridge.schemas import parse_document, parse_zod_source

    # Source text -> model
    node = parse_zod_source('z.object({ a: z.string().describe("A") })')

    # Document text (comments allowed) -> model
    node = parse_document('{"type": "array", "items": {"type": "number"}}')
"""

from schema_bridge.schemas.base import (
    PRIMITIVE_KINDS,
    SchemaKind,
    SchemaNode,
)
from schema_bridge.schemas.jsonc import decode_jsonc, normalize, strip_comments
from schema_bridge.schemas.document import (
    DocumentSchemaParser,
    is_schema_document,
    parse_document,
)
from schema_bridge.schemas.zod import ZodSourceParser, parse_zod_source

__all__ = [
    "PRIMITIVE_KINDS",
    "SchemaKind",
    "SchemaNode",
    "decode_jsonc",
    "normalize",
    "strip_comments",
    "DocumentSchemaParser",
    "is_schema_document",
    "parse_document",
    "ZodSourceParser",
    "parse_zod_source",
]
