"""
Schema Bridge - Convert between Zod schema source and JSON schema documents.

Documents may carry // and /* */ comments; descriptions travel in both
directions, and are written out as comments in generated documents.
"""

__version__ = "0.1.0"

from schema_bridge.schemas.base import SchemaKind, SchemaNode
from schema_bridge.schemas.document import parse_document
from schema_bridge.schemas.zod import parse_zod_source
from schema_bridge.generators.document_generator import generate_document
from schema_bridge.generators.zod_generator import generate_zod, reindent
from schema_bridge.engine.conversion_engine import (
    ConversionEngine,
    ConversionResult,
    Direction,
    convert_document_to_source,
    convert_source_to_document,
)
from schema_bridge.errors import (
    ConversionError,
    InvalidSchemaDocument,
    MalformedInput,
    UnrecognizedSchema,
)

__all__ = [
    "SchemaKind",
    "SchemaNode",
    "parse_document",
    "parse_zod_source",
    "generate_document",
    "generate_zod",
    "reindent",
    "ConversionEngine",
    "ConversionResult",
    "Direction",
    "convert_document_to_source",
    "convert_source_to_document",
    "ConversionError",
    "InvalidSchemaDocument",
    "MalformedInput",
    "UnrecognizedSchema",
]
