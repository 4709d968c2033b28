"""Engine module - orchestrates conversions in both directions."""

from schema_bridge.engine.conversion_engine import (
    ConversionEngine,
    ConversionResult,
    Direction,
    convert_document_to_source,
    convert_source_to_document,
)

__all__ = [
    "ConversionEngine",
    "ConversionResult",
    "Direction",
    "convert_document_to_source",
    "convert_source_to_document",
]
