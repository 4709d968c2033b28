"""Generators rendering the schema model as document text or Zod source."""

from schema_bridge.generators.base import Generator, OutputFormat
from schema_bridge.generators.document_generator import DocumentGenerator, generate_document
from schema_bridge.generators.registry import GeneratorRegistry
from schema_bridge.generators.zod_generator import (
    ZodGenerator,
    generate_zod,
    reindent,
    render_zod,
)

__all__ = [
    "Generator",
    "OutputFormat",
    "DocumentGenerator",
    "generate_document",
    "GeneratorRegistry",
    "ZodGenerator",
    "generate_zod",
    "reindent",
    "render_zod",
]
