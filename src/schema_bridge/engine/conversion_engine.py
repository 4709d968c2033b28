"""Conversion Engine - orchestrates both conversion directions.

The engine wires the parsers to the generators:
- Zod source -> schema model -> comment-bearing document
- schema document -> schema model -> Zod source

Failures are returned as values on the result object; the module level
convenience functions raise them instead.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from schema_bridge.config.base import ConverterSettings
from schema_bridge.errors import ConversionError
from schema_bridge.generators.base import OutputFormat
from schema_bridge.generators.registry import GeneratorRegistry
from schema_bridge.schemas.base import SchemaNode
from schema_bridge.schemas.document import parse_document
from schema_bridge.schemas.zod import parse_zod_source

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Conversion directions."""

    SOURCE_TO_DOCUMENT = "source-to-document"
    DOCUMENT_TO_SOURCE = "document-to-source"


@dataclass
class ConversionResult:
    """Result of a single conversion."""

    direction: Direction
    output: str = ""
    error: ConversionError | None = None
    node: SchemaNode | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "ok": self.ok,
            "output": self.output,
            "error": self.error.to_dict() if self.error else None,
        }


class ConversionEngine:
    """Engine running conversions in either direction."""

    def __init__(
        self,
        settings: ConverterSettings | None = None,
        generator_registry: GeneratorRegistry | None = None,
    ):
        self.settings = settings or ConverterSettings()
        self.generator_registry = generator_registry or GeneratorRegistry()

    def convert_source_to_document(
        self,
        source_text: str,
        include_comments: bool | None = None,
    ) -> ConversionResult:
        """Convert Zod source text into a schema document.

        Args:
            source_text: Zod schema source
            include_comments: Emit description comments (defaults to settings)

        Returns:
            ConversionResult with the document text or the error
        """
        if include_comments is None:
            include_comments = self.settings.include_comments

        result = ConversionResult(direction=Direction.SOURCE_TO_DOCUMENT)
        try:
            result.node = parse_zod_source(source_text)
            generator = self.generator_registry.create(
                OutputFormat.DOCUMENT,
                include_comments=include_comments,
                indent=self.settings.indent,
            )
            result.output = generator.generate(result.node)
        except ConversionError as e:
            logger.warning("Source to document conversion failed: %s", e.message)
            result.error = e
            result.output = ""
        return result

    def convert_document_to_source(self, document_text: str) -> ConversionResult:
        """Convert a schema document into Zod source text.

        Args:
            document_text: Document text, comments allowed

        Returns:
            ConversionResult with the source text or the error
        """
        result = ConversionResult(direction=Direction.DOCUMENT_TO_SOURCE)
        try:
            result.node = parse_document(document_text)
            generator = self.generator_registry.create(
                OutputFormat.ZOD,
                reindent=self.settings.reindent_source,
                indent=self.settings.indent,
            )
            result.output = generator.generate(result.node)
        except ConversionError as e:
            logger.warning("Document to source conversion failed: %s", e.message)
            result.error = e
            result.output = ""
        return result

    def convert(
        self,
        direction: Direction | str,
        text: str,
        include_comments: bool | None = None,
    ) -> ConversionResult:
        """Run a conversion in the given direction.

        Args:
            direction: Conversion direction (can be string or enum)
            text: Input text
            include_comments: Only used for source to document conversions

        Returns:
            ConversionResult
        """
        direction = Direction(direction)
        if direction == Direction.SOURCE_TO_DOCUMENT:
            return self.convert_source_to_document(text, include_comments=include_comments)
        return self.convert_document_to_source(text)


def convert_source_to_document(source_text: str, include_comments: bool = True) -> str:
    """Convenience function converting Zod source into document text.

    Raises:
        ConversionError: If the source cannot be converted
    """
    result = ConversionEngine().convert_source_to_document(source_text, include_comments)
    if result.error is not None:
        raise result.error
    return result.output


def convert_document_to_source(document_text: str) -> str:
    """Convenience function converting document text into Zod source.

    Raises:
        ConversionError: If the document cannot be converted
    """
    result = ConversionEngine().convert_document_to_source(document_text)
    if result.error is not None:
        raise result.error
    return result.output
