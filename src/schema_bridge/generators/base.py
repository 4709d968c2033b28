"""Base classes for Generators.

Generators render the intermediate schema model as text. They only read
the model; nodes are never modified.
"""

from abc import ABC, abstractmethod
from enum import Enum

from schema_bridge.schemas.base import SchemaNode


class OutputFormat(str, Enum):
    """Text formats a schema can be rendered to."""

    DOCUMENT = "document"
    ZOD = "zod"


class Generator(ABC):
    """Abstract base class for all schema generators."""

    output_format: OutputFormat

    def __init__(self, indent: int = 2):
        """Initialize the generator.

        Args:
            indent: Number of spaces per nesting level
        """
        self._indent = indent

    @property
    def indent(self) -> int:
        return self._indent

    @abstractmethod
    def generate(self, node: SchemaNode) -> str:
        """Render a schema node as text.

        Args:
            node: Root of the schema tree

        Returns:
            Rendered text
        """
        pass

    def _pad(self, level: int) -> str:
        return " " * (self._indent * level)
