"""Generator Registry for managing available generators."""

from typing import Type

from schema_bridge.generators.base import Generator, OutputFormat


class GeneratorRegistry:
    """Registry for schema generators.

    Maps each output format to the generator class that renders it and
    provides a factory for configured instances.
    """

    def __init__(self):
        self._generators: dict[OutputFormat, Type[Generator]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the default generators."""
        from schema_bridge.generators.document_generator import DocumentGenerator
        from schema_bridge.generators.zod_generator import ZodGenerator

        self.register(OutputFormat.DOCUMENT, DocumentGenerator)
        self.register(OutputFormat.ZOD, ZodGenerator)

    def register(self, output_format: OutputFormat, generator_class: Type[Generator]) -> None:
        """Register a generator for an output format.

        Args:
            output_format: The format this generator produces
            generator_class: The generator class to register
        """
        self._generators[output_format] = generator_class

    def get(self, output_format: OutputFormat | str) -> Type[Generator] | None:
        """Get a generator class by output format.

        Args:
            output_format: The output format (can be string or enum)

        Returns:
            The generator class or None if not found
        """
        if isinstance(output_format, str):
            try:
                output_format = OutputFormat(output_format)
            except ValueError:
                return None

        return self._generators.get(output_format)

    def create(self, output_format: OutputFormat | str, **options) -> Generator | None:
        """Create a generator instance.

        Args:
            output_format: The format to generate
            **options: Keyword arguments for the generator constructor

        Returns:
            A generator instance or None if format not found
        """
        generator_class = self.get(output_format)
        if generator_class is None:
            return None
        return generator_class(**options)

    def list_formats(self) -> list[OutputFormat]:
        """List all registered output formats."""
        return list(self._generators.keys())

    def __contains__(self, output_format: OutputFormat | str) -> bool:
        return self.get(output_format) is not None
