"""Error taxonomy for schema conversions.

Failures are raised inside the core and returned as values by the
conversion engine, which never retries them.
"""

from typing import Any


class ConversionError(Exception):
    """Base class for all conversion failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
        }


class UnrecognizedSchema(ConversionError):
    """No schema declaration could be located or classified in source text."""

    GUIDANCE = (
        "Make sure you're providing a valid schema. For complex schemas with "
        "imports, ensure there is an exported schema using "
        '"export const YourSchema = ..."'
    )

    def __init__(self, message: str = "Couldn't find a valid Zod schema in the provided code"):
        super().__init__(f"{message}. {self.GUIDANCE}")


class MalformedInput(ConversionError):
    """Document text could not be decoded, even after normalization.

    Carries the decoder message together with the 1-based position of the
    failure and an excerpt of the surrounding text.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        excerpt: str | None = None,
    ):
        self.line = line
        self.column = column
        self.excerpt = excerpt
        self.reason = message

        text = message
        if line is not None and column is not None:
            text = f"{message} (line {line}, column {column})"
        if excerpt:
            text = f"{text}\n{excerpt}"
        super().__init__(text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.reason,
            "line": self.line,
            "column": self.column,
            "excerpt": self.excerpt,
        }


class InvalidSchemaDocument(ConversionError):
    """Decoded document does not have the shape of a schema document."""

    def __init__(self, message: str, path: str = "$"):
        self.path = path
        super().__init__(f"{path}: {message}")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["path"] = self.path
        return data


class UnsupportedConstruct(ConversionError):
    """A construct outside the supported vocabulary was encountered.

    Never surfaced to callers: the extractor catches it and falls back to a
    generic "accept anything" node.
    """


class ConfigError(ConversionError):
    """Settings could not be loaded."""
