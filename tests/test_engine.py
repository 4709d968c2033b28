"""Tests for the Engine module."""

import pytest

from schema_bridge.config.base import ConverterSettings
from schema_bridge.engine.conversion_engine import (
    ConversionEngine,
    ConversionResult,
    Direction,
    convert_document_to_source,
    convert_source_to_document,
)
from schema_bridge.errors import (
    InvalidSchemaDocument,
    MalformedInput,
    UnrecognizedSchema,
)
from schema_bridge.schemas.base import SchemaKind


@pytest.fixture
def engine():
    """Create an engine with default settings."""
    return ConversionEngine()


class TestSourceToDocument:
    """Tests for source to document conversions."""

    def test_success(self, engine):
        result = engine.convert_source_to_document('z.object({ a: z.string().description("A") })')

        assert isinstance(result, ConversionResult)
        assert result.ok
        assert result.direction == Direction.SOURCE_TO_DOCUMENT
        assert result.node.kind == SchemaKind.OBJECT
        assert "// A" in result.output

    def test_comments_default_from_settings(self):
        engine = ConversionEngine(settings=ConverterSettings(include_comments=False))
        result = engine.convert_source_to_document('z.string().describe("A")')
        assert "//" not in result.output

        result = engine.convert_source_to_document('z.string().describe("A")', include_comments=True)
        assert "// A" in result.output

    def test_indent_from_settings(self):
        engine = ConversionEngine(settings=ConverterSettings(indent=4))
        result = engine.convert_source_to_document("z.string()")
        assert result.output == '{\n    "type": "string"\n}'

    def test_empty_input(self, engine):
        result = engine.convert_source_to_document("")

        assert not result.ok
        assert isinstance(result.error, UnrecognizedSchema)
        assert result.output == ""
        assert result.node is None

    def test_unrecognized(self, engine):
        result = engine.convert_source_to_document("const answer = 42;")
        assert isinstance(result.error, UnrecognizedSchema)
        assert result.output == ""

    def test_failure_logged(self, engine, caplog):
        with caplog.at_level("WARNING", logger="schema_bridge"):
            engine.convert_source_to_document("nothing to see")
        assert "conversion failed" in caplog.text


class TestDocumentToSource:
    """Tests for document to source conversions."""

    def test_success(self, engine):
        result = engine.convert_document_to_source('{"type": "array", "items": {"type": "number"}}')

        assert result.ok
        assert result.direction == Direction.DOCUMENT_TO_SOURCE
        assert result.output == "z.array(z.number())"

    def test_reindent_from_settings(self):
        document = '{"type": "object", "properties": {"a": {"type": "string"}}}'

        result = ConversionEngine().convert_document_to_source(document)
        assert result.output == "z.object({\n  a: z.string()\n})"

        flat = ConversionEngine(settings=ConverterSettings(reindent_source=False))
        assert flat.convert_document_to_source(document).output == "z.object({a: z.string()})"

    def test_malformed(self, engine):
        result = engine.convert_document_to_source('{\n  "type": [1, 2\n}')

        assert isinstance(result.error, MalformedInput)
        assert result.error.line == 3
        assert result.output == ""

    def test_invalid_document(self, engine):
        result = engine.convert_document_to_source("[1, 2]")
        assert isinstance(result.error, InvalidSchemaDocument)

    def test_unknown_type(self, engine):
        result = engine.convert_document_to_source('{"type": "record"}')
        assert result.output == "z.any()"


class TestDispatch:
    """Tests for ConversionEngine.convert and the result object."""

    def test_convert_by_name(self, engine):
        result = engine.convert("source-to-document", "z.boolean()")
        assert result.direction == Direction.SOURCE_TO_DOCUMENT
        assert '"type": "boolean"' in result.output

        result = engine.convert(Direction.DOCUMENT_TO_SOURCE, '{"type": "boolean"}')
        assert result.output == "z.boolean()"

    def test_unknown_direction(self, engine):
        with pytest.raises(ValueError):
            engine.convert("sideways", "z.string()")

    def test_result_to_dict(self, engine):
        data = engine.convert_document_to_source("[1]").to_dict()

        assert data["direction"] == "document-to-source"
        assert data["ok"] is False
        assert data["output"] == ""
        assert data["error"]["error"] == "InvalidSchemaDocument"


class TestConvenienceFunctions:
    """Tests for the module level functions."""

    def test_source_to_document(self):
        assert convert_source_to_document("z.string()") == '{\n  "type": "string"\n}'

    def test_document_to_source(self):
        assert convert_document_to_source('{"type": "number"}') == "z.number()"

    def test_errors_raised(self):
        with pytest.raises(UnrecognizedSchema):
            convert_source_to_document("")
        with pytest.raises(MalformedInput):
            convert_document_to_source("{oops")
