"""Tests for the schema-bridge CLI.

Tests cover:
- to-json / to-zod / convert commands, files and stdin
- reindent, inspect and init-config
- Global options and error handling
"""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from schema_bridge import __version__
from schema_bridge.cli.main import cli


FIXTURES_DIR = Path(__file__).parent / "fixtures"
TIKTOK_SOURCE = FIXTURES_DIR / "tiktok_post.ts"

USER_SOURCE = """import { z } from 'zod';

export const UserSchema = z.object({
  name: z.string().describe("Display name"),
  age: z.number().optional(),
});
"""

USER_DOCUMENT = """{
  "type": "object",
  "properties": {
    // Display name
    "name": {"type": "string", "description": "Display name"},
    "age": {"type": "number", "optional": true},
  }
}
"""


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "user.ts"
    path.write_text(USER_SOURCE)
    return path


@pytest.fixture
def document_file(tmp_path):
    path = tmp_path / "user.jsonc"
    path.write_text(USER_DOCUMENT)
    return path


# =============================================================================
# Conversion Commands
# =============================================================================

class TestToJson:
    """Tests for the to-json command."""

    def test_from_file(self, runner, source_file):
        result = runner.invoke(cli, ["to-json", str(source_file)])

        assert result.exit_code == 0
        assert '"type": "object"' in result.output
        assert "// Display name" in result.output

    def test_no_comments(self, runner, source_file):
        result = runner.invoke(cli, ["to-json", str(source_file), "--no-comments"])

        assert result.exit_code == 0
        assert "//" not in result.output

    def test_from_stdin(self, runner):
        result = runner.invoke(cli, ["to-json", "-"], input="z.string()")

        assert result.exit_code == 0
        assert '"type": "string"' in result.output

    def test_output_file(self, runner, source_file, tmp_path):
        output = tmp_path / "user.jsonc"
        result = runner.invoke(cli, ["to-json", str(source_file), "-o", str(output)])

        assert result.exit_code == 0
        assert '"name"' in output.read_text()

    def test_example_source(self, runner):
        result = runner.invoke(cli, ["to-json", str(TIKTOK_SOURCE)])

        assert result.exit_code == 0
        assert "// Complete analysis schema for a TikTok image post" in result.output

    def test_unrecognized_source(self, runner):
        result = runner.invoke(cli, ["to-json", "-"], input="hello world")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["to-json", str(tmp_path / "missing.ts")])
        assert result.exit_code != 0


class TestToZod:
    """Tests for the to-zod command."""

    def test_from_file(self, runner, document_file):
        result = runner.invoke(cli, ["to-zod", str(document_file)])

        assert result.exit_code == 0
        assert "z.object({\n" in result.output
        assert 'name: z.string().description("Display name")' in result.output
        assert "age: z.number().optional()" in result.output

    def test_no_reindent(self, runner, document_file):
        result = runner.invoke(cli, ["to-zod", str(document_file), "--no-reindent"])

        assert result.exit_code == 0
        assert "z.object({name: " in result.output

    def test_malformed_document(self, runner):
        result = runner.invoke(cli, ["to-zod", "-"], input='{\n  "type": [1, 2\n}')

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Line 3, column 1" in result.output


class TestConvert:
    """Tests for the convert command."""

    def test_detects_source(self, runner, source_file):
        result = runner.invoke(cli, ["convert", str(source_file)])

        assert result.exit_code == 0
        assert '"properties"' in result.output

    def test_detects_document(self, runner, document_file):
        result = runner.invoke(cli, ["convert", str(document_file)])

        assert result.exit_code == 0
        assert result.output.startswith("z.object(")

    def test_explicit_direction(self, runner):
        result = runner.invoke(
            cli,
            ["convert", "-", "--direction", "document-to-source"],
            input='{"type": "array", "items": {"type": "number"}}',
        )

        assert result.exit_code == 0
        assert result.output.strip() == "z.array(z.number())"


# =============================================================================
# Tooling Commands
# =============================================================================

class TestReindent:
    """Tests for the reindent command."""

    def test_reindent(self, runner):
        result = runner.invoke(cli, ["reindent", "-"], input="z.object({a: z.string()})\n")

        assert result.exit_code == 0
        assert result.output == "z.object({\n  a: z.string()\n})\n"

    def test_indent_option(self, runner):
        result = runner.invoke(cli, ["reindent", "-", "--indent", "4"], input="z.object({a: z.string()})")
        assert "\n    a: z.string()\n" in result.output


class TestInspect:
    """Tests for the inspect command."""

    def test_inspect_source(self, runner, source_file):
        result = runner.invoke(cli, ["inspect", str(source_file)])

        assert result.exit_code == 0
        assert "$.name" in result.output
        assert "optional" in result.output

    def test_inspect_document(self, runner, document_file):
        result = runner.invoke(cli, ["inspect", str(document_file)])

        assert result.exit_code == 0
        assert "$.age" in result.output

    def test_inspect_error(self, runner):
        result = runner.invoke(cli, ["inspect", "-"], input="nothing")
        assert result.exit_code == 1


class TestInitConfig:
    """Tests for the init-config command."""

    def test_writes_defaults(self, runner, tmp_path):
        output = tmp_path / "schema-bridge.yaml"
        result = runner.invoke(cli, ["init-config", "-o", str(output)])

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text())
        assert data["indent"] == 2
        assert data["include_comments"] is True


# =============================================================================
# Global Options
# =============================================================================

class TestGlobalOptions:
    """Tests for options on the command group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_file(self, runner, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("indent: 4\ninclude_comments: false\n")

        result = runner.invoke(cli, ["-c", str(config), "to-json", "-"], input='z.string().describe("x")')

        assert result.exit_code == 0
        assert '\n    "type": "string"' in result.output
        assert "//" not in result.output

    def test_invalid_config_file(self, runner, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("indent: 99\n")

        result = runner.invoke(cli, ["-c", str(config), "to-json", "-"], input="z.string()")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_verbose(self, runner):
        result = runner.invoke(cli, ["-v", "to-json", "-"], input="z.string()")
        assert result.exit_code == 0
