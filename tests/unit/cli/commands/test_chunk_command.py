"""Unit tests for the 'mdchunk chunk' command.

Tests cover:
- Text summary and JSON record output
- Writing output to a file
- Configuration from flags and a YAML file
- Exit codes (0=success, 2=configuration/input error, 3=parse error)
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mdchunk.cli.main import main
from mdchunk.lib.errors import ParseError


@pytest.mark.unit
class TestChunkOutput:
    """Tests for chunk command output formats."""

    def test_text_summary(self, cli_runner: CliRunner, documents_dir: Path) -> None:
        """Test the default summary lists chunks and totals."""
        result = cli_runner.invoke(main, ["chunk", str(documents_dir), "-q"])

        assert result.exit_code == 0, result.output
        assert "getting-started.md-chunk-0" in result.output
        assert "Total:" in result.output
        assert "from 2 documents" in result.output

    def test_json_records_ast(self, cli_runner: CliRunner, documents_dir: Path) -> None:
        """Test JSON output contains flat records with AST node types."""
        result = cli_runner.invoke(
            main,
            ["chunk", str(documents_dir), "--mode", "ast", "--format", "json", "-q"],
        )

        assert result.exit_code == 0, result.output
        records = json.loads(result.output)
        assert records
        assert records[0]["id"] == "api-reference.md-chunk-0"
        assert all("astNodeTypes" in r["metadata"] for r in records)
        assert {r["metadata"]["sourceFile"] for r in records} == {
            "api-reference.md",
            "getting-started.md",
        }

    def test_json_records_legacy(
        self, cli_runner: CliRunner, documents_dir: Path
    ) -> None:
        """Test legacy records carry no AST node types."""
        result = cli_runner.invoke(
            main, ["chunk", str(documents_dir), "--format", "json", "-q"]
        )

        assert result.exit_code == 0, result.output
        records = json.loads(result.output)
        assert all("astNodeTypes" not in r["metadata"] for r in records)

    def test_output_file(
        self, cli_runner: CliRunner, documents_dir: Path, temp_dir: Path
    ) -> None:
        """Test --output writes the records and reports the count."""
        output = temp_dir / "chunks.json"
        result = cli_runner.invoke(
            main,
            [
                "chunk",
                str(documents_dir),
                "--format",
                "json",
                "--output",
                str(output),
                "-q",
            ],
        )

        assert result.exit_code == 0, result.output
        records = json.loads(output.read_text(encoding="utf-8"))
        assert f"Wrote {len(records)} chunks to {output}" in result.output


@pytest.mark.unit
class TestChunkConfiguration:
    """Tests for configuration handling."""

    def test_config_file(
        self, cli_runner: CliRunner, documents_dir: Path, temp_dir: Path
    ) -> None:
        """Test settings are read from the YAML config file."""
        config_file = temp_dir / "mdchunk.yaml"
        config_file.write_text(
            "chunking:\n  mode: ast\n  chunk_size: 400\n", encoding="utf-8"
        )
        result = cli_runner.invoke(
            main,
            [
                "chunk",
                str(documents_dir),
                "--config",
                str(config_file),
                "--format",
                "json",
                "-q",
            ],
        )

        assert result.exit_code == 0, result.output
        assert all("astNodeTypes" in r["metadata"] for r in json.loads(result.output))

    def test_overlap_larger_than_size_is_clamped(
        self, cli_runner: CliRunner, documents_dir: Path
    ) -> None:
        """Test an invalid overlap falls back instead of failing."""
        result = cli_runner.invoke(
            main,
            [
                "chunk",
                str(documents_dir),
                "--chunk-size",
                "1000",
                "--chunk-overlap",
                "2000",
            ],
        )

        assert result.exit_code == 0, result.output

    def test_unknown_mode_rejected(
        self, cli_runner: CliRunner, documents_dir: Path
    ) -> None:
        """Test --mode only accepts known chunkers."""
        result = cli_runner.invoke(
            main, ["chunk", str(documents_dir), "--mode", "semantic"]
        )
        assert result.exit_code == 2


@pytest.mark.unit
class TestChunkErrors:
    """Tests for exit codes on failure."""

    def test_missing_directory(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        """Test a missing directory is a configuration error."""
        result = cli_runner.invoke(main, ["chunk", str(temp_dir / "missing"), "-q"])

        assert result.exit_code == 2
        assert "Configuration Error" in result.output

    def test_parse_error(self, cli_runner: CliRunner, documents_dir: Path) -> None:
        """Test a parse failure exits with code 3."""
        error = ParseError(
            "# Getting Started", ValueError("boom"), "getting-started.md"
        )
        with patch(
            "mdchunk.chunking.ast_chunker.parse_markdown", side_effect=error
        ):
            result = cli_runner.invoke(
                main, ["chunk", str(documents_dir), "--mode", "ast", "-q"]
            )

        assert result.exit_code == 3
        assert "Parse Error" in result.output

    def test_unexpected_error(
        self, cli_runner: CliRunner, documents_dir: Path
    ) -> None:
        """Test unexpected failures exit with code 1."""
        with patch(
            "mdchunk.cli.commands.chunk.create_chunker",
            side_effect=RuntimeError("kaput"),
        ):
            result = cli_runner.invoke(main, ["chunk", str(documents_dir), "-q"])

        assert result.exit_code == 1
        assert "Error: kaput" in result.output
