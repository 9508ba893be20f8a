"""Unit tests for the 'mdchunk compare' command."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from mdchunk.cli.main import main


@pytest.mark.unit
class TestCompareCommand:
    """Tests for the comparison report command."""

    def test_report_sections(self, cli_runner: CliRunner, documents_dir: Path) -> None:
        """Test the report renders every section."""
        result = cli_runner.invoke(main, ["compare", str(documents_dir), "-q"])

        assert result.exit_code == 0, result.output
        assert "=== Overall Summary ===" in result.output
        assert "Legacy Chunker:" in result.output
        assert "AST Chunker:" in result.output
        assert "=== AST-Specific Information ===" in result.output

    def test_settings_shown(self, cli_runner: CliRunner, documents_dir: Path) -> None:
        """Test chunk size and overlap flags reach both chunkers."""
        result = cli_runner.invoke(
            main,
            [
                "compare",
                str(documents_dir),
                "--chunk-size",
                "300",
                "--chunk-overlap",
                "50",
                "--samples",
                "1",
                "-q",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Chunk Size: 300 characters" in result.output
        assert "Chunk Overlap: 50 characters" in result.output
        assert "Sample Chunks (showing first 1):" in result.output

    def test_mode_is_ignored(self, cli_runner: CliRunner, documents_dir: Path) -> None:
        """Test --mode is accepted and both chunkers still run."""
        result = cli_runner.invoke(
            main, ["compare", str(documents_dir), "--mode", "ast", "-q"]
        )

        assert result.exit_code == 0, result.output
        assert "Legacy Chunker:" in result.output

    def test_missing_directory(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        """Test a missing directory exits with code 2."""
        result = cli_runner.invoke(main, ["compare", str(temp_dir / "nope"), "-q"])
        assert result.exit_code == 2
