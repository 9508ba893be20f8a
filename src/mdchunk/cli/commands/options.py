"""Options and error handling shared by all mdchunk commands."""

import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import click

from mdchunk.config.defaults import CHUNKING_MODES
from mdchunk.config.loader import load_chunking_config
from mdchunk.lib.errors import ConfigError, DocumentLoadError, ExportError, ParseError
from mdchunk.lib.logging_config import get_logger
from mdchunk.models.config import ChunkingConfig

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_PARSE_ERROR = 3


def chunking_options(func: F) -> F:
    """Add the configuration and verbosity options to a command."""
    options = [
        click.option(
            "--config",
            "config_file",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="YAML file with a 'chunking' section",
        ),
        click.option(
            "--mode",
            type=click.Choice(CHUNKING_MODES),
            default=None,
            help="Chunker to use (overrides config file and CHUNKING_MODE)",
        ),
        click.option(
            "--chunk-size",
            type=click.IntRange(min=1),
            default=None,
            help="Target chunk size in characters (overrides CHUNK_SIZE)",
        ),
        click.option(
            "--chunk-overlap",
            type=click.IntRange(min=0),
            default=None,
            help="Maximum overlap in characters (overrides CHUNK_OVERLAP)",
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Enable verbose output with debug information",
        ),
        click.option(
            "--quiet",
            "-q",
            is_flag=True,
            help="Only show warnings and errors",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_config(
    config_file: str | None,
    mode: str | None,
    chunk_size: int | None,
    chunk_overlap: int | None,
) -> ChunkingConfig:
    """Resolve the chunking configuration from CLI flags, file and environment."""
    return load_chunking_config(
        cli_overrides={
            "mode": mode,
            "chunk_size": chunk_size,
            "chunk_overlap": chunk_overlap,
        },
        config_file=config_file,
    )


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report mdchunk errors on stderr and exit with the matching code.

    Exit codes: 2 for configuration or input errors, 3 for parse errors,
    1 for export and unexpected errors.
    """
    try:
        yield
    except (ConfigError, DocumentLoadError) as e:
        logger.error(f"Configuration error: {e}", exc_info=True)
        click.echo(f"Configuration Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except ParseError as e:
        logger.error(f"Parse error: {e}", exc_info=True)
        click.echo(f"Parse Error: {e}", err=True)
        sys.exit(EXIT_PARSE_ERROR)
    except ExportError as e:
        logger.error(f"Export error: {e}", exc_info=True)
        click.echo(f"Export Error: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(EXIT_ERROR)
