"""CLI command for chunking a directory of markdown documents.

Implements 'mdchunk chunk', which runs the configured chunker and prints a
summary, or writes the chunk records as JSON.
"""

import json
from pathlib import Path

import click

from mdchunk.chunking.base import create_chunker
from mdchunk.cli.commands.options import chunking_options, handle_errors, resolve_config
from mdchunk.lib.logging_config import get_logger, setup_logging
from mdchunk.lib.ui import ANSIColors, colorize
from mdchunk.models.chunk import Chunk

logger = get_logger(__name__)


def format_summary(chunks: list[Chunk]) -> str:
    """One line per chunk plus per-file and overall totals."""
    lines: list[str] = []
    per_file: dict[str, int] = {}
    for chunk in chunks:
        per_file[chunk.source_file] = per_file.get(chunk.source_file, 0) + 1
        location = " > ".join(chunk.metadata.header_hierarchy) if chunk.metadata else ""
        lines.append(
            f"{chunk.id:<40} {chunk.chunk_type.value:<6} "
            f"{len(chunk.content):>6} chars  {location}"
        )

    lines.append("")
    for source_file, count in per_file.items():
        lines.append(f"{source_file}: {count} chunks")
    lines.append(
        colorize(
            f"Total: {len(chunks)} chunks from {len(per_file)} documents",
            ANSIColors.BOLD,
        )
    )
    return "\n".join(lines)


@click.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output a text summary or JSON chunk records",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the output to this file instead of stdout",
)
@chunking_options
def chunk(
    directory: str,
    output_format: str,
    output: str | None,
    config_file: str | None,
    mode: str | None,
    chunk_size: int | None,
    chunk_overlap: int | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Split markdown documents into overlapping chunks.

    DIRECTORY is a folder of .md files; other files are ignored.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_errors():
        config = resolve_config(config_file, mode, chunk_size, chunk_overlap)
        logger.info(
            f"Chunking {directory} with the {config.mode} chunker "
            f"(chunk_size={config.chunk_size}, chunk_overlap={config.chunk_overlap})"
        )

        chunks = create_chunker(config).chunk_documents(directory)

        if output_format == "json":
            content = json.dumps(
                [chunk.to_record_dict() for chunk in chunks], indent=2
            )
        else:
            content = format_summary(chunks)

        if output:
            Path(output).write_text(content, encoding="utf-8")
            click.echo(f"Wrote {len(chunks)} chunks to {output}")
        else:
            click.echo(content)
