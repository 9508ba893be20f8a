"""CLI command exporting chunk files and a JSON manifest."""

import click

from mdchunk.cli.commands.options import chunking_options, handle_errors, resolve_config
from mdchunk.lib.exporter import export_chunks
from mdchunk.lib.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@click.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.argument("output_dir", type=click.Path(file_okay=False))
@click.option(
    "--raw-base-url",
    envvar="RAW_BASE_URL",
    default=None,
    help="Base URL for raw-content links in chunks.json (env: RAW_BASE_URL)",
)
@chunking_options
def export(
    directory: str,
    output_dir: str,
    raw_base_url: str | None,
    config_file: str | None,
    mode: str | None,
    chunk_size: int | None,
    chunk_overlap: int | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Write DIRECTORY's documents and chunks into OUTPUT_DIR.

    \b
    OUTPUT_DIR receives:
        documents/             copies of the source documents
        chunks/<doc>.<n>.md    one file per chunk
        chunks.json            manifest with neighbour links
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_errors():
        config = resolve_config(config_file, mode, chunk_size, chunk_overlap)
        manifest = export_chunks(directory, output_dir, config, raw_base_url)
        click.echo(
            f"Exported {len(manifest.entries)} chunks from "
            f"{manifest.document_count} documents to {output_dir}"
        )
