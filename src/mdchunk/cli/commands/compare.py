"""CLI command comparing the legacy and AST chunkers on the same documents."""

import click

from mdchunk.cli.commands.options import chunking_options, handle_errors, resolve_config
from mdchunk.lib.compare import compare_chunkers, render_comparison_report
from mdchunk.lib.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@click.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.option(
    "--samples",
    type=click.IntRange(min=0),
    default=3,
    show_default=True,
    help="Number of leading chunks to show per file",
)
@chunking_options
def compare(
    directory: str,
    samples: int,
    config_file: str | None,
    mode: str | None,
    chunk_size: int | None,
    chunk_overlap: int | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Compare legacy and AST chunking of DIRECTORY.

    Both chunkers run with the same chunk size and overlap. The --mode
    option is accepted for symmetry with the other commands but has no
    effect here.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_errors():
        config = resolve_config(config_file, mode, chunk_size, chunk_overlap)
        report = compare_chunkers(
            directory,
            chunk_size=config.chunk_size,
            chunk_overlap=config.chunk_overlap,
            samples=samples,
        )
        click.echo(render_comparison_report(report))
