"""Entry point for the mdchunk command-line tool."""

import click

from mdchunk import __version__
from mdchunk.cli.commands.chunk import chunk
from mdchunk.cli.commands.compare import compare
from mdchunk.cli.commands.export import export


@click.group()
@click.version_option(__version__, prog_name="mdchunk")
def main() -> None:
    """mdchunk - markdown-aware document chunking.

    Split markdown documents into bounded, overlapping chunks that keep
    headings, code blocks, lists and tables intact.

    \b
    Configuration priority (highest first):
        CLI flags, --config YAML file, environment
        (CHUNKING_MODE, CHUNK_SIZE, CHUNK_OVERLAP), defaults
    """
    pass


main.add_command(chunk)
main.add_command(compare)
main.add_command(export)


if __name__ == "__main__":
    main()
