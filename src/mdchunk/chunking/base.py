"""Chunker contract, factory and directory loading."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from mdchunk.lib.errors import DocumentLoadError
from mdchunk.models.chunk import Chunk
from mdchunk.models.config import ChunkingConfig

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = ".md"


class DocumentChunker(Protocol):
    """Anything that turns markdown documents into chunks."""

    chunk_size: int
    chunk_overlap: int

    def chunk_markdown(self, markdown: str, source_file: str) -> list[Chunk]:
        """Chunk a single markdown document."""
        ...

    def chunk_documents(self, directory: str | Path) -> list[Chunk]:
        """Chunk every markdown document of a directory."""
        ...


def create_chunker(config: ChunkingConfig) -> DocumentChunker:
    """Create the chunker selected by ``config.mode``."""
    if config.mode == "ast":
        from mdchunk.chunking.ast_chunker import AstChunker

        return AstChunker(config.chunk_size, config.chunk_overlap)

    from mdchunk.chunking.legacy_chunker import LegacyChunker

    return LegacyChunker(config.chunk_size, config.chunk_overlap)


def list_markdown_files(directory: str | Path) -> list[Path]:
    """List the ``.md`` files directly inside a directory.

    Args:
        directory: Directory to scan.

    Returns:
        Markdown file paths sorted by file name, so runs are reproducible
        across platforms.

    Raises:
        DocumentLoadError: If the directory does not exist or is not a directory.
    """
    path = Path(directory)
    if not path.exists():
        raise DocumentLoadError(str(path), "Directory does not exist")
    if not path.is_dir():
        raise DocumentLoadError(str(path), "Path is not a directory")

    return sorted(
        (
            entry
            for entry in path.iterdir()
            if entry.is_file() and entry.suffix == MARKDOWN_EXTENSION
        ),
        key=lambda entry: entry.name,
    )


def load_markdown_documents(directory: str | Path) -> Iterator[tuple[str, str]]:
    """Yield ``(file_name, text)`` for each markdown file, read as UTF-8.

    Raises:
        DocumentLoadError: If the directory is missing or a file is unreadable.
    """
    for file_path in list_markdown_files(directory):
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(str(file_path), f"Cannot read file: {e}") from e
        yield file_path.name, text


def chunk_directory(chunker: DocumentChunker, directory: str | Path) -> list[Chunk]:
    """Chunk all markdown documents of a directory with one chunker.

    Chunks are concatenated in file order. A failure on any document
    propagates; no partial result is returned.

    Args:
        chunker: Chunker to apply to each document.
        directory: Directory holding the ``.md`` files.

    Returns:
        All chunks of all documents.
    """
    chunks: list[Chunk] = []
    document_count = 0
    for file_name, text in load_markdown_documents(directory):
        chunks.extend(chunker.chunk_markdown(text, file_name))
        document_count += 1

    logger.info(
        f"Chunked {document_count} documents into {len(chunks)} chunks "
        f"({type(chunker).__name__})"
    )
    return chunks
