"""Markdown chunkers: the regex-based legacy chunker and the AST chunker."""

from mdchunk.chunking.ast_chunker import AstChunker
from mdchunk.chunking.base import (
    DocumentChunker,
    chunk_directory,
    create_chunker,
    list_markdown_files,
    load_markdown_documents,
)
from mdchunk.chunking.legacy_chunker import LegacyChunker
from mdchunk.chunking.markdown_ast import (
    MarkdownNode,
    Section,
    extract_heading_text,
    extract_sections,
    parse_markdown,
)

__all__ = [
    "AstChunker",
    "DocumentChunker",
    "LegacyChunker",
    "MarkdownNode",
    "Section",
    "chunk_directory",
    "create_chunker",
    "extract_heading_text",
    "extract_sections",
    "list_markdown_files",
    "load_markdown_documents",
    "parse_markdown",
]
