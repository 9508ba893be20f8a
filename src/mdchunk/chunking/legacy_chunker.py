"""Line-oriented markdown chunker.

This chunker never builds a parse tree. It scans raw text with regular
expressions:

- Split into sections at ``#``-style heading lines, tracking the hierarchy
- Carve fenced code blocks out of each section as standalone chunks
- Classify the remaining text as list, table or prose
- Pack paragraphs (and, for long paragraphs, sentences) up to ``chunk_size``
- Carry the trailing 1-2 sentences of each packed chunk into the next one

It is deliberately simpler than ``AstChunker`` so that the two can be compared
on the same documents.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from mdchunk.chunking.base import chunk_directory
from mdchunk.chunking.hierarchy import HeadingStack
from mdchunk.chunking.overlap import (
    extract_sentence_overlap,
    prepend_overlap,
    split_sentences,
)
from mdchunk.config.defaults import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE
from mdchunk.lib.logging_config import get_logger
from mdchunk.models.chunk import Chunk, ChunkMetadata, ChunkType

logger = get_logger(__name__)


@dataclass
class _RawSection:
    """Raw text of one heading scope.

    Attributes:
        headings: Heading hierarchy at the point the section starts.
        content: Lines between this heading and the next one.
    """

    headings: list[str]
    content: str


@dataclass
class _Piece:
    """Chunk text before ids and metadata are attached."""

    content: str
    chunk_type: ChunkType
    language: str | None = None


class LegacyChunker:
    """Regex-based markdown chunker.

    Attributes:
        chunk_size: Target maximum chunk length in characters.
        chunk_overlap: Maximum length of carried-over trailing sentences.

    Example:
        >>> chunker = LegacyChunker(chunk_size=1000, chunk_overlap=150)
        >>> chunks = chunker.chunk_markdown(markdown_text, "guide.md")
        >>> [c.metadata.chunk_type for c in chunks]
    """

    HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
    CODE_BLOCK_PATTERN = re.compile(r"```([^\n]*)\n(.*?)```", re.DOTALL)
    PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
    LIST_ITEM_PATTERN = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+")

    # Filler text next to a code block must be longer than this to be kept
    MIN_TEXT_LENGTH = 50
    LIST_LINE_RATIO = 0.5
    MIN_TABLE_LINES = 3

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        """Initialize the legacy chunker.

        Args:
            chunk_size: Target maximum chunk length in characters.
            chunk_overlap: Maximum overlap length in characters.

        Raises:
            ValueError: If chunk_size is not positive or chunk_overlap is negative.
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap cannot be negative")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def chunk_documents(self, directory: str | Path) -> list[Chunk]:
        """Chunk every ``.md`` file of a directory, in sorted name order."""
        return chunk_directory(self, directory)

    def chunk_markdown(self, markdown: str, source_file: str) -> list[Chunk]:
        """Chunk a markdown string.

        Args:
            markdown: Markdown text of one document.
            source_file: Document name used for ids and metadata.

        Returns:
            Chunks in document order with contiguous indices from 0.
        """
        chunks: list[Chunk] = []
        for section in self._split_sections(markdown):
            header_hierarchy = [h for h in section.headings if h]
            for piece in self._chunk_section(section.content):
                chunk_index = len(chunks)
                chunks.append(
                    Chunk(
                        id=Chunk.make_id(source_file, chunk_index),
                        content=piece.content,
                        source_file=source_file,
                        chunk_index=chunk_index,
                        metadata=ChunkMetadata(
                            header_hierarchy=header_hierarchy,
                            section=header_hierarchy[-1] if header_hierarchy else None,
                            chunk_type=piece.chunk_type,
                            language=piece.language,
                        ),
                    )
                )

        logger.debug(f"Legacy chunker produced {len(chunks)} chunks for {source_file}")
        return chunks

    def _split_sections(self, markdown: str) -> list[_RawSection]:
        """Split raw text into one section per heading line.

        Heading-looking lines inside balanced fenced code blocks are kept as
        content. An unmatched fence is ordinary text and hides nothing.

        Args:
            markdown: Raw document text.

        Returns:
            Sections with non-blank content, in document order.
        """
        sections: list[_RawSection] = []
        stack = HeadingStack()
        lines: list[str] = []
        text = markdown.replace("\r\n", "\n")
        code_ranges = self._get_code_block_ranges(text)
        position = 0

        for line in text.split("\n"):
            in_code = self._is_in_code_block(position, code_ranges)
            position += len(line) + 1

            match = None if in_code else self.HEADING_PATTERN.match(line)
            if match:
                sections.append(_RawSection(stack.hierarchy(), "\n".join(lines)))
                lines = []
                stack.push(len(match.group(1)), match.group(2).strip())
            else:
                lines.append(line)

        sections.append(_RawSection(stack.hierarchy(), "\n".join(lines)))
        return [section for section in sections if section.content.strip()]

    def _get_code_block_ranges(self, text: str) -> list[tuple[int, int]]:
        """Get the start and end positions of all balanced code blocks."""
        return [match.span() for match in self.CODE_BLOCK_PATTERN.finditer(text)]

    @staticmethod
    def _is_in_code_block(position: int, code_ranges: list[tuple[int, int]]) -> bool:
        """Check if a character position falls inside a code block."""
        return any(start <= position < end for start, end in code_ranges)

    def _chunk_section(self, content: str) -> list[_Piece]:
        """Carve out code blocks, then chunk the text around them.

        Args:
            content: Raw section content.

        Returns:
            Chunk pieces in document order.
        """
        code_blocks = list(self.CODE_BLOCK_PATTERN.finditer(content))
        if not code_blocks:
            return self._chunk_text(content)

        pieces: list[_Piece] = []
        position = 0
        for match in code_blocks:
            pieces.extend(self._chunk_filler(content[position : match.start()]))
            tag = match.group(1).strip()
            pieces.append(
                _Piece(
                    content=match.group(0).strip(),
                    chunk_type=ChunkType.CODE,
                    language=tag.split()[0] if tag else "text",
                )
            )
            position = match.end()
        pieces.extend(self._chunk_filler(content[position:]))
        return pieces

    def _chunk_filler(self, text: str) -> list[_Piece]:
        """Chunk text next to a code block, dropping short filler."""
        if len(text.strip()) <= self.MIN_TEXT_LENGTH:
            return []
        return self._chunk_text(text)

    def _chunk_text(self, text: str) -> list[_Piece]:
        """Chunk non-code text according to its detected content type."""
        text = text.strip()
        if not text:
            return []

        chunk_type = self.detect_content_type(text)
        if chunk_type in (ChunkType.LIST, ChunkType.TABLE) and len(text) <= self.chunk_size:
            return [_Piece(content=text, chunk_type=chunk_type)]

        return [_Piece(content=packed, chunk_type=chunk_type) for packed in self._pack(text)]

    def detect_content_type(self, text: str) -> ChunkType:
        """Classify non-code text as list, table or prose.

        A text is a list when at least half of its non-blank lines start with a
        bullet or number marker, and a table when more than two lines contain a
        pipe character.

        Args:
            text: Text to classify.

        Returns:
            The detected ChunkType (never CODE).
        """
        lines = [line for line in text.split("\n") if line.strip()]
        if not lines:
            return ChunkType.TEXT

        list_lines = sum(1 for line in lines if self.LIST_ITEM_PATTERN.match(line))
        if list_lines / len(lines) >= self.LIST_LINE_RATIO:
            return ChunkType.LIST

        pipe_lines = sum(1 for line in lines if "|" in line)
        if pipe_lines >= self.MIN_TABLE_LINES:
            return ChunkType.TABLE

        return ChunkType.TEXT

    def _pack(self, text: str) -> list[str]:
        """Greedily pack paragraphs, then sentences, up to ``chunk_size``.

        Args:
            text: Stripped text to pack.

        Returns:
            Packed chunk texts; every chunk after the first starts with the
            overlap carried from its predecessor, when one fits.
        """
        paragraphs = [p.strip() for p in self.PARAGRAPH_BREAK.split(text) if p.strip()]
        packed: list[str] = []
        buffer = ""

        for paragraph in paragraphs:
            if len(paragraph) > self.chunk_size:
                for i, sentence in enumerate(split_sentences(paragraph)):
                    separator = "\n\n" if i == 0 else " "
                    buffer = self._accumulate(buffer, sentence, separator, packed)
            else:
                buffer = self._accumulate(buffer, paragraph, "\n\n", packed)

        if buffer.strip():
            packed.append(buffer.strip())
        return packed

    def _accumulate(
        self, buffer: str, piece: str, separator: str, packed: list[str]
    ) -> str:
        """Add a piece to the running buffer, flushing it when full.

        Args:
            buffer: Current buffer contents.
            piece: Paragraph or sentence to add.
            separator: Joiner between buffer and piece.
            packed: Output list that receives flushed buffers.

        Returns:
            The new buffer contents.
        """
        if not buffer:
            return piece

        candidate = f"{buffer}{separator}{piece}"
        if len(candidate) <= self.chunk_size:
            return candidate

        packed.append(buffer.strip())
        overlap = extract_sentence_overlap(buffer, self.chunk_overlap)
        return prepend_overlap(overlap, piece)
