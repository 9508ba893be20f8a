"""Structure-aware markdown chunker built on the parsed block tree.

The document is parsed into block nodes, grouped into heading-scoped
sections, and each section's nodes are grouped so that structural units are
never split:

- Code blocks always form their own chunk
- Lists and tables that fit ``chunk_size`` form their own chunk
- Everything else is accumulated greedily up to ``chunk_size``

Each group is serialized back to markdown, prefixed with the overlap carried
from the previous prose group and with the section's deepest heading.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mdchunk.chunking.base import chunk_directory
from mdchunk.chunking.markdown_ast import (
    MarkdownNode,
    Section,
    extract_sections,
    parse_markdown,
)
from mdchunk.chunking.overlap import extract_sentence_overlap, prepend_overlap
from mdchunk.chunking.serializer import (
    BLOCK_SEPARATOR,
    serialize_node,
    serialize_nodes,
)
from mdchunk.config.defaults import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE
from mdchunk.models.chunk import Chunk, ChunkMetadata, ChunkType

logger = logging.getLogger(__name__)

# Node kinds that stay in a chunk of their own when they fit
_STANDALONE_TYPES = ("list", "table")


@dataclass
class NodeGroup:
    """Block nodes that will become a single chunk.

    Attributes:
        nodes: Member nodes in document order.
        atomic: True for code blocks and fitting lists/tables. Atomic groups
            neither carry overlap forward nor receive it.
        length: Serialized length estimate, including block separators.
    """

    nodes: list[MarkdownNode] = field(default_factory=list)
    atomic: bool = False
    length: int = 0

    def add(self, node: MarkdownNode, node_length: int) -> None:
        """Append a node and grow the length estimate."""
        if self.nodes:
            self.length += len(BLOCK_SEPARATOR)
        self.nodes.append(node)
        self.length += node_length


def derive_chunk_type(nodes: list[MarkdownNode]) -> ChunkType:
    """Pick the dominant kind of a group: code, then table, then list."""
    types = {node.type for node in nodes}
    if "code" in types:
        return ChunkType.CODE
    if "table" in types:
        return ChunkType.TABLE
    if "list" in types:
        return ChunkType.LIST
    return ChunkType.TEXT


def heading_prefix(headings: list[str]) -> str:
    """Render the deepest heading at the depth of the hierarchy.

    Returns an empty string when there are no headings or the deepest one
    has no text.
    """
    if not headings or not headings[-1]:
        return ""
    return f"{'#' * len(headings)} {headings[-1]}"


class AstChunker:
    """Markdown chunker that keeps code, lists and tables intact.

    Attributes:
        chunk_size: Target maximum chunk length in characters.
        chunk_overlap: Maximum length of carried-over trailing sentences.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
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
            Chunks in section order, then group order, indexed from 0.

        Raises:
            ParseError: If the markdown cannot be parsed.
        """
        root = parse_markdown(markdown, source_file)
        chunks: list[Chunk] = []
        for section in extract_sections(root):
            self._chunk_section(section, source_file, chunks)

        logger.debug(f"AST chunker produced {len(chunks)} chunks for {source_file}")
        return chunks

    def group_nodes(self, nodes: list[MarkdownNode]) -> list[NodeGroup]:
        """Group a section's nodes into chunk-sized units.

        Oversized lists and tables join the greedy accumulation but are still
        added whole, so a group holding one can exceed ``chunk_size``.

        Args:
            nodes: Section content nodes.

        Returns:
            Non-empty groups in document order.
        """
        groups: list[NodeGroup] = []
        current = NodeGroup()

        def close_current() -> None:
            nonlocal current
            if current.nodes:
                groups.append(current)
            current = NodeGroup()

        for node in nodes:
            node_length = len(serialize_node(node))

            if node.type == "code" or (
                node.type in _STANDALONE_TYPES and node_length <= self.chunk_size
            ):
                close_current()
                standalone = NodeGroup(atomic=True)
                standalone.add(node, node_length)
                groups.append(standalone)
                continue

            projected = current.length + node_length
            if current.nodes:
                projected += len(BLOCK_SEPARATOR)
            if current.nodes and projected > self.chunk_size:
                close_current()
            current.add(node, node_length)

        close_current()
        return groups

    def _chunk_section(
        self, section: Section, source_file: str, chunks: list[Chunk]
    ) -> None:
        """Append the chunks of one section to ``chunks``."""
        prefix = heading_prefix(section.headings)
        hierarchy = [heading for heading in section.headings if heading]
        carried = ""

        for group in self.group_nodes(section.nodes):
            body = serialize_nodes(group.nodes).strip()
            if not body:
                continue

            content = body if group.atomic else prepend_overlap(carried, body)
            carried = (
                "" if group.atomic else extract_sentence_overlap(body, self.chunk_overlap)
            )
            if prefix:
                content = f"{prefix}{BLOCK_SEPARATOR}{content}"

            chunk_index = len(chunks)
            chunks.append(
                Chunk(
                    id=Chunk.make_id(source_file, chunk_index),
                    content=content,
                    source_file=source_file,
                    chunk_index=chunk_index,
                    metadata=ChunkMetadata(
                        header_hierarchy=hierarchy,
                        section=hierarchy[-1] if hierarchy else None,
                        chunk_type=derive_chunk_type(group.nodes),
                        language=self._first_language(group.nodes),
                        ast_node_types=sorted({node.type for node in group.nodes}),
                    ),
                )
            )

    @staticmethod
    def _first_language(nodes: list[MarkdownNode]) -> str | None:
        for node in nodes:
            if node.type == "code":
                return node.lang
        return None
