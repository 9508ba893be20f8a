"""Chunk models produced by the legacy and AST chunkers.

A chunk is the unit handed to the storage collaborator: a bounded piece of
markdown text plus the heading context and content classification needed to
filter and display it after retrieval.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChunkType(str, Enum):
    """Dominant content kind of a chunk.

    Attributes:
        TEXT: Prose paragraphs, blockquotes, thematic breaks, raw HTML
        CODE: A fenced code block
        LIST: An ordered or unordered list
        TABLE: A pipe table
    """

    TEXT = "text"
    CODE = "code"
    LIST = "list"
    TABLE = "table"


class ChunkMetadata(BaseModel):
    """Structural context of a chunk.

    Attributes:
        header_hierarchy: Ancestor heading texts from root to immediate parent
        section: Deepest heading text in the hierarchy, if any
        chunk_type: Dominant content kind
        language: Fence language tag, only set for code chunks
        ast_node_types: Sorted distinct node kinds (AST chunker only)
    """

    model_config = ConfigDict(extra="forbid")

    header_hierarchy: list[str] = Field(
        default_factory=list, description="Ancestor heading texts, root first"
    )
    section: str | None = Field(None, description="Deepest heading text")
    chunk_type: ChunkType = Field(ChunkType.TEXT, description="Dominant content kind")
    language: str | None = Field(None, description="Code fence language tag")
    ast_node_types: list[str] | None = Field(
        None, description="Distinct structural node kinds in the chunk"
    )

    @field_validator("header_hierarchy")
    @classmethod
    def drop_empty_headings(cls, v: list[str]) -> list[str]:
        """Remove empty heading entries so the hierarchy has no holes."""
        return [heading for heading in v if heading]


class Chunk(BaseModel):
    """A bounded text segment with metadata.

    Example:
        >>> chunk = Chunk(
        ...     id="guide.md-chunk-0",
        ...     content="# Guide\\n\\nInstall the package first.",
        ...     source_file="guide.md",
        ...     chunk_index=0,
        ...     metadata=ChunkMetadata(header_hierarchy=["Guide"], section="Guide"),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Deterministic id: <file>-chunk-<index>")
    content: str = Field(..., description="Trimmed chunk text")
    source_file: str = Field(..., description="Base name of the source document")
    chunk_index: int = Field(..., ge=0, description="Zero-based index in the document")
    metadata: ChunkMetadata | None = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Ensure content is trimmed and not empty."""
        v = v.strip()
        if not v:
            raise ValueError("Chunk content cannot be empty")
        return v

    @staticmethod
    def make_id(source_file: str, chunk_index: int) -> str:
        """Build the chunk id for a source file and index."""
        return f"{source_file}-chunk-{chunk_index}"

    @property
    def chunk_type(self) -> ChunkType:
        """Chunk type, ``text`` when no metadata is attached."""
        return self.metadata.chunk_type if self.metadata else ChunkType.TEXT

    def to_record_dict(self) -> dict[str, Any]:
        """Convert to a flat record for vector store insertion.

        Vector stores expect scalar metadata values, so list fields are joined
        into strings and missing values become empty strings.

        Returns:
            Dictionary with ``id``, ``content`` and a flat ``metadata`` mapping.

        Example:
            >>> chunk = Chunk(
            ...     id="doc.md-chunk-0",
            ...     content="Hello",
            ...     source_file="doc.md",
            ...     chunk_index=0,
            ...     metadata=ChunkMetadata(header_hierarchy=["Ch1", "Sec1"]),
            ... )
            >>> chunk.to_record_dict()["metadata"]["headerHierarchy"]
            'Ch1 > Sec1'
        """
        metadata = self.metadata or ChunkMetadata()
        record_metadata: dict[str, Any] = {
            "sourceFile": self.source_file,
            "chunkIndex": self.chunk_index,
            "headerHierarchy": " > ".join(metadata.header_hierarchy),
            "section": metadata.section or "",
            "chunkType": metadata.chunk_type.value,
            "language": metadata.language or "",
        }
        if metadata.ast_node_types is not None:
            record_metadata["astNodeTypes"] = ",".join(metadata.ast_node_types)

        return {
            "id": self.id,
            "content": self.content,
            "metadata": record_metadata,
        }
