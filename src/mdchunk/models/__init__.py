"""Data models for chunks and chunking configuration."""

from mdchunk.models.chunk import Chunk, ChunkMetadata, ChunkType
from mdchunk.models.config import ChunkingConfig, ChunkingMode

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ChunkType",
    "ChunkingConfig",
    "ChunkingMode",
]
