"""mdchunk - markdown-aware document chunking for embedding and retrieval.

Two chunkers share one configuration and one output shape:

- LegacyChunker: regex-based text scanning
- AstChunker: structure-aware chunking on a parsed block tree

Both keep heading context and never split fenced code blocks.
"""

from mdchunk.chunking import AstChunker, LegacyChunker, create_chunker
from mdchunk.config.loader import load_chunking_config
from mdchunk.lib.errors import ConfigError, MdChunkError, ParseError
from mdchunk.models import Chunk, ChunkingConfig, ChunkMetadata, ChunkType

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AstChunker",
    "Chunk",
    "ChunkMetadata",
    "ChunkType",
    "ChunkingConfig",
    "ConfigError",
    "LegacyChunker",
    "MdChunkError",
    "ParseError",
    "create_chunker",
    "load_chunking_config",
]
