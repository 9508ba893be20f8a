"""Chunking configuration model.

The configuration is resolved once at process start (see
``mdchunk.config.loader``) and passed explicitly to the chunker factory.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mdchunk.config.defaults import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CHUNKING_MODE,
)

logger = logging.getLogger(__name__)

ChunkingMode = Literal["legacy", "ast"]


def fallback_overlap(chunk_size: int) -> int:
    """Overlap used when the configured one does not fit the chunk size."""
    return min(DEFAULT_CHUNK_OVERLAP, chunk_size // 2)


class ChunkingConfig(BaseModel):
    """Immutable chunking settings shared by both chunker implementations.

    Attributes:
        mode: ``legacy`` for the regex chunker, ``ast`` for the tree chunker
        chunk_size: Target maximum content length in characters
        chunk_overlap: Maximum length of carried-over trailing context

    An overlap that is not strictly smaller than the chunk size is not an
    error: it is replaced by ``min(150, chunk_size // 2)`` and a warning is
    logged.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: ChunkingMode = Field(DEFAULT_CHUNKING_MODE, description="Chunker variant")
    chunk_size: int = Field(
        DEFAULT_CHUNK_SIZE, gt=0, description="Target chunk size in characters"
    )
    chunk_overlap: int = Field(
        DEFAULT_CHUNK_OVERLAP, ge=0, description="Overlap bound in characters"
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_overlap(cls, data: Any) -> Any:
        """Replace an overlap that is not smaller than the chunk size."""
        if not isinstance(data, dict):
            return data

        chunk_size = data.get("chunk_size", DEFAULT_CHUNK_SIZE)
        chunk_overlap = data.get("chunk_overlap", DEFAULT_CHUNK_OVERLAP)
        if not isinstance(chunk_size, int) or not isinstance(chunk_overlap, int):
            return data
        if chunk_size <= 0:
            # Field validation reports this one
            return data

        if chunk_overlap >= chunk_size:
            replacement = fallback_overlap(chunk_size)
            logger.warning(
                f"chunk_overlap ({chunk_overlap}) must be less than chunk_size "
                f"({chunk_size}). Using overlap of {replacement}."
            )
            data = {**data, "chunk_overlap": replacement}
        return data
