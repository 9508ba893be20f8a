"""Export chunks as individual files plus a JSON manifest.

Layout written under the output directory::

    documents/<file>.md           full copies of the source documents
    chunks/<stem>.<index>.md      one file per chunk
    chunks.json                   manifest, one entry per chunk

Manifest entries link each chunk to its neighbours within the same document
and to the full document, so a static front-end can expand context around a
retrieved chunk. When a raw base URL is given every reference also carries a
resolvable URL.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mdchunk.chunking.base import (
    create_chunker,
    list_markdown_files,
    load_markdown_documents,
)
from mdchunk.lib.errors import ExportError
from mdchunk.lib.logging_config import get_logger
from mdchunk.models.chunk import Chunk
from mdchunk.models.config import ChunkingConfig

logger = get_logger(__name__)

DOCUMENTS_DIRNAME = "documents"
CHUNKS_DIRNAME = "chunks"
MANIFEST_FILENAME = "chunks.json"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChunkReference(_CamelModel):
    """Pointer to a neighbouring chunk file."""

    file: str
    raw_url: str | None = None
    size: int = Field(..., ge=0)


class ExportEntry(_CamelModel):
    """Manifest entry for one exported chunk."""

    id: str
    chunk_index: int = Field(..., ge=0)
    source_file: str
    chunk_file: str
    chunk_raw_url: str | None = None
    chunk_size: int = Field(..., ge=0)
    before: ChunkReference | None = None
    after: ChunkReference | None = None
    document_file: str
    document_raw_url: str | None = None
    document_size: int = Field(..., ge=0)
    section: str | None = None
    header_hierarchy: list[str] = Field(default_factory=list)
    chunk_type: str


class ExportManifest(BaseModel):
    """Result of an export run."""

    output_dir: str
    document_count: int = 0
    entries: list[ExportEntry] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize the entries as the camelCase JSON array of ``chunks.json``."""
        return json.dumps(
            [entry.model_dump(mode="json", by_alias=True) for entry in self.entries],
            indent=2,
        )


def chunk_file_name(chunk: Chunk) -> str:
    """File name of an exported chunk: ``<doc-stem>.<chunk_index>.md``."""
    return f"{Path(chunk.source_file).stem}.{chunk.chunk_index}.md"


def raw_url(raw_base_url: str | None, relative_path: str) -> str | None:
    """Join a raw-content base URL and a path inside the output tree."""
    if not raw_base_url:
        return None
    return f"{raw_base_url.rstrip('/')}/{relative_path}"


def _reference(chunk: Chunk | None, raw_base_url: str | None) -> ChunkReference | None:
    if chunk is None:
        return None
    file_name = chunk_file_name(chunk)
    return ChunkReference(
        file=file_name,
        raw_url=raw_url(raw_base_url, f"{CHUNKS_DIRNAME}/{file_name}"),
        size=len(chunk.content),
    )


def build_entries(
    chunks: list[Chunk],
    document_sizes: dict[str, int],
    raw_base_url: str | None = None,
) -> list[ExportEntry]:
    """Build manifest entries, linking neighbours from the same document.

    Args:
        chunks: Chunks of all documents, in document then index order.
        document_sizes: Size in bytes of each source document.
        raw_base_url: Optional base URL for raw-content links.

    Returns:
        One entry per chunk, in the same order.
    """
    entries: list[ExportEntry] = []
    for i, chunk in enumerate(chunks):
        before = chunks[i - 1] if i > 0 else None
        after = chunks[i + 1] if i < len(chunks) - 1 else None
        if before is not None and before.source_file != chunk.source_file:
            before = None
        if after is not None and after.source_file != chunk.source_file:
            after = None

        file_name = chunk_file_name(chunk)
        metadata = chunk.metadata
        entries.append(
            ExportEntry(
                id=chunk.id,
                chunk_index=chunk.chunk_index,
                source_file=chunk.source_file,
                chunk_file=file_name,
                chunk_raw_url=raw_url(raw_base_url, f"{CHUNKS_DIRNAME}/{file_name}"),
                chunk_size=len(chunk.content),
                before=_reference(before, raw_base_url),
                after=_reference(after, raw_base_url),
                document_file=chunk.source_file,
                document_raw_url=raw_url(
                    raw_base_url, f"{DOCUMENTS_DIRNAME}/{chunk.source_file}"
                ),
                document_size=document_sizes.get(chunk.source_file, 0),
                section=metadata.section if metadata else None,
                header_hierarchy=metadata.header_hierarchy if metadata else [],
                chunk_type=chunk.chunk_type.value,
            )
        )
    return entries


def export_chunks(
    directory: str | Path,
    output_dir: str | Path,
    config: ChunkingConfig,
    raw_base_url: str | None = None,
) -> ExportManifest:
    """Chunk a directory and write documents, chunk files and the manifest.

    Args:
        directory: Directory of markdown documents.
        output_dir: Directory to write the export into; created if missing.
        config: Chunking configuration selecting the chunker.
        raw_base_url: Optional base URL for raw-content links.

    Returns:
        The manifest that was written.

    Raises:
        DocumentLoadError: If the input directory cannot be read.
        ParseError: If a document cannot be parsed.
        ExportError: If an output file cannot be written.
    """
    output_path = Path(output_dir)
    documents_path = output_path / DOCUMENTS_DIRNAME
    chunks_path = output_path / CHUNKS_DIRNAME
    chunker = create_chunker(config)

    # Chunk everything before writing so a failing document leaves no output
    documents = list(load_markdown_documents(directory))
    chunks: list[Chunk] = []
    for file_name, text in documents:
        chunks.extend(chunker.chunk_markdown(text, file_name))

    try:
        documents_path.mkdir(parents=True, exist_ok=True)
        chunks_path.mkdir(parents=True, exist_ok=True)

        document_sizes: dict[str, int] = {}
        for file_path in list_markdown_files(directory):
            shutil.copyfile(file_path, documents_path / file_path.name)
            document_sizes[file_path.name] = file_path.stat().st_size
        logger.info(f"Copied {len(documents)} documents to {documents_path}")

        for chunk in chunks:
            (chunks_path / chunk_file_name(chunk)).write_text(
                chunk.content, encoding="utf-8"
            )
        logger.info(f"Wrote {len(chunks)} chunk files to {chunks_path}")

        manifest = ExportManifest(
            output_dir=str(output_path),
            document_count=len(documents),
            entries=build_entries(chunks, document_sizes, raw_base_url),
        )
        manifest_path = output_path / MANIFEST_FILENAME
        manifest_path.write_text(manifest.to_json(), encoding="utf-8")
    except OSError as exc:
        raise ExportError(str(output_path), str(exc)) from exc

    logger.info(f"Wrote {len(manifest.entries)} manifest entries to {manifest_path}")
    return manifest
