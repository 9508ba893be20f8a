"""Side-by-side comparison of the legacy and AST chunkers.

Both chunkers run with identical settings over the same directory. The
resulting ``ComparisonReport`` holds overall totals, per-file statistics with
a few sample chunks each, the chunk-type distribution and the structural node
kinds the AST chunker encountered. ``render_comparison_report`` turns it into
terminal text.
"""

from collections import Counter, defaultdict
from pathlib import Path

from pydantic import BaseModel, Field

from mdchunk.chunking.ast_chunker import AstChunker
from mdchunk.chunking.legacy_chunker import LegacyChunker
from mdchunk.lib.logging_config import get_logger
from mdchunk.lib.ui import ANSIColors, colorize, heading, signed
from mdchunk.models.chunk import Chunk

logger = get_logger(__name__)

SAMPLE_PREVIEW_LENGTH = 80


class ChunkSample(BaseModel):
    """Condensed view of one chunk for the report."""

    chunk_index: int
    length: int
    header_hierarchy: list[str] = Field(default_factory=list)
    section: str | None = None
    chunk_type: str
    language: str | None = None
    ast_node_types: list[str] | None = None
    preview: str

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "ChunkSample":
        """Build a sample from a chunk, flattening its content preview."""
        metadata = chunk.metadata
        return cls(
            chunk_index=chunk.chunk_index,
            length=len(chunk.content),
            header_hierarchy=metadata.header_hierarchy if metadata else [],
            section=metadata.section if metadata else None,
            chunk_type=chunk.chunk_type.value,
            language=metadata.language if metadata else None,
            ast_node_types=metadata.ast_node_types if metadata else None,
            preview=chunk.content[:SAMPLE_PREVIEW_LENGTH].replace("\n", " "),
        )


class ChunkerStats(BaseModel):
    """Chunk count and mean content length."""

    total_chunks: int = Field(0, ge=0)
    average_length: float = Field(0.0, ge=0)

    @classmethod
    def from_chunks(cls, chunks: list[Chunk]) -> "ChunkerStats":
        return cls(total_chunks=len(chunks), average_length=average_length(chunks))


class FileComparison(BaseModel):
    """Per-document statistics and leading samples from both chunkers."""

    source_file: str
    legacy: ChunkerStats
    ast: ChunkerStats
    legacy_samples: list[ChunkSample] = Field(default_factory=list)
    ast_samples: list[ChunkSample] = Field(default_factory=list)


class TypeCount(BaseModel):
    """Number of chunks of one type produced by each chunker."""

    chunk_type: str
    legacy: int = 0
    ast: int = 0

    @property
    def difference(self) -> int:
        return self.ast - self.legacy


class ComparisonReport(BaseModel):
    """Full comparison of the two chunkers over one directory.

    Attributes:
        directory: Directory that was chunked
        chunk_size: Chunk size used by both chunkers
        chunk_overlap: Overlap used by both chunkers
        legacy: Overall legacy chunker statistics
        ast: Overall AST chunker statistics
        files: Per-file comparisons, sorted by file name
        type_distribution: Chunk counts per type, sorted by type name
        ast_node_types: Sorted distinct node kinds seen in AST chunks
    """

    directory: str
    chunk_size: int
    chunk_overlap: int
    legacy: ChunkerStats
    ast: ChunkerStats
    files: list[FileComparison] = Field(default_factory=list)
    type_distribution: list[TypeCount] = Field(default_factory=list)
    ast_node_types: list[str] = Field(default_factory=list)

    @property
    def difference(self) -> int:
        """AST chunk count minus legacy chunk count."""
        return self.ast.total_chunks - self.legacy.total_chunks

    @property
    def difference_percentage(self) -> float | None:
        """Relative difference against the legacy count, None if it is zero."""
        if self.legacy.total_chunks == 0:
            return None
        return self.difference / self.legacy.total_chunks * 100


def average_length(chunks: list[Chunk]) -> float:
    """Mean content length, 0 for an empty list."""
    if not chunks:
        return 0.0
    return sum(len(chunk.content) for chunk in chunks) / len(chunks)


def group_by_file(chunks: list[Chunk]) -> dict[str, list[Chunk]]:
    """Group chunks by source file, keeping chunk order."""
    by_file: dict[str, list[Chunk]] = defaultdict(list)
    for chunk in chunks:
        by_file[chunk.source_file].append(chunk)
    return dict(by_file)


def compare_chunkers(
    directory: str | Path,
    chunk_size: int,
    chunk_overlap: int,
    samples: int = 3,
) -> ComparisonReport:
    """Run both chunkers over a directory and collect comparison statistics.

    Args:
        directory: Directory of markdown documents.
        chunk_size: Chunk size for both chunkers.
        chunk_overlap: Overlap bound for both chunkers.
        samples: Number of leading chunks per file to keep as samples.

    Returns:
        The comparison report.

    Raises:
        DocumentLoadError: If the directory cannot be read.
        ParseError: If the AST chunker cannot parse a document.
    """
    logger.info(
        f"Comparing chunkers on {directory} "
        f"(chunk_size={chunk_size}, chunk_overlap={chunk_overlap})"
    )
    legacy_chunks = LegacyChunker(chunk_size, chunk_overlap).chunk_documents(directory)
    ast_chunks = AstChunker(chunk_size, chunk_overlap).chunk_documents(directory)

    legacy_by_file = group_by_file(legacy_chunks)
    ast_by_file = group_by_file(ast_chunks)
    files = [
        FileComparison(
            source_file=source_file,
            legacy=ChunkerStats.from_chunks(legacy_by_file.get(source_file, [])),
            ast=ChunkerStats.from_chunks(ast_by_file.get(source_file, [])),
            legacy_samples=[
                ChunkSample.from_chunk(chunk)
                for chunk in legacy_by_file.get(source_file, [])[:samples]
            ],
            ast_samples=[
                ChunkSample.from_chunk(chunk)
                for chunk in ast_by_file.get(source_file, [])[:samples]
            ],
        )
        for source_file in sorted(set(legacy_by_file) | set(ast_by_file))
    ]

    legacy_types = Counter(chunk.chunk_type.value for chunk in legacy_chunks)
    ast_types = Counter(chunk.chunk_type.value for chunk in ast_chunks)
    type_distribution = [
        TypeCount(
            chunk_type=chunk_type,
            legacy=legacy_types.get(chunk_type, 0),
            ast=ast_types.get(chunk_type, 0),
        )
        for chunk_type in sorted(set(legacy_types) | set(ast_types))
    ]

    node_types: set[str] = set()
    for chunk in ast_chunks:
        if chunk.metadata and chunk.metadata.ast_node_types:
            node_types.update(chunk.metadata.ast_node_types)

    return ComparisonReport(
        directory=str(directory),
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        legacy=ChunkerStats.from_chunks(legacy_chunks),
        ast=ChunkerStats.from_chunks(ast_chunks),
        files=files,
        type_distribution=type_distribution,
        ast_node_types=sorted(node_types),
    )


def _render_sample(
    label: str, sample: ChunkSample | None, index: int, show_node_types: bool
) -> list[str]:
    if sample is None:
        return [f"   {label}: (no chunk at index {index})"]

    lines = [
        f"   {label}:",
        f"     Length: {sample.length} chars",
        f"     Header Hierarchy: {' > '.join(sample.header_hierarchy) or '(none)'}",
        f"     Section: {sample.section or 'N/A'}",
        f"     Chunk Type: {sample.chunk_type}",
    ]
    if show_node_types:
        lines.append(f"     AST Node Types: {', '.join(sample.ast_node_types or [])}")
    if sample.language:
        lines.append(f"     Language: {sample.language}")
    lines.append(f"     Content: {sample.preview}...")
    return lines


def render_comparison_report(
    report: ComparisonReport, force_tty: bool | None = None
) -> str:
    """Render a comparison report as terminal text.

    Args:
        report: Report to render.
        force_tty: Override TTY detection for colors (None auto-detects).

    Returns:
        Multi-line report text.
    """
    lines: list[str] = [
        heading("Chunker Comparison: Legacy vs AST", force_tty),
        "",
        "Configuration:",
        f"  Chunk Size: {report.chunk_size} characters",
        f"  Chunk Overlap: {report.chunk_overlap} characters",
        f"  Documents Path: {report.directory}",
        "",
        heading("Overall Summary", force_tty),
        "",
        f"Legacy Chunker: {report.legacy.total_chunks} total chunks",
        f"AST Chunker:    {report.ast.total_chunks} total chunks",
    ]

    difference = f"Difference:     {signed(report.difference, force_tty)} chunks"
    if report.difference_percentage is not None:
        difference += f" ({report.difference_percentage:.1f}%)"
    lines.extend(
        [
            difference,
            "",
            "Average Chunk Length:",
            f"  Legacy: {report.legacy.average_length:.0f} characters",
            f"  AST:    {report.ast.average_length:.0f} characters",
            "",
            heading("Per-File Comparison", force_tty),
            "",
        ]
    )

    for file in report.files:
        lines.append(colorize(file.source_file, ANSIColors.BOLD, force_tty))
        lines.append(
            f"   Legacy: {file.legacy.total_chunks} chunks, "
            f"avg {file.legacy.average_length:.0f} chars"
        )
        lines.append(
            f"   AST:    {file.ast.total_chunks} chunks, "
            f"avg {file.ast.average_length:.0f} chars"
        )

        sample_count = max(len(file.legacy_samples), len(file.ast_samples))
        if sample_count:
            lines.extend(["", f"   Sample Chunks (showing first {sample_count}):", ""])
        for i in range(sample_count):
            legacy = file.legacy_samples[i] if i < len(file.legacy_samples) else None
            ast = file.ast_samples[i] if i < len(file.ast_samples) else None
            lines.append(f"   --- Chunk {i + 1} ---")
            lines.extend(_render_sample("Legacy", legacy, i, show_node_types=False))
            lines.append("")
            lines.extend(_render_sample("AST", ast, i, show_node_types=True))
            lines.append("")
        lines.append("")

    lines.extend(
        [
            heading("Chunk Type Distribution", force_tty),
            "",
            f"{'Type':<15} {'Legacy':<10} {'AST':<10} Difference",
            "-" * 50,
        ]
    )
    for count in report.type_distribution:
        lines.append(
            f"{count.chunk_type:<15} {count.legacy:<10} {count.ast:<10} "
            f"{signed(count.difference, force_tty)}"
        )

    lines.extend(
        [
            "",
            heading("AST-Specific Information", force_tty),
            "",
            f"AST Node Types Found ({len(report.ast_node_types)} unique):",
            f"  {', '.join(report.ast_node_types)}",
        ]
    )
    return "\n".join(lines)
