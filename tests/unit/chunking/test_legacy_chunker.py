"""Tests for the regex-based LegacyChunker.

Covers section splitting, code carve-out, content-type detection, greedy
packing and sentence overlap.
"""

from pathlib import Path

import pytest

from mdchunk.chunking.legacy_chunker import LegacyChunker
from mdchunk.models.chunk import ChunkType

INTRO = "Intro paragraph that is definitely longer than fifty characters in total."
OUTRO = "Closing paragraph that is also comfortably longer than fifty characters."


@pytest.mark.unit
class TestLegacyChunkerInitialization:
    """Tests for LegacyChunker construction."""

    def test_defaults(self) -> None:
        """Test default size and overlap."""
        chunker = LegacyChunker()
        assert chunker.chunk_size == 1000
        assert chunker.chunk_overlap == 150

    def test_invalid_chunk_size(self) -> None:
        """Test chunk_size must be positive."""
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            LegacyChunker(chunk_size=0)

    def test_invalid_overlap(self) -> None:
        """Test chunk_overlap cannot be negative."""
        with pytest.raises(ValueError, match="cannot be negative"):
            LegacyChunker(chunk_overlap=-1)


@pytest.mark.unit
class TestSectionSplitting:
    """Tests for heading-based section splitting."""

    def test_heading_hierarchy(self) -> None:
        """Test chunks carry the hierarchy of their section."""
        chunks = LegacyChunker().chunk_markdown("# A\n\ntext1\n\n## B\n\ntext2", "doc.md")
        assert [c.content for c in chunks] == ["text1", "text2"]
        assert chunks[0].metadata.header_hierarchy == ["A"]
        assert chunks[0].metadata.section == "A"
        assert chunks[1].metadata.header_hierarchy == ["A", "B"]
        assert chunks[1].metadata.section == "B"

    def test_skipped_level(self) -> None:
        """Test a leading '##' yields a one-element hierarchy."""
        chunks = LegacyChunker().chunk_markdown("## Sub\n\ntext", "doc.md")
        assert chunks[0].metadata.header_hierarchy == ["Sub"]

    def test_preamble_has_no_hierarchy(self) -> None:
        """Test text before the first heading has no section."""
        chunks = LegacyChunker().chunk_markdown("Preamble.\n\n# A\n\nBody.", "doc.md")
        assert chunks[0].content == "Preamble."
        assert chunks[0].metadata.header_hierarchy == []
        assert chunks[0].metadata.section is None

    def test_heading_lines_inside_fence_are_content(self) -> None:
        """Test '#' comments inside a code fence do not open sections."""
        text = "# Real\n\n```bash\n# comment not heading\necho hi\n```\n"
        chunks = LegacyChunker().chunk_markdown(text, "doc.md")
        assert len(chunks) == 1
        assert chunks[0].metadata.header_hierarchy == ["Real"]
        assert "# comment not heading" in chunks[0].content

    def test_unclosed_fence_does_not_hide_headings(self) -> None:
        """Test headings after an unmatched fence still open sections."""
        text = (
            "# A\n\nIntro text.\n\n```\nnever closed\n\n"
            "# B\n\nThis paragraph sits under heading B."
        )
        chunks = LegacyChunker().chunk_markdown(text, "doc.md")

        assert [c.metadata.header_hierarchy for c in chunks] == [["A"], ["B"]]
        assert chunks[0].content == "Intro text.\n\n```\nnever closed"
        assert chunks[0].metadata.chunk_type == ChunkType.TEXT
        assert chunks[1].content == "This paragraph sits under heading B."

    def test_short_section_without_code_is_kept(self) -> None:
        """Test a short prose-only section still produces a chunk."""
        chunks = LegacyChunker().chunk_markdown("# T\n\nHi.", "doc.md")
        assert [c.content for c in chunks] == ["Hi."]

    def test_windows_line_endings(self) -> None:
        """Test CRLF input is split like LF input."""
        chunks = LegacyChunker().chunk_markdown("# A\r\n\r\nBody.\r\n", "doc.md")
        assert chunks[0].metadata.header_hierarchy == ["A"]
        assert chunks[0].content == "Body."

    def test_empty_document(self) -> None:
        """Test empty input yields no chunks."""
        assert LegacyChunker().chunk_markdown("", "doc.md") == []


@pytest.mark.unit
class TestCodeCarveOut:
    """Tests for fenced code block extraction."""

    def test_code_block_is_isolated(self) -> None:
        """Test a code block becomes its own chunk between prose chunks."""
        text = f"{INTRO}\n\n```python\nprint(1)\n```\n\n{OUTRO}"
        chunks = LegacyChunker().chunk_markdown(text, "doc.md")

        assert [c.chunk_type for c in chunks] == [
            ChunkType.TEXT,
            ChunkType.CODE,
            ChunkType.TEXT,
        ]
        assert chunks[1].content == "```python\nprint(1)\n```"
        assert chunks[1].metadata.language == "python"
        assert chunks[0].content == INTRO
        assert chunks[2].content == OUTRO

    def test_untagged_code_language_is_text(self) -> None:
        """Test a fence without a tag reports language 'text'."""
        chunks = LegacyChunker().chunk_markdown("```\nplain\n```", "doc.md")
        assert chunks[0].metadata.language == "text"

    def test_short_filler_around_code_is_dropped(self) -> None:
        """Test text of 50 characters or less next to code is discarded."""
        text = (
            "# Title\n\nShort para.\n\n```js\nconsole.log(1)\n```\n\n"
            "Another short para."
        )
        chunks = LegacyChunker().chunk_markdown(text, "doc.md")
        assert len(chunks) == 1
        assert chunks[0].chunk_type == ChunkType.CODE
        assert chunks[0].metadata.language == "js"
        assert chunks[0].metadata.header_hierarchy == ["Title"]

    def test_non_code_chunks_have_no_language(self) -> None:
        """Test language is only set on code chunks."""
        text = f"{INTRO}\n\n```python\nprint(1)\n```"
        chunks = LegacyChunker().chunk_markdown(text, "doc.md")
        assert chunks[0].metadata.language is None


@pytest.mark.unit
class TestContentTypeDetection:
    """Tests for detect_content_type()."""

    def test_list(self) -> None:
        """Test bullet and numbered lines are detected as a list."""
        chunker = LegacyChunker()
        assert chunker.detect_content_type("- one\n- two\n1. three") == ChunkType.LIST

    def test_half_list_lines_is_list(self) -> None:
        """Test exactly half list lines is enough."""
        assert LegacyChunker().detect_content_type("Intro line\n- a") == ChunkType.LIST

    def test_table(self) -> None:
        """Test three or more pipe lines are detected as a table."""
        text = "| a | b |\n|---|---|\n| 1 | 2 |"
        assert LegacyChunker().detect_content_type(text) == ChunkType.TABLE

    def test_two_pipe_lines_is_text(self) -> None:
        """Test two pipe lines are not enough for a table."""
        text = "Some text with a | pipe\nanother | line"
        assert LegacyChunker().detect_content_type(text) == ChunkType.TEXT

    def test_prose(self) -> None:
        """Test ordinary prose is text."""
        assert LegacyChunker().detect_content_type("Just words.") == ChunkType.TEXT

    def test_fitting_list_is_one_verbatim_chunk(self) -> None:
        """Test a list that fits is emitted unchanged as one chunk."""
        chunks = LegacyChunker().chunk_markdown("# L\n\n- one\n- two\n- three", "doc.md")
        assert len(chunks) == 1
        assert chunks[0].chunk_type == ChunkType.LIST
        assert chunks[0].content == "- one\n- two\n- three"


@pytest.mark.unit
class TestPacking:
    """Tests for greedy packing with sentence overlap."""

    def test_paragraphs_packed_with_overlap(self) -> None:
        """Test the last sentence of a flushed chunk seeds the next one."""
        text = (
            "First sentence here. Second one follows.\n\n"
            "Third paragraph text goes on."
        )
        chunks = LegacyChunker(chunk_size=60, chunk_overlap=30).chunk_markdown(
            text, "doc.md"
        )
        assert [c.content for c in chunks] == [
            "First sentence here. Second one follows.",
            "Second one follows.\n\nThird paragraph text goes on.",
        ]

    def test_long_paragraph_split_at_sentences(self) -> None:
        """Test a paragraph longer than chunk_size is split by sentence."""
        text = "Alpha beta gamma one. Alpha beta gamma two. Alpha beta gamma six."
        chunks = LegacyChunker(chunk_size=50, chunk_overlap=0).chunk_markdown(
            text, "doc.md"
        )
        assert [c.content for c in chunks] == [
            "Alpha beta gamma one. Alpha beta gamma two.",
            "Alpha beta gamma six.",
        ]

    def test_long_paragraph_keeps_paragraph_break(self) -> None:
        """Test an oversized paragraph starts on its own paragraph."""
        text = (
            "Short intro.\n\n"
            "Alpha beta gamma one. Alpha beta gamma two. Alpha beta gamma six."
        )
        chunks = LegacyChunker(chunk_size=50, chunk_overlap=0).chunk_markdown(
            text, "doc.md"
        )
        assert [c.content for c in chunks] == [
            "Short intro.\n\nAlpha beta gamma one.",
            "Alpha beta gamma two. Alpha beta gamma six.",
        ]

    def test_small_paragraphs_merge(self) -> None:
        """Test paragraphs that fit together share a chunk."""
        chunks = LegacyChunker().chunk_markdown("One.\n\nTwo.\n\nThree.", "doc.md")
        assert [c.content for c in chunks] == ["One.\n\nTwo.\n\nThree."]


@pytest.mark.unit
class TestChunkDocuments:
    """Tests for directory chunking."""

    def test_markdown_files_in_sorted_order(self, documents_dir: Path) -> None:
        """Test only .md files are read, in name order."""
        chunks = LegacyChunker().chunk_documents(documents_dir)
        sources = list(dict.fromkeys(c.source_file for c in chunks))
        assert sources == ["api-reference.md", "getting-started.md"]

    def test_fixture_structure(self, documents_dir: Path) -> None:
        """Test headings, code and lists are recognised in a real document."""
        chunks = [
            c
            for c in LegacyChunker().chunk_documents(documents_dir)
            if c.source_file == "getting-started.md"
        ]
        code = [c for c in chunks if c.chunk_type == ChunkType.CODE]
        assert len(code) == 1
        assert code[0].metadata.language == "bash"
        assert code[0].metadata.header_hierarchy == ["Getting Started", "Installation"]

        lists = [c for c in chunks if c.chunk_type == ChunkType.LIST]
        assert lists[0].metadata.header_hierarchy == ["Getting Started", "Configuration"]

        assert chunks[-1].metadata.header_hierarchy == [
            "Getting Started",
            "Configuration",
            "Advanced options",
        ]
