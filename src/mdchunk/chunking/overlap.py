"""Sentence splitting and overlap helpers shared by both chunkers."""

import re

SENTENCE_ENDINGS = re.compile(r"(?<=[.!?])\s+")
OVERLAP_SEPARATOR = "\n\n"


def split_sentences(text: str) -> list[str]:
    """Split text after ``.``, ``!`` or ``?`` followed by whitespace.

    Args:
        text: Text to split.

    Returns:
        Non-empty sentences in order, each stripped.
    """
    return [s.strip() for s in SENTENCE_ENDINGS.split(text) if s.strip()]


def extract_sentence_overlap(text: str, max_length: int) -> str:
    """Return the trailing context to carry into the next chunk.

    Takes the last two sentences if together they fit ``max_length``, else the
    last sentence if it fits, else nothing. The result is a verbatim tail
    slice of ``text``; a sentence is never cut in the middle.

    Args:
        text: Content of the chunk that was just closed.
        max_length: Maximum overlap length in characters.

    Returns:
        Overlap text, or an empty string.

    Example:
        >>> extract_sentence_overlap("One. Two. Three.", 20)
        'Two. Three.'
    """
    text = text.strip()
    if not text or max_length <= 0:
        return ""

    starts = [0] + [match.end() for match in SENTENCE_ENDINGS.finditer(text)]
    for count in (2, 1):
        if len(starts) < count:
            continue
        tail = text[starts[-count] :]
        if len(tail) <= max_length:
            return tail
    return ""


def prepend_overlap(overlap: str, content: str) -> str:
    """Join overlap and content with a blank line; no-op without overlap."""
    if not overlap:
        return content
    return f"{overlap}{OVERLAP_SEPARATOR}{content}"
