"""Heading hierarchy tracking shared by both chunkers."""

from dataclasses import dataclass, field

MAX_HEADING_DEPTH = 6


@dataclass
class HeadingStack:
    """Fixed-size heading vector indexed by depth.

    Each of the six markdown heading levels has a slot and a ``present`` flag.
    Declaring a heading at depth *d* clears every slot at depth >= *d* and then
    fills slot *d*. Levels that were skipped (an ``##`` with no preceding
    ``#``) stay absent and are left out of ``hierarchy()`` instead of showing
    up as empty placeholders.

    Example:
        >>> stack = HeadingStack()
        >>> stack.push(2, "Install")
        >>> stack.hierarchy()
        ['Install']
        >>> stack.push(1, "Guide")
        >>> stack.push(3, "Linux")
        >>> stack.hierarchy()
        ['Guide', 'Linux']
    """

    _texts: list[str] = field(default_factory=lambda: [""] * MAX_HEADING_DEPTH)
    _present: list[bool] = field(
        default_factory=lambda: [False] * MAX_HEADING_DEPTH
    )

    def push(self, depth: int, text: str) -> None:
        """Record a heading, truncating everything at or below its depth.

        Args:
            depth: Heading depth, 1-6.
            text: Plain heading text.

        Raises:
            ValueError: If depth is outside 1-6.
        """
        if not 1 <= depth <= MAX_HEADING_DEPTH:
            raise ValueError(
                f"Heading depth must be between 1 and {MAX_HEADING_DEPTH}, got {depth}"
            )
        for slot in range(depth - 1, MAX_HEADING_DEPTH):
            self._texts[slot] = ""
            self._present[slot] = False
        self._texts[depth - 1] = text
        self._present[depth - 1] = True

    def hierarchy(self) -> list[str]:
        """Return the declared headings from root to deepest, gaps removed."""
        return [
            text
            for text, present in zip(self._texts, self._present, strict=True)
            if present
        ]

    def clear(self) -> None:
        """Forget all headings."""
        self._texts = [""] * MAX_HEADING_DEPTH
        self._present = [False] * MAX_HEADING_DEPTH

    def __len__(self) -> int:
        return sum(self._present)
