"""UI utilities for terminal report output.

This module provides shared utilities for terminal interaction, including:
- TTY detection for adaptive output formatting
- ANSI color support with graceful degradation

These utilities are used by the comparison report and the CLI summaries.
"""

from mdchunk.lib.ui.colors import ANSIColors, colorize, heading, signed
from mdchunk.lib.ui.terminal import is_tty

__all__ = [
    "ANSIColors",
    "colorize",
    "heading",
    "is_tty",
    "signed",
]
