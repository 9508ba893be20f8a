"""ANSI color utilities for report output.

Provides color constants and helper functions for colorized terminal output
with graceful degradation in non-TTY environments.
"""

from mdchunk.lib.ui.terminal import is_tty


class ANSIColors:
    """ANSI color escape codes for terminal output.

    Attributes:
        GREEN: Bright green (positive differences, success lines).
        RED: Bright red (negative differences, failures).
        YELLOW: Bright yellow (warnings, missing samples).
        CYAN: Bright cyan (section headings in reports).
        BOLD: Bold text.
        RESET: Reset code to restore default terminal color.
    """

    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colorize(text: str, color: str, force_tty: bool | None = None) -> str:
    """Apply ANSI color codes to text if in TTY mode.

    Args:
        text: Text to colorize.
        color: ANSI color code to apply (e.g., ANSIColors.GREEN).
        force_tty: Override TTY detection (for testing). None uses auto-detection.

    Returns:
        Colorized text if in TTY mode, plain text otherwise.
    """
    use_colors = force_tty if force_tty is not None else is_tty()
    if not use_colors:
        return text
    return f"{color}{text}{ANSIColors.RESET}"


def heading(text: str, force_tty: bool | None = None) -> str:
    """Format a report section heading as ``=== text ===``."""
    return colorize(f"=== {text} ===", ANSIColors.CYAN, force_tty=force_tty)


def signed(value: int, force_tty: bool | None = None) -> str:
    """Format a count difference with an explicit sign.

    Zero and positive values get a ``+`` prefix and are shown in green,
    negative values in red.
    """
    text = f"+{value}" if value >= 0 else str(value)
    color = ANSIColors.GREEN if value >= 0 else ANSIColors.RED
    return colorize(text, color, force_tty=force_tty)
