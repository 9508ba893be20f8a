"""Terminal detection utilities."""

import sys


def is_tty() -> bool:
    """Check if stdout is connected to a terminal.

    Reports are colorized only for interactive terminals so that piped output
    and CI logs stay plain text.

    Returns:
        True if stdout is a TTY (interactive terminal), False otherwise.
    """
    return sys.stdout.isatty()
