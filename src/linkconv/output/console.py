"""Rich Console factory and theme for linkconv output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LINK_THEME = Theme(
    {
        "lc.ok": "bold green",
        "lc.error": "bold red",
        "lc.warning": "bold yellow",
        "lc.op": "bold cyan",
        "lc.key": "dim",
        "lc.path": "blue",
        "lc.count": "magenta",
        "lc.kind.wiki": "green",
        "lc.kind.markdown": "cyan",
        "lc.dry": "italic yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=LINK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a link kind."""
    return "lc.kind.wiki" if kind.startswith("wiki") else "lc.kind.markdown"
