"""Rich Console factory and theme for envtag output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ENVTAG_THEME = Theme(
    {
        "envtag.ok": "bold green",
        "envtag.error": "bold red",
        "envtag.warning": "bold yellow",
        "envtag.op": "bold cyan",
        "envtag.field": "bold",
        "envtag.variable": "bold blue",
        "envtag.type": "magenta",
        "envtag.dim": "dim",
        "envtag.source.environment": "green",
        "envtag.source.default": "yellow",
        "envtag.source.optional": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ENVTAG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_source(source: str) -> str:
    """Return the Rich style name for a value source."""
    return f"envtag.source.{source}" if source else ""
