"""Rich Console factory and theme for archctl output.

Consoles render into a StringIO buffer so ``format_result() -> str``
stays a plain function.  In non-TTY environments (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ARCH_THEME = Theme(
    {
        "arch.ok": "bold green",
        "arch.error": "bold red",
        "arch.warning": "bold yellow",
        "arch.op": "bold cyan",
        "arch.key": "dim",
        "arch.name": "bold blue",
        "arch.title": "bold",
        "arch.layer.domain": "magenta",
        "arch.layer.application": "cyan",
        "arch.layer.infrastructure": "yellow",
        "arch.layer.api": "green",
        "arch.layer.web": "blue",
        "arch.layer.mcp": "bright_black",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=ARCH_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_layer(layer: str) -> str:
    """Return the Rich style name for a layer."""
    return f"arch.layer.{layer}" if f"arch.layer.{layer}" in ARCH_THEME.styles else ""
