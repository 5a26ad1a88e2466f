"""Rich Console factory and theme for licensectl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Outside a terminal (tests, pipes) Rich emits no
color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LICENSE_THEME = Theme(
    {
        "lic.ok": "bold green",
        "lic.error": "bold red",
        "lic.warning": "bold yellow",
        "lic.op": "bold cyan",
        "lic.key": "dim",
        "lic.path": "dim",
        "lic.title": "bold",
        "lic.kind.static_file": "green",
        "lic.kind.command": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=LICENSE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Rich style name for a section source kind."""
    return f"lic.kind.{kind}" if kind in ("static_file", "command") else ""
