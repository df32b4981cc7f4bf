"""Rich Console factory and theme for linkstrength output.

Consoles render to a StringIO buffer so ``format_result() -> str`` stays a
pure function.  In non-TTY environments (tests, pipes) Rich drops color.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LINK_THEME = Theme(
    {
        "ls.ok": "bold green",
        "ls.error": "bold red",
        "ls.op": "bold cyan",
        "ls.key": "dim",
        "ls.node": "bold blue",
        "ls.score": "magenta",
    }
)


def create_console() -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=LINK_THEME,
        highlight=False,
        width=120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def format_score(score: float) -> str:
    """Scores print with at most three decimals, trailing zeros dropped."""
    text = f"{score:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
