"""Rich Console factory and theme for infracascade output.

Consoles render into a StringIO buffer so renderers keep the
``format_result() -> str`` contract.  Rich drops color codes on its own
when output is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CASCADE_THEME = Theme(
    {
        "ic.ok": "bold green",
        "ic.error": "bold red",
        "ic.warning": "bold yellow",
        "ic.op": "bold cyan",
        "ic.key": "dim",
        "ic.id": "bold blue",
        "ic.name": "bold",
        "ic.value": "magenta",
        "ic.impact.critical": "bold red",
        "ic.impact.high": "red",
        "ic.impact.medium": "yellow",
        "ic.impact.low": "green",
    }
)

_IMPACT_STYLES: dict[str, str] = {
    "critical": "ic.impact.critical",
    "high": "ic.impact.high",
    "medium": "ic.impact.medium",
    "low": "ic.impact.low",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Terminal width override, for stable table layout.
    """
    return Console(
        file=StringIO(),
        theme=CASCADE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_impact(level: str) -> str:
    """Return the Rich style name for an impact level or alert priority."""
    return _IMPACT_STYLES.get(level, "")
