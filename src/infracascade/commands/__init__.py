"""Subcommand modules for infracascade.

:func:`register_commands` imports lazily to keep ``infracascade --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from infracascade.commands.cascade import cascade
    from infracascade.commands.graph import graph

    cli.add_command(cascade)
    cli.add_command(graph)
