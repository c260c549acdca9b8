"""Command group: dependency graph inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from infracascade.commands._base import CascadeGroup
from infracascade.services.graph import GraphService

if TYPE_CHECKING:
    from infracascade.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  infracascade graph stats
  infracascade graph node chokepoint:suez
  infracascade --json graph node country:JP"""


@click.group(cls=CascadeGroup, examples=_GRAPH_EXAMPLES)
def graph() -> None:
    """Inspect the infrastructure dependency graph."""


@graph.command(
    examples="""\
  infracascade graph stats
  infracascade --catalog-dir ./data graph stats"""
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Count nodes and edges by kind."""
    app.emit(GraphService(app.engine).stats())


@graph.command(
    examples="""\
  infracascade graph node port:singapore
  infracascade graph node cable:marea --depth 1"""
)
@click.argument("node_id")
@click.option("--depth", type=int, default=None, help="Hop limit for the reach count.")
@click.pass_obj
def node(app: AppContext, node_id: str, depth: int | None) -> None:
    """Show one node with its dependencies and dependents."""
    app.emit(GraphService(app.engine).node(node_id, depth=depth))
