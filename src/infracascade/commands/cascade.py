"""Command group: disruption cascades."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from infracascade.commands._base import CascadeGroup
from infracascade.services.cascade import CascadeService

if TYPE_CHECKING:
    from infracascade.commands._context import AppContext

_CASCADE_EXAMPLES = """\
  infracascade cascade run cable:marea
  infracascade cascade run chokepoint:hormuz_strait --level 0.5 --top 5
  infracascade --json cascade run port:singapore
  infracascade cascade alert chokepoint:suez"""

_LEVEL_HELP = (
    "Fraction of the asset disrupted, in (0, 1]. "
    "Defaults to [cascade] default_disruption."
)


@click.group(cls=CascadeGroup, examples=_CASCADE_EXAMPLES)
def cascade() -> None:
    """Simulate the loss of an infrastructure asset."""


@cascade.command(
    examples="""\
  infracascade cascade run cable:marea
  infracascade cascade run pipeline:druzhba --level 0.6
  infracascade cascade run chokepoint:malacca_strait --top 3
  infracascade -q cascade run cable:2africa"""
)
@click.argument("source_id")
@click.option("--level", "disruption_level", type=float, default=None, help=_LEVEL_HELP)
@click.option("--top", type=int, default=None, help="Show only the N most affected countries.")
@click.pass_obj
def run(app: AppContext, source_id: str, disruption_level: float | None, top: int | None) -> None:
    """Compute which countries and assets a disruption reaches."""
    level = disruption_level
    if level is None:
        level = app.settings.cascade.default_disruption
    app.emit(
        CascadeService(app.engine).run(
            source_id,
            disruption_level=level,
            top=top if top is not None else app.settings.output.top,
        )
    )


@cascade.command(
    examples="""\
  infracascade cascade alert chokepoint:suez
  infracascade -q cascade alert cable:seamewe_5 --level 0.5"""
)
@click.argument("source_id")
@click.option("--level", "disruption_level", type=float, default=None, help=_LEVEL_HELP)
@click.pass_obj
def alert(app: AppContext, source_id: str, disruption_level: float | None) -> None:
    """Summarize a disruption as a prioritised alert."""
    level = disruption_level
    if level is None:
        level = app.settings.cascade.default_disruption
    app.emit(CascadeService(app.engine).alert(source_id, disruption_level=level))
