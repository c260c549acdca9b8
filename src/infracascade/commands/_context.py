"""AppContext: shared Click context for all commands.

Created once by the root group and handed to subcommands via
``@click.pass_obj``.  The cascade engine is created lazily so that
``--help`` never loads catalogs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from infracascade.config.logging import configure_logging
from infracascade.output.formatters import OutputSettings, format_result
from infracascade.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from infracascade.cascade.engine import CascadeEngine
    from infracascade.config.settings import CascadeSettings
    from infracascade.services.result import ServiceResult


class AppContext:
    """Settings, the lazily built engine, and result emission."""

    def __init__(self, settings: CascadeSettings) -> None:
        self.settings = settings
        self._engine: CascadeEngine | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def engine(self) -> CascadeEngine:
        """The cascade engine (created on first access)."""
        if self._engine is None:
            from infracascade.cascade.engine import CascadeEngine
            from infracascade.infrastructure.graph.engine import GraphEngine

            graphs = GraphEngine(
                catalog_dir=self.settings.resolved_catalog_dir,
                chokepoint_radius_km=self.settings.catalog.chokepoint_radius_km,
            )
            self._engine = CascadeEngine.from_config(self.settings.cascade, graphs)
        return self._engine

    def emit(self, result: ServiceResult) -> None:
        """Write *result* and set the exit status.

        Success goes to stdout, with warnings on stderr outside JSON mode.
        Failure goes to stderr and exits with status 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
