"""Root CLI group for infracascade with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from infracascade import __version__
from infracascade.commands import register_commands
from infracascade.commands._context import AppContext
from infracascade.config.settings import CascadeSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="infracascade")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs and timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--catalog-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of catalog JSON files (overrides [catalog] path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    catalog_dir: Path | None,
) -> None:
    """infracascade: trace how infrastructure outages spread to countries."""
    settings = CascadeSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        catalog_dir=catalog_dir,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
