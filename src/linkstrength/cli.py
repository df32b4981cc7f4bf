"""Root CLI group for linkstrength with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from linkstrength import __version__
from linkstrength.commands import register_commands
from linkstrength.commands._context import AppContext
from linkstrength.config.settings import LinkSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="linkstrength")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-e",
    "--edges",
    "edge_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Extra edge-list file (repeatable).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    edge_files: tuple[Path, ...],
) -> None:
    """linkstrength — predict missing hyperlinks in a web graph."""
    settings = LinkSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        extra_edge_files=tuple(p.resolve() for p in edge_files),
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
