"""AppContext — state shared by every command of one CLI run.

The root group builds it from :class:`LinkSettings` and stores it as the
Click ``obj``; commands receive it through ``@click.pass_obj``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkstrength.config.logging import configure_logging
from linkstrength.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from linkstrength.config.settings import LinkSettings
    from linkstrength.infrastructure.graph.engine import GraphEngine
    from linkstrength.services.result import ServiceResult


class AppContext:
    """Settings, output mode and the lazily built graph engine.

    Nothing reads edge lists until a command asks for :attr:`engine`, so
    ``--help`` and ``--examples`` work even with broken graph sources.
    """

    def __init__(self, settings: LinkSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._engine: GraphEngine | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            from linkstrength.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def engine(self) -> GraphEngine:
        if self._engine is None:
            from linkstrength.infrastructure.graph.engine import GraphEngine

            self._engine = GraphEngine(self.settings)
        return self._engine

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits with 1.

        Warnings of a successful result follow on stderr, except in JSON mode
        where they are already part of the document.
        """
        click.echo(format_result(result, settings=self.output), err=not result.ok)
        if not result.ok:
            raise SystemExit(1)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
