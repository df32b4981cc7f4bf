"""Subcommand modules for linkstrength.

Provides register_commands(), which imports command groups lazily so
``linkstrength --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from linkstrength.commands.graph import graph
    from linkstrength.commands.predict import predict

    cli.add_command(graph)
    cli.add_command(predict)
