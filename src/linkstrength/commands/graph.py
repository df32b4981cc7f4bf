"""Command group: inspect the hyperlink graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkstrength.commands._base import LinkGroup
from linkstrength.services.graph import GraphService

if TYPE_CHECKING:
    from linkstrength.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  linkstrength graph show
  linkstrength -e links.txt graph stats
  linkstrength graph successors umd.edu"""


@click.group(cls=LinkGroup, examples=_GRAPH_EXAMPLES)
def graph() -> None:
    """Inspect the loaded hyperlink graph."""


@graph.command(
    examples="""\
  linkstrength graph show
  linkstrength --json graph show"""
)
@click.pass_obj
def show(app: AppContext) -> None:
    """List every page with the pages it links to."""
    app.emit(GraphService(app.engine).show())


@graph.command(
    examples="""\
  linkstrength graph stats
  linkstrength -e links.txt --json graph stats"""
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show node, edge and candidate-pair counts."""
    app.emit(GraphService(app.engine).stats())


@graph.command(
    examples="""\
  linkstrength graph successors umd.edu
  linkstrength -q graph successors twitter.com"""
)
@click.argument("node")
@click.pass_obj
def successors(app: AppContext, node: str) -> None:
    """List the pages NODE links to directly."""
    app.emit(GraphService(app.engine).successors(node))
