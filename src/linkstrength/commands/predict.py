"""Command group: link-prediction strength and ranking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkstrength.commands._base import LinkGroup
from linkstrength.domain.walks import MAX_WALK_LENGTH
from linkstrength.services.predict import PredictionService

if TYPE_CHECKING:
    from linkstrength.commands._context import AppContext

_PREDICT_EXAMPLES = """\
  linkstrength predict strength twitter.com umd.edu
  linkstrength predict walks twitter.com umd.edu --length 2
  linkstrength predict rank --alpha 0.4 --beta 0.6
  linkstrength --json predict rank --top 10"""

_alpha = click.option("--alpha", type=float, default=None, help="Out-degree weight.")
_beta = click.option("--beta", type=float, default=None, help="Per-length walk decay.")
_max_length = click.option(
    "--max-length",
    type=click.IntRange(min=0, max=MAX_WALK_LENGTH),
    default=None,
    help="Longest walk counted (default: node count).",
)


@click.group(cls=LinkGroup, examples=_PREDICT_EXAMPLES)
def predict() -> None:
    """Score and rank candidate missing hyperlinks."""


@predict.command(
    examples="""\
  linkstrength predict strength twitter.com umd.edu
  linkstrength predict strength a.com c.com --alpha 0.1 --beta 0.5 --max-length 3"""
)
@click.argument("source")
@click.argument("target")
@_alpha
@_beta
@_max_length
@click.pass_obj
def strength(
    app: AppContext,
    source: str,
    target: str,
    alpha: float | None,
    beta: float | None,
    max_length: int | None,
) -> None:
    """Strength of a predicted link from SOURCE to TARGET."""
    app.emit(
        PredictionService(app.engine).strength(
            source, target, alpha=alpha, beta=beta, max_length=max_length
        )
    )


@predict.command(
    examples="""\
  linkstrength predict walks twitter.com umd.edu --length 2
  linkstrength predict walks a.com d.com --length 4 --limit 5"""
)
@click.argument("source")
@click.argument("target")
@click.option(
    "--length",
    required=True,
    type=click.IntRange(min=0, max=MAX_WALK_LENGTH),
    help="Exact walk length.",
)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Max walks listed.")
@click.pass_obj
def walks(app: AppContext, source: str, target: str, length: int, limit: int | None) -> None:
    """Count and list walks of one length from SOURCE to TARGET."""
    app.emit(PredictionService(app.engine).walks(source, target, length=length, limit=limit))


@predict.command(
    examples="""\
  linkstrength predict rank
  linkstrength predict rank --alpha 0.05 --beta 0.95 --top 10
  linkstrength predict rank --threshold 0 --workers 4"""
)
@_alpha
@_beta
@_max_length
@click.option("--threshold", type=float, default=None, help="Exclusive minimum score.")
@click.option("--top", type=click.IntRange(min=1), default=None, help="Max results.")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Scoring threads.")
@click.pass_obj
def rank(
    app: AppContext,
    alpha: float | None,
    beta: float | None,
    max_length: int | None,
    threshold: float | None,
    top: int | None,
    workers: int | None,
) -> None:
    """Rank missing links whose strength exceeds alpha + beta."""
    app.emit(
        PredictionService(app.engine).rank(
            alpha=alpha,
            beta=beta,
            max_length=max_length,
            threshold=threshold,
            top=top,
            workers=workers,
        )
    )
