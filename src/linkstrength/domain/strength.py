"""Strength estimation and ranking of missing hyperlinks.

The strength of an ordered pair ``(a, b)`` is::

    alpha * out_degree(a) + sum(beta ** L * walks(a, b, L) for L in 1..N)

The first term rewards pages with many outlinks regardless of *b*; the
second rewards many (and short) walks from *a* to *b*.  Pure functions of a
graph snapshot; nothing here mutates the graph or caches between calls.
"""

from __future__ import annotations

import logging
import math
import sys
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from linkstrength.domain.walks import walk_count_table, walk_counts

if TYPE_CHECKING:
    from linkstrength.domain.graph import HyperlinkGraph

logger = logging.getLogger(__name__)

_LOG_FLOAT_MAX = math.log(sys.float_info.max)


@dataclass(frozen=True)
class Prediction:
    """A candidate missing edge and its strength."""

    source: str
    target: str
    score: float

    @property
    def label(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class StrengthBreakdown:
    """A strength score together with the terms it is made of."""

    adjacency_term: float
    path_term: float
    walk_counts: tuple[int, ...] = field(default_factory=tuple)

    @property
    def score(self) -> float:
        return self.adjacency_term + self.path_term


def _decayed(count: int, beta: float, length: int) -> float:
    """``beta ** length * count`` without converting a huge *count* to float.

    Walk counts grow exponentially with length and soon exceed the float
    range.  Such terms are evaluated in log space; a term that is itself too
    large for a float becomes ``inf``.
    """
    try:
        return beta**length * count
    except OverflowError:
        pass
    if beta == 0.0:
        return 0.0
    sign = -1.0 if beta < 0 and length % 2 else 1.0
    magnitude = math.log(count) + length * math.log(abs(beta))
    if magnitude >= _LOG_FLOAT_MAX:
        return sign * math.inf
    return sign * math.exp(magnitude)


def _path_term(counts: Sequence[int], beta: float) -> float:
    return sum(
        (_decayed(count, beta, length) for length, count in enumerate(counts, start=1) if count),
        0.0,
    )


def score_from_counts(out_degree: int, counts: Sequence[int], alpha: float, beta: float) -> float:
    """Combine an out-degree and per-length walk counts into a strength."""
    return alpha * out_degree + _path_term(counts, beta)


def strength_breakdown(
    graph: HyperlinkGraph,
    source: str,
    target: str,
    max_length: int,
    alpha: float,
    beta: float,
) -> StrengthBreakdown:
    """Compute the strength of ``source -> target`` with its parts exposed."""
    counts = walk_counts(graph, source, target, max_length)
    return StrengthBreakdown(
        adjacency_term=alpha * graph.out_degree(source),
        path_term=_path_term(counts, beta),
        walk_counts=tuple(counts),
    )


def strength(
    graph: HyperlinkGraph,
    source: str,
    target: str,
    max_length: int,
    alpha: float,
    beta: float,
) -> float:
    """Link-prediction strength of ``source -> target``.

    Self pairs and already linked pairs are scored like any other pair;
    excluding them is the caller's job (see :func:`candidate_pairs`).

    Raises:
        NodeNotFoundError: If *source* is not in the graph.
        ValueError: If *max_length* is negative.
    """
    counts = walk_counts(graph, source, target, max_length)
    return score_from_counts(graph.out_degree(source), counts, alpha, beta)


def candidate_pairs(graph: HyperlinkGraph) -> Iterator[tuple[str, str]]:
    """Ordered pairs of distinct nodes with no edge between them (yet)."""
    nodes = graph.nodes()
    for source in nodes:
        for target in nodes:
            if source != target and not graph.has_edge(source, target):
                yield source, target


def _score_source(
    graph: HyperlinkGraph,
    source: str,
    targets: Sequence[str],
    max_length: int,
    alpha: float,
    beta: float,
) -> list[Prediction]:
    table = walk_count_table(graph, source, max_length)
    degree = graph.out_degree(source)
    no_walks: list[int] = []
    return [
        Prediction(
            source,
            target,
            score_from_counts(degree, table.get(target, no_walks), alpha, beta),
        )
        for target in targets
    ]


def rank_predictions(
    graph: HyperlinkGraph,
    *,
    alpha: float,
    beta: float,
    max_length: int | None = None,
    threshold: float | None = None,
    workers: int = 1,
) -> list[Prediction]:
    """Score every candidate missing edge and rank the strong ones.

    Keeps pairs whose score is strictly greater than *threshold*
    (default ``alpha + beta``), sorted by score descending.  Equal scores are
    all kept and ordered by pair label.

    Args:
        graph: Graph to score. Must be frozen when ``workers > 1``.
        alpha: Weight of the source out-degree.
        beta: Per-length decay of walk counts.
        max_length: Longest walk length counted (default: node count).
        threshold: Minimum score, exclusive (default: ``alpha + beta``).
        workers: Number of threads scoring sources concurrently.
    """
    if max_length is None:
        max_length = graph.node_count()
    if max_length < 0:
        msg = f"max_length must be non-negative, got {max_length}"
        raise ValueError(msg)
    if threshold is None:
        threshold = alpha + beta
    if workers < 1:
        msg = f"workers must be at least 1, got {workers}"
        raise ValueError(msg)
    if workers > 1 and not graph.frozen:
        msg = "Graph must be frozen before it is scored concurrently"
        raise ValueError(msg)

    by_source: dict[str, list[str]] = {}
    for source, target in candidate_pairs(graph):
        by_source.setdefault(source, []).append(target)

    if workers > 1:
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="linkstrength-rank"
        ) as pool:
            futures = [
                pool.submit(_score_source, graph, source, targets, max_length, alpha, beta)
                for source, targets in by_source.items()
            ]
            scored = [p for future in futures for p in future.result()]
    else:
        scored = [
            p
            for source, targets in by_source.items()
            for p in _score_source(graph, source, targets, max_length, alpha, beta)
        ]

    kept = [p for p in scored if p.score > threshold]
    kept.sort(key=lambda p: (-p.score, p.label))
    logger.debug(
        "Ranked %d of %d candidate pairs (threshold=%s, max_length=%d)",
        len(kept),
        len(scored),
        threshold,
        max_length,
    )
    return kept


def count_candidates(graph: HyperlinkGraph) -> int:
    """Number of ordered pairs :func:`rank_predictions` would score."""
    return sum(1 for _ in candidate_pairs(graph))
