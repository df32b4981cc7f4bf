"""PredictionService — strength scores, walk listings and ranked predictions.

Parameters left as None fall back to the [predict] and [walks] settings.
A [predict].max_length left unset means "node count".
"""

from __future__ import annotations

import math
from itertools import islice
from typing import Any

from linkstrength.domain.graph import HyperlinkGraph, NodeNotFoundError
from linkstrength.domain.strength import count_candidates, rank_predictions, strength_breakdown
from linkstrength.domain.walks import MAX_WALK_LENGTH, iter_walks, path_count
from linkstrength.services.base import BaseService
from linkstrength.services.result import ServiceResult
from linkstrength.services.telemetry import trace_span, traced


_OVERFLOW_WARNING = "Walk counts exceed the float range; affected scores are infinite"


def _beta_warning(beta: float) -> list[str]:
    if 0.0 <= beta < 1.0:
        return []
    return [f"beta={beta} is outside [0, 1); longer walks are not decayed"]


def _length_error(op: str, name: str, value: int | None) -> ServiceResult | None:
    """INVALID_ARGUMENT for a caller-supplied length outside ``0..MAX_WALK_LENGTH``."""
    if value is None or 0 <= value <= MAX_WALK_LENGTH:
        return None
    return BaseService._invalid(
        op,
        f"{name} must be between 0 and {MAX_WALK_LENGTH}, got {value}",
        **{name: value},
    )


class PredictionService(BaseService):
    """Scores ordered node pairs and ranks candidate missing hyperlinks."""

    def _resolve_max_length(self, g: HyperlinkGraph, max_length: int | None) -> int:
        if max_length is None:
            max_length = self.settings.predict.max_length
        return g.node_count() if max_length is None else max_length

    # ------------------------------------------------------------------
    # strength: one ordered pair
    # ------------------------------------------------------------------

    @traced
    def strength(
        self,
        source: str,
        target: str,
        *,
        alpha: float | None = None,
        beta: float | None = None,
        max_length: int | None = None,
    ) -> ServiceResult:
        """Score ``source -> target`` and break the score into its terms.

        Identical and already linked pairs are scored too, with a warning.
        A score too large for a float is reported as infinite.
        """
        op = "strength"
        invalid = _length_error(op, "max_length", max_length)
        if invalid:
            return invalid
        g = self._load_graph(op)
        if isinstance(g, ServiceResult):
            return g

        cfg = self.settings.predict
        alpha = cfg.alpha if alpha is None else alpha
        beta = cfg.beta if beta is None else beta
        n = self._resolve_max_length(g, max_length)

        try:
            with trace_span("walk_counts") as span:
                breakdown = strength_breakdown(g, source, target, n, alpha, beta)
                if span:
                    span.note(max_length=n)
        except NodeNotFoundError:
            return self._not_found(op, source)

        warnings = _beta_warning(beta)
        if source == target:
            warnings.append("Source and target are the same node")
        elif g.has_edge(source, target):
            warnings.append(f"Edge {source} -> {target} already exists")
        if not g.has_node(target):
            warnings.append(f"Target '{target}' is not in the graph; no walks reach it")
        if math.isinf(breakdown.score):
            warnings.append(_OVERFLOW_WARNING)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source": source,
                "target": target,
                "score": breakdown.score,
                "adjacency_term": breakdown.adjacency_term,
                "path_term": breakdown.path_term,
                "walk_counts": list(breakdown.walk_counts),
                "params": {"alpha": alpha, "beta": beta, "max_length": n},
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # walks: count and enumerate walks of one length
    # ------------------------------------------------------------------

    @traced
    def walks(
        self,
        source: str,
        target: str,
        *,
        length: int,
        limit: int | None = None,
    ) -> ServiceResult:
        """Count walks of exactly *length* edges and list up to *limit* of them."""
        op = "walks"
        invalid = _length_error(op, "length", length)
        if invalid:
            return invalid
        limit = self.settings.walks.limit if limit is None else limit
        if limit < 1:
            return self._invalid(op, f"limit must be at least 1, got {limit}", limit=limit)

        g = self._load_graph(op)
        if isinstance(g, ServiceResult):
            return g

        try:
            count = path_count(g, source, target, length)
            with trace_span("enumerate") as span:
                listed = [list(w) for w in islice(iter_walks(g, source, target, length), limit)]
                if span:
                    span.note(listed=len(listed))
        except NodeNotFoundError:
            return self._not_found(op, source)

        warnings: list[str] = []
        truncated = count > len(listed)
        if truncated:
            warnings.append(f"Showing {len(listed)} of {count} walks (limit={limit})")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source": source,
                "target": target,
                "length": length,
                "count": count,
                "truncated": truncated,
                "walks": listed,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # rank: all candidate missing edges
    # ------------------------------------------------------------------

    @traced
    def rank(
        self,
        *,
        alpha: float | None = None,
        beta: float | None = None,
        max_length: int | None = None,
        threshold: float | None = None,
        top: int | None = None,
        workers: int | None = None,
    ) -> ServiceResult:
        """Rank candidate missing edges whose strength exceeds the threshold.

        Args:
            alpha: Out-degree weight (default: [predict].alpha).
            beta: Walk decay (default: [predict].beta).
            max_length: Longest walk counted (default: node count).
            threshold: Exclusive minimum score (default: alpha + beta).
            top: Maximum number of predictions returned (default: all).
            workers: Threads scoring sources concurrently.
        """
        op = "rank"
        cfg = self.settings.predict
        alpha = cfg.alpha if alpha is None else alpha
        beta = cfg.beta if beta is None else beta
        threshold = cfg.threshold if threshold is None else threshold
        workers = cfg.workers if workers is None else workers
        if top is not None and top < 1:
            return self._invalid(op, f"top must be at least 1, got {top}", top=top)
        if workers < 1:
            return self._invalid(op, f"workers must be at least 1, got {workers}", workers=workers)
        invalid = _length_error(op, "max_length", max_length)
        if invalid:
            return invalid

        g = self._load_graph(op)
        if isinstance(g, ServiceResult):
            return g
        n = self._resolve_max_length(g, max_length)
        effective_threshold = alpha + beta if threshold is None else threshold

        with trace_span("score_candidates") as span:
            predictions = rank_predictions(
                g,
                alpha=alpha,
                beta=beta,
                max_length=n,
                threshold=effective_threshold,
                workers=workers,
            )
            if span:
                span.note(nodes=g.node_count(), kept=len(predictions))

        total = len(predictions)
        warnings = _beta_warning(beta)
        if any(math.isinf(p.score) for p in predictions):
            warnings.append(_OVERFLOW_WARNING)
        if top is not None:
            predictions = predictions[:top]
        items: list[dict[str, Any]] = [
            {
                "source": p.source,
                "target": p.target,
                "label": p.label,
                "score": p.score,
            }
            for p in predictions
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(items),
                "total": total,
                "candidates": count_candidates(g),
                "params": {
                    "alpha": alpha,
                    "beta": beta,
                    "max_length": n,
                    "threshold": effective_threshold,
                },
                "items": items,
            },
            warnings=warnings,
        )
