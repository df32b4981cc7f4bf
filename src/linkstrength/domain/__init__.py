"""Domain layer — the hyperlink graph and the strength estimator.

This layer depends only on stdlib and NetworkX.
It must never import from services, infrastructure, commands, or config.
"""

from linkstrength.domain.graph import GraphFrozenError, HyperlinkGraph, NodeNotFoundError
from linkstrength.domain.strength import (
    Prediction,
    StrengthBreakdown,
    candidate_pairs,
    rank_predictions,
    strength,
    strength_breakdown,
)
from linkstrength.domain.walks import (
    MAX_WALK_LENGTH,
    iter_walks,
    path_count,
    walk_count_table,
    walk_counts,
)

__all__ = [
    "MAX_WALK_LENGTH",
    "GraphFrozenError",
    "HyperlinkGraph",
    "NodeNotFoundError",
    "Prediction",
    "StrengthBreakdown",
    "candidate_pairs",
    "iter_walks",
    "path_count",
    "rank_predictions",
    "strength",
    "strength_breakdown",
    "walk_count_table",
    "walk_counts",
]
