"""Tests for the strength estimator and the ranking protocol."""

from __future__ import annotations

import math
from fractions import Fraction

import pytest

from linkstrength.domain.graph import HyperlinkGraph, NodeNotFoundError
from linkstrength.domain.strength import (
    Prediction,
    candidate_pairs,
    count_candidates,
    rank_predictions,
    score_from_counts,
    strength,
    strength_breakdown,
)
from linkstrength.domain.walks import walk_counts


class TestStrength:
    def test_chain_scenario(self, chain_graph: HyperlinkGraph) -> None:
        # 0.1 * out_degree(A) + 0.5**2 * one walk of length 2
        assert strength(chain_graph, "A", "C", 3, 0.1, 0.5) == pytest.approx(0.35)

    def test_sample_graph_pair(self, sample_graph: HyperlinkGraph) -> None:
        # out_degree(twitter) = 3, two walks of length 2 to umd.edu
        score = strength(sample_graph, "twitter.com", "umd.edu", 2, 0.1, 0.5)
        assert score == pytest.approx(0.1 * 3 + 0.25 * 2)

    def test_zero_max_length_is_adjacency_only(self, diamond_graph: HyperlinkGraph) -> None:
        assert strength(diamond_graph, "A", "D", 0, 0.3, 0.9) == pytest.approx(0.6)

    def test_adjacency_term_independent_of_target(self, diamond_graph: HyperlinkGraph) -> None:
        a = strength_breakdown(diamond_graph, "A", "D", 4, 0.2, 0.5)
        b = strength_breakdown(diamond_graph, "A", "B", 4, 0.2, 0.5)
        assert a.adjacency_term == b.adjacency_term == pytest.approx(0.4)

    def test_self_pair_is_scored(self, cycle_graph: HyperlinkGraph) -> None:
        # A->B->A: out_degree 1, one walk of length 2
        assert strength(cycle_graph, "A", "A", 2, 0.1, 0.5) == pytest.approx(0.35)

    def test_existing_edge_is_scored(self, chain_graph: HyperlinkGraph) -> None:
        assert strength(chain_graph, "A", "B", 3, 0.1, 0.5) == pytest.approx(0.1 + 0.5)

    def test_absent_source_raises(self, chain_graph: HyperlinkGraph) -> None:
        with pytest.raises(NodeNotFoundError):
            strength(chain_graph, "nowhere", "A", 3, 0.1, 0.5)

    def test_absent_target_scores_adjacency(self, chain_graph: HyperlinkGraph) -> None:
        assert strength(chain_graph, "A", "nowhere", 3, 0.1, 0.5) == pytest.approx(0.1)

    def test_negative_max_length_rejected(self, chain_graph: HyperlinkGraph) -> None:
        with pytest.raises(ValueError):
            strength(chain_graph, "A", "C", -1, 0.1, 0.5)

    def test_breakdown_matches_strength(self, sample_graph: HyperlinkGraph) -> None:
        n = sample_graph.node_count()
        breakdown = strength_breakdown(sample_graph, "en.wikipedia.org", "usnews.com", n, 0.4, 0.6)
        assert breakdown.score == pytest.approx(
            strength(sample_graph, "en.wikipedia.org", "usnews.com", n, 0.4, 0.6)
        )
        assert len(breakdown.walk_counts) == n

    def test_path_term_non_decreasing_in_beta(self, sample_graph: HyperlinkGraph) -> None:
        n = sample_graph.node_count()
        betas = [0.0, 0.25, 0.5, 0.75, 0.95]
        for source in sample_graph.nodes():
            for target in sample_graph.nodes():
                terms = [
                    strength_breakdown(sample_graph, source, target, n, 0.1, beta).path_term
                    for beta in betas
                ]
                assert terms == sorted(terms)

    def test_score_from_counts(self) -> None:
        assert score_from_counts(2, [1, 0, 3], 0.5, 0.5) == pytest.approx(1 + 0.5 + 3 * 0.125)


class TestCandidatePairs:
    def test_excludes_self_and_existing(self, chain_graph: HyperlinkGraph) -> None:
        pairs = list(candidate_pairs(chain_graph))
        assert pairs == [("A", "C"), ("B", "A"), ("C", "A"), ("C", "B")]

    def test_count(self, sample_graph: HyperlinkGraph) -> None:
        assert count_candidates(sample_graph) == 11 * 10 - 21


class TestRankPredictions:
    def test_default_threshold_drops_weak_pairs(self, chain_graph: HyperlinkGraph) -> None:
        # best candidate A->C scores 0.35, below alpha + beta = 0.6
        assert rank_predictions(chain_graph, alpha=0.1, beta=0.5, max_length=3) == []

    def test_threshold_is_exclusive(self, chain_graph: HyperlinkGraph) -> None:
        exact = strength(chain_graph, "A", "C", 3, 0.1, 0.5)
        ranked = rank_predictions(chain_graph, alpha=0.1, beta=0.5, max_length=3, threshold=exact)
        assert ranked == []

    def test_only_strong_pairs_kept(self, chain_graph: HyperlinkGraph) -> None:
        ranked = rank_predictions(chain_graph, alpha=0.1, beta=0.5, max_length=3, threshold=0.2)
        assert [p.label for p in ranked] == ["A -> C"]
        assert ranked[0].score == pytest.approx(0.35)

    def test_ties_preserved_and_ordered_by_label(self) -> None:
        g = HyperlinkGraph.from_edges([("hub", "x"), ("hub", "y")])
        ranked = rank_predictions(g, alpha=0.1, beta=0.5, threshold=-1.0)
        assert [p.label for p in ranked] == ["x -> hub", "x -> y", "y -> hub", "y -> x"]
        assert {p.score for p in ranked} == {0.0}

    @pytest.mark.parametrize(("alpha", "beta"), [(0.1, 0.5), (0.4, 0.6), (0.05, 0.95)])
    def test_sample_graph_protocol(
        self, sample_graph: HyperlinkGraph, alpha: float, beta: float
    ) -> None:
        ranked = rank_predictions(sample_graph, alpha=alpha, beta=beta)
        n = sample_graph.node_count()
        assert ranked
        scores = [p.score for p in ranked]
        assert scores == sorted(scores, reverse=True)
        for p in ranked:
            assert p.source != p.target
            assert not sample_graph.has_edge(p.source, p.target)
            assert p.score > alpha + beta
            expected = strength(sample_graph, p.source, p.target, n, alpha, beta)
            assert p.score == pytest.approx(expected)

    def test_sample_graph_top_prediction(self, sample_graph: HyperlinkGraph) -> None:
        ranked = rank_predictions(sample_graph, alpha=0.1, beta=0.5, max_length=2, threshold=0.0)
        best = ranked[0]
        # baltimoresun.com: out-degree 3, three two-step walks to umd.edu
        assert best.score == pytest.approx(0.3 + 3 * 0.25)
        assert best.label == "baltimoresun.com -> umd.edu"
        assert ranked[1].label == "twitter.com -> umd.edu"
        assert ranked[1].score == pytest.approx(0.8)

    def test_default_max_length_is_node_count(self, sample_graph: HyperlinkGraph) -> None:
        n = sample_graph.node_count()
        assert rank_predictions(sample_graph, alpha=0.05, beta=0.95) == rank_predictions(
            sample_graph, alpha=0.05, beta=0.95, max_length=n
        )

    def test_parallel_matches_serial(self, sample_graph: HyperlinkGraph) -> None:
        sample_graph.freeze()
        serial = rank_predictions(sample_graph, alpha=0.4, beta=0.6, threshold=0.0)
        parallel = rank_predictions(sample_graph, alpha=0.4, beta=0.6, threshold=0.0, workers=4)
        assert parallel == serial

    def test_parallel_requires_frozen_graph(self, sample_graph: HyperlinkGraph) -> None:
        with pytest.raises(ValueError, match="frozen"):
            rank_predictions(sample_graph, alpha=0.1, beta=0.5, workers=2)

    def test_workers_must_be_positive(self, chain_graph: HyperlinkGraph) -> None:
        with pytest.raises(ValueError, match="workers"):
            rank_predictions(chain_graph, alpha=0.1, beta=0.5, workers=0)

    def test_negative_max_length_rejected(self, chain_graph: HyperlinkGraph) -> None:
        with pytest.raises(ValueError, match="max_length"):
            rank_predictions(chain_graph, alpha=0.1, beta=0.5, max_length=-1)

    def test_empty_graph(self) -> None:
        assert rank_predictions(HyperlinkGraph(), alpha=0.1, beta=0.5) == []


def _dense_graph(size: int, *, self_loops: bool = False) -> HyperlinkGraph:
    """Complete digraph on ``n0.com .. n{size-1}.com`` minus ``n0.com -> n1.com``."""
    labels = [f"n{i}.com" for i in range(size)]
    return HyperlinkGraph.from_edges(
        (s, t)
        for s in labels
        for t in labels
        if (s != t or self_loops) and (s, t) != ("n0.com", "n1.com")
    )


class TestLargeWalkCounts:
    def test_node_count_length_on_dense_graph(self) -> None:
        g = _dense_graph(160)
        score = strength(g, "n0.com", "n1.com", g.node_count(), 0.1, 0.5)
        # walk counts pass 1e350 here; the decayed sum stays near 1e302
        assert math.isfinite(score)
        assert score > 1e299

    def test_counts_beyond_float_range_stay_exact_when_decayed(self) -> None:
        g = _dense_graph(4, self_loops=True)
        counts = walk_counts(g, "n0.com", "n1.com", 800)
        assert counts[-1] > 10**400
        exact = sum(Fraction(c, 2**length) for length, c in enumerate(counts, start=1))
        score = strength(g, "n0.com", "n1.com", 800, 0.1, 0.5)
        assert math.isfinite(score)
        assert score == pytest.approx(0.3 + float(exact))

    def test_undecayed_huge_counts_saturate(self) -> None:
        g = _dense_graph(4, self_loops=True)
        assert strength(g, "n0.com", "n1.com", 800, 0.1, 1.0) == math.inf

    def test_rank_keeps_saturated_scores(self) -> None:
        g = _dense_graph(4, self_loops=True)
        ranked = rank_predictions(g, alpha=0.1, beta=1.0, max_length=800)
        assert [p.label for p in ranked] == ["n0.com -> n1.com"]
        assert ranked[0].score == math.inf

    def test_rank_with_decay_on_huge_counts(self) -> None:
        g = _dense_graph(4, self_loops=True)
        ranked = rank_predictions(g, alpha=0.1, beta=0.5, max_length=800)
        assert len(ranked) == 1
        assert math.isfinite(ranked[0].score)


class TestPrediction:
    def test_label(self) -> None:
        assert Prediction("a.com", "b.org", 0.5).label == "a.com -> b.org"

    def test_frozen(self) -> None:
        p = Prediction("a", "b", 1.0)
        with pytest.raises(AttributeError):
            p.score = 2.0  # type: ignore[misc]
