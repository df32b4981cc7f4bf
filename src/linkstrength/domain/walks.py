"""Walk counting — exact counts of directed walks of bounded length.

A walk may revisit nodes; each distinct sequence of edges counts once.
Counting expands a frontier one step at a time and carries the number of
walks reaching each frontier node, so the cost is
``O(max_length * (V + E))`` instead of ``O(out_degree ** length)`` for
naive enumeration.  ``max_length = node_count()`` is therefore always safe
to count.

Enumerating the walks themselves (:func:`iter_walks`) is inherently
exponential and must be consumed with a limit.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from linkstrength.domain.graph import HyperlinkGraph

type Walk = tuple[str, ...]


# Longest walk length a caller may ask for explicitly.  The default length,
# the node count, is bounded by the graph itself and is not subject to it.
MAX_WALK_LENGTH = 10_000


def _check_length(length: int, *, name: str = "length") -> None:
    if length < 0:
        msg = f"{name} must be non-negative, got {length}"
        raise ValueError(msg)


def walk_count_table(
    graph: HyperlinkGraph,
    source: str,
    max_length: int,
) -> dict[str, list[int]]:
    """Count walks from *source* to every reachable node, by length.

    Returns a mapping ``node -> counts`` where ``counts[i]`` is the number of
    walks of exactly ``i + 1`` edges from *source* to ``node``.  Rows stop at
    the last length that reaches the node, so they can be shorter than
    *max_length*; missing entries are zero.  Nodes never reached within
    *max_length* steps are absent from the mapping.

    Raises:
        NodeNotFoundError: If *source* is not in the graph.
        ValueError: If *max_length* is negative.
    """
    _check_length(max_length, name="max_length")
    frontier: dict[str, int] = {source: 1}
    # Validates source even when max_length == 0.
    graph.successors(source)

    table: dict[str, list[int]] = {}
    for step in range(max_length):
        reached: Counter[str] = Counter()
        for node, multiplicity in frontier.items():
            for succ in graph.successors(node):
                reached[succ] += multiplicity
        if not reached:
            break
        for node, count in reached.items():
            row = table.setdefault(node, [])
            row.extend([0] * (step - len(row)))
            row.append(count)
        frontier = reached
    return table


def walk_counts(
    graph: HyperlinkGraph,
    source: str,
    target: str,
    max_length: int,
) -> list[int]:
    """Walk counts from *source* to *target* for lengths ``1..max_length``."""
    row = walk_count_table(graph, source, max_length).get(target, [])
    return row + [0] * (max_length - len(row))


def path_count(graph: HyperlinkGraph, source: str, target: str, length: int) -> int:
    """Number of distinct directed walks of exactly *length* edges.

    ``length == 0`` counts nothing: the search starts one edge away from
    *source*, so even ``source == target`` yields 0.
    """
    _check_length(length)
    if length == 0:
        graph.successors(source)
        return 0
    return walk_counts(graph, source, target, length)[-1]


def _distances_to(graph: HyperlinkGraph, target: str) -> dict[str, int]:
    """Shortest number of edges from each node to *target*."""
    return dict(nx.single_source_shortest_path_length(graph.reversed_view(), target))


def iter_walks(
    graph: HyperlinkGraph,
    source: str,
    target: str,
    length: int,
) -> Iterator[Walk]:
    """Yield every walk of exactly *length* edges from *source* to *target*.

    Each walk is the tuple of visited nodes, ``length + 1`` long.  Walks are
    produced depth-first in successor order from an explicit worklist, so
    stack depth never grows with *length*.  Branches that cannot reach
    *target* in the steps left are skipped.
    """
    _check_length(length)
    graph.successors(source)
    if length == 0 or target not in graph:
        return

    remaining_to_target = _distances_to(graph, target)
    stack: list[Walk] = [(source,)]
    while stack:
        walk = stack.pop()
        steps_left = length - (len(walk) - 1)
        if steps_left == 0:
            if walk[-1] == target:
                yield walk
            continue
        # Reverse push so successors pop in insertion order.
        for succ in reversed(graph.successors(walk[-1])):
            distance = remaining_to_target.get(succ)
            if distance is None or distance > steps_left - 1:
                continue
            stack.append((*walk, succ))
