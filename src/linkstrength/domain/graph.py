"""HyperlinkGraph — the in-memory directed graph of pages and hyperlinks.

Backed by a NetworkX DiGraph, whose adjacency dicts keep insertion order,
so node order is first-appearance order and each successor sequence is
edge-insertion order.  Edge totals are kept as a running counter so both
counts stay O(1).

Adjacency lookups on an absent node raise :class:`NodeNotFoundError`.
After :meth:`HyperlinkGraph.freeze` the graph is read-only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import networkx as nx

logger = logging.getLogger(__name__)


class NodeNotFoundError(KeyError):
    """Raised when an adjacency lookup names a node that is not in the graph."""

    def __init__(self, node: str) -> None:
        super().__init__(node)
        self.node = node

    def __str__(self) -> str:
        return f"Node '{self.node}' not found in graph"


class GraphFrozenError(RuntimeError):
    """Raised when a frozen graph is mutated."""


class HyperlinkGraph:
    """Directed, unweighted graph with unique nodes and no parallel edges.

    Inserts are total: adding an existing node or edge is a no-op.
    Query results are tuples, so callers can never reach internal state.
    """

    def __init__(self) -> None:
        self._graph: nx.DiGraph = nx.DiGraph()
        self._edge_count = 0
        self._frozen = False

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[str, str]],
        nodes: Iterable[str] = (),
    ) -> HyperlinkGraph:
        """Build a graph from node labels and ``(source, target)`` pairs.

        Nodes are inserted before edges, so isolated nodes keep their
        position in node order.
        """
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for source, target in edges:
            graph.add_edge(source, target)
        return graph

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_node(self, name: str) -> None:
        self._check_mutable()
        if name in self._graph:
            return
        self._graph.add_node(name)

    def add_edge(self, source: str, target: str) -> None:
        """Add ``source -> target``, creating missing endpoints.

        Re-adding an existing edge leaves the graph and its counts unchanged.
        """
        self._check_mutable()
        if self.has_edge(source, target):
            return
        # Source first so first-appearance order matches the edge declaration.
        self.add_node(source)
        self.add_node(target)
        self._graph.add_edge(source, target)
        self._edge_count += 1

    def freeze(self) -> None:
        """Enter the read-only phase. Idempotent."""
        if self._frozen:
            return
        nx.freeze(self._graph)
        self._frozen = True
        logger.debug(
            "Graph frozen: %d nodes, %d edges",
            self.node_count(),
            self.edge_count(),
        )

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Graph is frozen; no nodes or edges can be added"
            raise GraphFrozenError(msg)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_node(self, name: str) -> bool:
        return name in self._graph

    def has_edge(self, source: str, target: str) -> bool:
        if not self.has_node(source) or not self.has_node(target):
            return False
        return bool(self._graph.has_edge(source, target))

    def nodes(self) -> tuple[str, ...]:
        """All nodes in first-insertion order."""
        return tuple(self._graph)

    def successors(self, node: str) -> tuple[str, ...]:
        """Direct out-neighbors of *node* in edge-insertion order.

        Raises:
            NodeNotFoundError: If *node* is not in the graph.
        """
        if node not in self._graph:
            raise NodeNotFoundError(node)
        return tuple(self._graph.successors(node))

    def out_degree(self, node: str) -> int:
        if node not in self._graph:
            raise NodeNotFoundError(node)
        return int(self._graph.out_degree(node))

    def edges(self) -> list[tuple[str, str]]:
        """All edges grouped by source (node order), targets in insertion order."""
        return [(source, target) for source, target in self._graph.edges()]

    def node_count(self) -> int:
        return int(self._graph.number_of_nodes())

    def edge_count(self) -> int:
        return self._edge_count

    def reversed_view(self) -> nx.DiGraph:
        """Read-only reversed view of the backing graph (for reachability)."""
        return self._graph.reverse(copy=False)

    def __contains__(self, name: object) -> bool:
        return name in self._graph

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes())

    def __len__(self) -> int:
        return self.node_count()

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"HyperlinkGraph(nodes={self.node_count()}, edges={self.edge_count()}{state})"
