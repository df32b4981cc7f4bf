"""GraphEngine — lazy-built, frozen HyperlinkGraph from configured sources.

Rebuilt per invocation, no cross-invocation cache.
Commands that don't need the graph never build it.
Sources are applied in order: [graph].nodes, [graph].edges, each of
[graph].edge_files, then files passed with --edges.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from linkstrength.domain.graph import HyperlinkGraph
from linkstrength.infrastructure.edgelist import read_edge_list

if TYPE_CHECKING:
    from linkstrength.config.settings import LinkSettings

logger = logging.getLogger(__name__)


class GraphEngine:
    """Lazy-loading graph engine backed by config and edge-list files."""

    def __init__(self, settings: LinkSettings) -> None:
        self.settings = settings
        self._graph: HyperlinkGraph | None = None

    @classmethod
    def from_graph(cls, graph: HyperlinkGraph, settings: LinkSettings) -> GraphEngine:
        """Wrap a graph built in code. The graph is frozen on wrap."""
        engine = cls(settings)
        graph.freeze()
        engine._graph = graph
        return engine

    @property
    def graph(self) -> HyperlinkGraph:
        """Return the graph, building it from sources on first access.

        Raises:
            EdgeListError: If an edge-list file is unreadable or malformed.
        """
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def invalidate(self) -> None:
        """Drop the built graph, forcing rebuild on next access."""
        self._graph = None

    def edge_files(self) -> list[Path]:
        """Edge-list files in load order, relative ones resolved to the workspace."""
        root = self.settings.workspace_root
        files = [Path(p) for p in self.settings.graph.edge_files]
        files.extend(self.settings.extra_edge_files)
        return [p if p.is_absolute() else root / p for p in files]

    def _build(self) -> HyperlinkGraph:
        cfg = self.settings.graph
        g = HyperlinkGraph.from_edges(cfg.edges, nodes=cfg.nodes)
        for path in self.edge_files():
            declared = read_edge_list(path)
            for node in declared.nodes:
                g.add_node(node)
            for source, target in declared.edges:
                g.add_edge(source, target)
            logger.debug(
                "Loaded %s: %d nodes, %d edges declared",
                path,
                len(declared.nodes),
                len(declared.edges),
            )
        g.freeze()
        return g
