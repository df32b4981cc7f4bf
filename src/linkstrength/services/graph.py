"""GraphService — read-only inspection of the hyperlink graph."""

from __future__ import annotations

from typing import Any

from linkstrength.domain.graph import NodeNotFoundError
from linkstrength.services.base import BaseService
from linkstrength.services.result import ServiceResult
from linkstrength.services.telemetry import traced


class GraphService(BaseService):
    """Handles adjacency listings and graph statistics."""

    @traced
    def show(self) -> ServiceResult:
        """List every node with its successors, in node order."""
        g = self._load_graph("show")
        if isinstance(g, ServiceResult):
            return g

        items: list[dict[str, Any]] = []
        for node in g.nodes():
            successors = g.successors(node)
            items.append(
                {
                    "id": node,
                    "successors": list(successors),
                    "out_degree": len(successors),
                }
            )
        return ServiceResult(
            ok=True,
            op="show",
            data={
                "count": len(items),
                "edge_count": g.edge_count(),
                "items": items,
            },
        )

    @traced
    def stats(self) -> ServiceResult:
        """Summarize graph size and out-degree distribution."""
        g = self._load_graph("stats")
        if isinstance(g, ServiceResult):
            return g

        degrees = [g.out_degree(n) for n in g.nodes()]
        warnings: list[str] = []
        if not degrees:
            warnings.append("Graph is empty; declare edges in [graph] or pass --edges")
        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "node_count": g.node_count(),
                "edge_count": g.edge_count(),
                "max_out_degree": max(degrees, default=0),
                "sinks": sum(1 for d in degrees if d == 0),
                "candidate_pairs": g.node_count() * (g.node_count() - 1)
                - sum(1 for s, t in g.edges() if s != t),
            },
            warnings=warnings,
        )

    @traced
    def successors(self, node: str) -> ServiceResult:
        """Direct out-neighbors of *node*."""
        op = "successors"
        g = self._load_graph(op)
        if isinstance(g, ServiceResult):
            return g
        try:
            succ = g.successors(node)
        except NodeNotFoundError:
            return self._not_found(op, node)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source_id": node,
                "count": len(succ),
                "items": [{"id": s} for s in succ],
            },
        )
