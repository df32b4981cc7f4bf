"""BaseService — common foundation for linkstrength services.

Every service receives a :class:`GraphEngine` at construction time and
reads the frozen graph through it.  Loading failures of the graph sources
become ``INVALID_EDGE_LIST`` results.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from linkstrength.infrastructure.edgelist import EdgeListError
from linkstrength.services.result import ServiceResult

if TYPE_CHECKING:
    from linkstrength.config.settings import LinkSettings
    from linkstrength.domain.graph import HyperlinkGraph
    from linkstrength.infrastructure.graph.engine import GraphEngine

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class PredictionService(BaseService):
            def rank(self, ...) -> ServiceResult:
                g = self._load_graph("rank")
                if isinstance(g, ServiceResult):
                    return g
                ...
    """

    def __init__(self, engine: GraphEngine) -> None:
        self._engine = engine

    @property
    def settings(self) -> LinkSettings:
        return self._engine.settings

    def _load_graph(self, op: str) -> HyperlinkGraph | ServiceResult:
        """Return the graph, or an error result if its sources are broken."""
        try:
            return self._engine.graph
        except EdgeListError as exc:
            logger.debug("Graph sources failed to load: %s", exc)
            return ServiceResult.failure(
                op,
                "INVALID_EDGE_LIST",
                str(exc),
                origin=exc.origin,
                line=exc.line,
            )

    @staticmethod
    def _not_found(op: str, node: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            "NOT_FOUND",
            f"Node '{node}' not found in graph",
            node=node,
        )

    @staticmethod
    def _invalid(op: str, message: str, **detail: object) -> ServiceResult:
        return ServiceResult.failure(op, "INVALID_ARGUMENT", message, **detail)
