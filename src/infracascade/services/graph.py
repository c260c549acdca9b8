"""GraphService: inspection of the dependency graph.

Read-only views over the cached graph: aggregate counts and a single
node with its incident edges and the catalog record behind it.
"""

from __future__ import annotations

from typing import Any

from infracascade.domain.types import NodeType, split_node_id
from infracascade.services.base import BaseService
from infracascade.services.result import ErrorCode, ServiceResult
from infracascade.services.telemetry import trace_span, traced


class GraphService(BaseService):
    """Graph statistics and node inspection."""

    @traced
    def stats(self) -> ServiceResult:
        """Node and edge counts for the current graph."""
        graph, failed = self._graph_or_error("graph_stats")
        if failed is not None:
            return failed
        assert graph is not None

        with trace_span("count"):
            stats = graph.stats()
        data: dict[str, Any] = stats.model_dump()
        data["acyclic"] = graph.is_acyclic()
        data["builds"] = self._engine.graphs.build_count
        return ServiceResult(
            ok=True, op="graph_stats", data=data, warnings=self._build_warnings()
        )

    @traced
    def node(self, node_id: str, *, depth: int | None = None) -> ServiceResult:
        """Describe one node: its edges, reach and source record.

        Args:
            node_id: Prefixed node id.
            depth: Hop limit for the reach count (defaults to the cascade depth).
        """
        op = "node"
        graph, failed = self._graph_or_error(op)
        if failed is not None:
            return failed
        assert graph is not None

        node = graph.node(node_id)
        if node is None:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"Node '{node_id}' not found in graph", node_id=node_id
            )

        hops = depth if depth is not None else self._engine.max_depth
        if hops < 1:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_ARGUMENT, f"depth must be >= 1, got {hops}", depth=hops
            )
        with trace_span("reach") as span:
            reach = graph.reachable(node_id, max_depth=hops)
            if span:
                span.annotate("reachable", len(reach))

        data: dict[str, Any] = {
            "node": node.model_dump(mode="json"),
            "outgoing": [e.model_dump(mode="json") for e in graph.outgoing(node_id)],
            "incoming": [e.model_dump(mode="json") for e in graph.incoming(node_id)],
            "reachable": len(reach),
            "depth": hops,
            "asset": self._asset(node.type, node_id),
        }
        return ServiceResult(ok=True, op=op, data=data)

    def _asset(self, node_type: NodeType, node_id: str) -> dict[str, Any] | None:
        _, key = split_node_id(node_id)
        lookup = {
            NodeType.CABLE: self._engine.get_cable,
            NodeType.PIPELINE: self._engine.get_pipeline,
            NodeType.PORT: self._engine.get_port,
            NodeType.CHOKEPOINT: self._engine.get_chokepoint,
        }.get(node_type)
        if lookup is None:
            return None
        record = lookup(key)
        return record.model_dump(mode="json") if record is not None else None
