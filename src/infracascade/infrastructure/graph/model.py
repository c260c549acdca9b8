"""DependencyGraph: typed nodes plus insertion-ordered edge indexes.

``outgoing`` and ``incoming`` keep edges in the order they were added, which
is what makes cascade traversal deterministic.  A NetworkX MultiDiGraph
mirrors the same structure for structural queries (acyclicity, reachable
sets); parallel edges between one node pair are kept, not merged.

INVARIANT: every edge endpoint exists in ``nodes``.
"""

from __future__ import annotations

from collections import Counter

import networkx as nx

from infracascade.domain.models import DependencyEdge, GraphStats, InfrastructureNode
from infracascade.domain.types import NodeType


class DependencyGraph:
    """Adjacency-indexed dependency graph."""

    def __init__(self) -> None:
        self._nodes: dict[str, InfrastructureNode] = {}
        self._edges: list[DependencyEdge] = []
        self._outgoing: dict[str, list[DependencyEdge]] = {}
        self._incoming: dict[str, list[DependencyEdge]] = {}
        self._nx: nx.MultiDiGraph[str] = nx.MultiDiGraph()

    # ------------------------------------------------------------------
    # Mutation (builder only)
    # ------------------------------------------------------------------

    def add_node(self, node: InfrastructureNode) -> None:
        """Insert or replace a node; replacing keeps its original position."""
        self._nodes[node.id] = node
        self._nx.add_node(node.id, type=str(node.type))

    def add_edge(self, edge: DependencyEdge) -> None:
        """Append an edge to the edge list and both indexes.

        Raises:
            ValueError: If either endpoint is not a node of the graph.
        """
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._nodes:
                msg = f"Edge {edge.source} -> {edge.target} references unknown node '{endpoint}'"
                raise ValueError(msg)
        self._edges.append(edge)
        self._outgoing.setdefault(edge.source, []).append(edge)
        self._incoming.setdefault(edge.target, []).append(edge)
        self._nx.add_edge(edge.source, edge.target, type=str(edge.type))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> dict[str, InfrastructureNode]:
        return self._nodes

    @property
    def edges(self) -> list[DependencyEdge]:
        return self._edges

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, node_id: str) -> InfrastructureNode | None:
        return self._nodes.get(node_id)

    def outgoing(self, node_id: str) -> list[DependencyEdge]:
        """Edges leaving *node_id*, in insertion order (empty if none)."""
        return self._outgoing.get(node_id, [])

    def incoming(self, node_id: str) -> list[DependencyEdge]:
        """Edges arriving at *node_id*, in insertion order (empty if none)."""
        return self._incoming.get(node_id, [])

    def edges_between(self, source: str, target: str) -> list[DependencyEdge]:
        """All parallel edges from *source* to *target*."""
        return [e for e in self.outgoing(source) if e.target == target]

    def nodes_of_type(self, node_type: NodeType) -> list[InfrastructureNode]:
        return [n for n in self._nodes.values() if n.type == node_type]

    # ------------------------------------------------------------------
    # Structural queries
    # ------------------------------------------------------------------

    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self._nx)

    def reachable(self, node_id: str, *, max_depth: int | None = None) -> dict[str, int]:
        """Hop distance to every node reachable from *node_id*, ignoring weights.

        The source itself is excluded.  Returns an empty dict for unknown ids.
        """
        if node_id not in self._nodes:
            return {}
        lengths = nx.single_source_shortest_path_length(self._nx, node_id, cutoff=max_depth)
        return {n: d for n, d in lengths.items() if n != node_id}

    def stats(self) -> GraphStats:
        counts = Counter(node.type for node in self._nodes.values())
        return GraphStats(
            nodes=len(self._nodes),
            edges=len(self._edges),
            cables=counts[NodeType.CABLE],
            pipelines=counts[NodeType.PIPELINE],
            ports=counts[NodeType.PORT],
            chokepoints=counts[NodeType.CHOKEPOINT],
            countries=counts[NodeType.COUNTRY],
        )
