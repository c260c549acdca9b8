"""Bounded-depth, decayed impact propagation.

Breadth-first from the disrupted node over outgoing edges.  Each traversed
edge carries ``strength * disruption_level * (1 - redundancy)`` of impact
to its target.  The first edge to reach a target claims it; BFS order means
the shortest chain wins.  A claiming edge below ``min_impact`` is pruned: its
target is neither recorded nor reachable through any later edge, and nothing
propagates past it.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from infracascade.domain.models import CascadeAffectedNode, DependencyEdge
from infracascade.domain.types import ImpactLevel
from infracascade.infrastructure.graph.model import DependencyGraph

DEFAULT_MAX_DEPTH = 3
DEFAULT_MIN_IMPACT = 0.05
REDUNDANCY_AVAILABLE_THRESHOLD = 0.3


def categorize_impact(strength: float) -> ImpactLevel:
    """Map an impact strength onto a severity tier.

    Examples:
        >>> categorize_impact(0.64)
        <ImpactLevel.HIGH: 'high'>
        >>> categorize_impact(0.2)
        <ImpactLevel.LOW: 'low'>
    """
    if strength > 0.8:
        return ImpactLevel.CRITICAL
    if strength > 0.5:
        return ImpactLevel.HIGH
    if strength > 0.2:
        return ImpactLevel.MEDIUM
    return ImpactLevel.LOW


def edge_impact(edge: DependencyEdge, disruption_level: float) -> float:
    """Impact an edge transmits at the given disruption level."""
    return edge.strength * disruption_level * (1 - edge.redundancy)


@dataclass
class Propagation:
    """Traversal outcome.

    ``visited`` holds every node some edge has claimed (pruned or not);
    ``recorded`` is the source plus the nodes in ``affected``.
    """

    source_id: str
    affected: dict[str, CascadeAffectedNode] = field(default_factory=dict)
    visited: set[str] = field(default_factory=set)
    recorded: set[str] = field(default_factory=set)
    pruned: int = 0

    @property
    def affected_nodes(self) -> list[CascadeAffectedNode]:
        return list(self.affected.values())


def propagate(
    graph: DependencyGraph,
    source_id: str,
    disruption_level: float = 1.0,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    min_impact: float = DEFAULT_MIN_IMPACT,
) -> Propagation | None:
    """Run the cascade traversal from *source_id*.

    Returns None when *source_id* is not a node of *graph*.
    """
    if source_id not in graph:
        return None

    result = Propagation(source_id=source_id, visited={source_id}, recorded={source_id})
    queue: deque[tuple[str, int, list[str]]] = deque([(source_id, 0, [source_id])])

    while queue:
        current, depth, path = queue.popleft()
        if depth >= max_depth:
            continue

        for edge in graph.outgoing(current):
            if edge.target in result.visited:
                continue

            result.visited.add(edge.target)
            impact = edge_impact(edge, disruption_level)
            target = graph.node(edge.target)
            if target is None or impact < min_impact:
                result.pruned += 1
                continue

            result.recorded.add(edge.target)
            chain = [*path, edge.target]
            estimated = edge.metadata.get("estimated_impact")
            result.affected[edge.target] = CascadeAffectedNode(
                node=target,
                impact_level=categorize_impact(impact),
                impact_strength=impact,
                path_length=depth + 1,
                dependency_chain=chain,
                redundancy_available=edge.redundancy > REDUNDANCY_AVAILABLE_THRESHOLD,
                estimated_recovery=str(estimated) if estimated is not None else None,
            )
            queue.append((edge.target, depth + 1, chain))

    return result
