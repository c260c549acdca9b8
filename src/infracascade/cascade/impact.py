"""Per-country impact aggregation.

Affected capacity for a country is resolved in three steps:

1. Cable source: the cable's own declared capacity share for the country,
   straight from reference data (no decay).
2. Direct edge(s) source -> country: the strongest ``strength*(1-redundancy)``
   over the parallel edges.
3. Otherwise: the product of ``strength*(1-redundancy)`` along the recorded
   dependency chain; a hop with no matching edge makes the capacity 0.
"""

from __future__ import annotations

from collections.abc import Iterable

from infracascade.domain.catalogs import ReferenceCatalog
from infracascade.domain.models import CascadeAffectedNode, CascadeCountryImpact
from infracascade.domain.types import NodeType, split_node_id
from infracascade.infrastructure.graph.model import DependencyGraph


def chain_capacity(graph: DependencyGraph, chain: list[str]) -> float:
    """Multiply effective strength along *chain*, using the first edge per hop."""
    if len(chain) < 2:
        return 0.0
    capacity = 1.0
    for source, target in zip(chain, chain[1:], strict=False):
        edges = graph.edges_between(source, target)
        if not edges:
            return 0.0
        capacity *= edges[0].effective_strength
    return capacity


def country_capacity(
    graph: DependencyGraph,
    catalog: ReferenceCatalog,
    source_id: str,
    country_code: str,
    dependency_chain: list[str],
) -> float:
    """Fraction of *country_code*'s capacity lost when *source_id* is disrupted."""
    source_type, source_key = split_node_id(source_id)

    if source_type == NodeType.CABLE:
        cable = catalog.cable(source_key)
        return cable.capacity_share_for(country_code) if cable else 0.0

    direct = graph.edges_between(source_id, f"{NodeType.COUNTRY}:{country_code}")
    if direct:
        return max(edge.effective_strength for edge in direct)

    return chain_capacity(graph, dependency_chain)


def aggregate_countries(
    graph: DependencyGraph,
    catalog: ReferenceCatalog,
    source_id: str,
    affected: Iterable[CascadeAffectedNode],
) -> list[CascadeCountryImpact]:
    """Country impacts sorted by severity tier, then by descending capacity."""
    impacts: list[CascadeCountryImpact] = []
    for item in affected:
        if item.node.type != NodeType.COUNTRY:
            continue
        code = str(item.node.metadata.get("code") or split_node_id(item.node.id)[1])
        impacts.append(
            CascadeCountryImpact(
                country=code,
                country_name=item.node.name,
                impact_level=item.impact_level,
                affected_capacity=country_capacity(
                    graph, catalog, source_id, code, item.dependency_chain
                ),
            )
        )
    impacts.sort(key=lambda c: (c.impact_level.rank, -c.affected_capacity))
    return impacts
