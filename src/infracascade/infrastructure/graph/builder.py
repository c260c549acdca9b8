"""GraphBuilder: synthesize the dependency graph from reference catalogs.

Node order: cables, pipelines, ports, chokepoints, then the countries that
cables and pipelines reference.  Edge order: cables, pipelines, ports,
chokepoints.  Countries first referenced by ports or chokepoint tables are
created on demand, so no edge ever dangles.

Every weight comes from :mod:`infracascade.domain.policy`.  A malformed
record (unmappable country, missing coordinates) is skipped and recorded in
:attr:`GraphBuilder.skipped`; it never aborts the build.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from infracascade.domain import policy
from infracascade.domain.catalogs import Cable, Chokepoint, Pipeline, Port, ReferenceCatalog
from infracascade.domain.countries import country_name, is_country_code, normalize_country_code
from infracascade.domain.geo import haversine_km
from infracascade.domain.models import DependencyEdge, InfrastructureNode
from infracascade.domain.types import EdgeType, NodeType, node_id
from infracascade.infrastructure.graph.model import DependencyGraph

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SkippedRecord:
    """A catalog entry (or part of one) left out of the graph."""

    catalog: str
    record_id: str
    reason: str

    def __str__(self) -> str:
        return f"{self.catalog}:{self.record_id}: {self.reason}"


class GraphBuilder:
    """Builds a :class:`DependencyGraph` from a :class:`ReferenceCatalog`."""

    def __init__(
        self,
        catalog: ReferenceCatalog,
        *,
        chokepoint_radius_km: float = policy.CHOKEPOINT_RADIUS_KM,
    ) -> None:
        self._catalog = catalog
        self._radius_km = chokepoint_radius_km
        self.skipped: list[SkippedRecord] = []

    def build(self) -> DependencyGraph:
        self.skipped = []
        graph = DependencyGraph()

        for cable in self._catalog.cables:
            graph.add_node(self._cable_node(cable))
        for pipeline in self._catalog.pipelines:
            graph.add_node(self._pipeline_node(pipeline))
        for port in self._catalog.ports:
            graph.add_node(self._port_node(port))
        for chokepoint in self._catalog.chokepoints:
            graph.add_node(self._chokepoint_node(chokepoint))
        self._add_referenced_countries(graph)

        for cable in self._catalog.cables:
            self._guarded("cables", cable.id, self._cable_edges, graph, cable)
        for pipeline in self._catalog.pipelines:
            self._guarded("pipelines", pipeline.id, self._pipeline_edges, graph, pipeline)
        for port in self._catalog.ports:
            self._guarded("ports", port.id, self._port_edges, graph, port)
        for chokepoint in self._catalog.chokepoints:
            self._guarded("chokepoints", chokepoint.id, self._chokepoint_edges, graph, chokepoint)

        logger.debug(
            "graph.built",
            nodes=len(graph.nodes),
            edges=len(graph.edges),
            skipped=len(self.skipped),
        )
        return graph

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _skip(self, catalog: str, record_id: str, reason: str) -> None:
        record = SkippedRecord(catalog, record_id, reason)
        self.skipped.append(record)
        logger.warning("catalog.record_skipped", catalog=catalog, record=record_id, reason=reason)

    def _guarded(
        self,
        catalog: str,
        record_id: str,
        step: Callable[[DependencyGraph, Any], None],
        graph: DependencyGraph,
        record: Any,
    ) -> None:
        """Run one record's edge synthesis; a failure skips only that record."""
        try:
            step(graph, record)
        except ValueError as exc:
            self._skip(catalog, record_id, str(exc))

    def _country_code(self, catalog: str, record_id: str, raw: str) -> str | None:
        code = normalize_country_code(raw)
        if not is_country_code(code):
            self._skip(catalog, record_id, f"unmappable country '{raw}'")
            return None
        return code

    def _ensure_country(self, graph: DependencyGraph, code: str, *, fallback: str = "") -> str:
        cid = node_id(NodeType.COUNTRY, code)
        if cid not in graph:
            graph.add_node(
                InfrastructureNode(
                    id=cid,
                    type=NodeType.COUNTRY,
                    name=country_name(code, self._catalog.country_names, fallback=fallback),
                    metadata={"code": code},
                )
            )
        return cid

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    @staticmethod
    def _cable_node(cable: Cable) -> InfrastructureNode:
        first = cable.points[0] if cable.points else None
        return InfrastructureNode(
            id=node_id(NodeType.CABLE, cable.id),
            type=NodeType.CABLE,
            name=cable.name,
            coordinates=(first[0], first[1]) if first else None,
            metadata={
                "capacity_tbps": cable.capacity_tbps,
                "rfs_year": cable.rfs_year,
                "owners": list(cable.owners),
                "landing_points": [lp.country for lp in cable.landing_points],
            },
        )

    @staticmethod
    def _pipeline_node(pipeline: Pipeline) -> InfrastructureNode:
        first = pipeline.points[0] if pipeline.points else None
        return InfrastructureNode(
            id=node_id(NodeType.PIPELINE, pipeline.id),
            type=NodeType.PIPELINE,
            name=pipeline.name,
            coordinates=(first[0], first[1]) if first else None,
            metadata={
                "type": pipeline.type,
                "status": pipeline.status,
                "capacity": pipeline.capacity,
                "operator": pipeline.operator,
                "countries": list(pipeline.countries),
            },
        )

    @staticmethod
    def _port_node(port: Port) -> InfrastructureNode:
        coords = None
        if port.lat is not None and port.lon is not None:
            coords = (port.lon, port.lat)
        return InfrastructureNode(
            id=node_id(NodeType.PORT, port.id),
            type=NodeType.PORT,
            name=port.name,
            coordinates=coords,
            metadata={"country": port.country, "type": port.type, "rank": port.rank},
        )

    @staticmethod
    def _chokepoint_node(chokepoint: Chokepoint) -> InfrastructureNode:
        coords = None
        if chokepoint.lat is not None and chokepoint.lon is not None:
            coords = (chokepoint.lon, chokepoint.lat)
        return InfrastructureNode(
            id=node_id(NodeType.CHOKEPOINT, chokepoint.id),
            type=NodeType.CHOKEPOINT,
            name=chokepoint.name,
            coordinates=coords,
            metadata={"description": chokepoint.description},
        )

    def _add_referenced_countries(self, graph: DependencyGraph) -> None:
        """Create country nodes for every valid code cables and pipelines mention.

        Invalid codes are not reported here; the edge pass reports them.
        """
        codes: dict[str, None] = {}
        for cable in self._catalog.cables:
            for served in cable.countries_served:
                codes[normalize_country_code(served.country)] = None
            for landing in cable.landing_points:
                codes[normalize_country_code(landing.country)] = None
        for pipeline in self._catalog.pipelines:
            for raw in pipeline.countries:
                codes[normalize_country_code(raw)] = None
        for code in codes:
            if is_country_code(code):
                self._ensure_country(graph, code)

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def _cable_edges(self, graph: DependencyGraph, cable: Cable) -> None:
        cable_id = node_id(NodeType.CABLE, cable.id)

        for served in cable.countries_served:
            code = self._country_code("cables", cable.id, served.country)
            if code is None:
                continue
            graph.add_edge(
                DependencyEdge(
                    source=cable_id,
                    target=self._ensure_country(graph, code),
                    type=EdgeType.SERVES,
                    strength=served.capacity_share,
                    redundancy=(
                        policy.CABLE_REDUNDANT_SERVES_REDUNDANCY if served.is_redundant else 0.0
                    ),
                    metadata={
                        "capacity_share": served.capacity_share,
                        "estimated_impact": (
                            "Medium - redundancy available"
                            if served.is_redundant
                            else "High - limited redundancy"
                        ),
                    },
                )
            )

        for landing in cable.landing_points:
            code = self._country_code("cables", cable.id, landing.country)
            if code is None:
                continue
            graph.add_edge(
                DependencyEdge(
                    source=cable_id,
                    target=self._ensure_country(graph, code),
                    type=EdgeType.LANDS_AT,
                    strength=policy.CABLE_LANDING_STRENGTH,
                    redundancy=policy.CABLE_LANDING_REDUNDANCY,
                )
            )

    def _pipeline_edges(self, graph: DependencyGraph, pipeline: Pipeline) -> None:
        pipeline_id = node_id(NodeType.PIPELINE, pipeline.id)
        for raw in pipeline.countries:
            code = self._country_code("pipelines", pipeline.id, raw)
            if code is None:
                continue
            graph.add_edge(
                DependencyEdge(
                    source=pipeline_id,
                    target=self._ensure_country(graph, code),
                    type=EdgeType.SERVES,
                    strength=policy.PIPELINE_SERVES_STRENGTH,
                    redundancy=policy.PIPELINE_SERVES_REDUNDANCY,
                )
            )

    def _port_edges(self, graph: DependencyGraph, port: Port) -> None:
        port_id = node_id(NodeType.PORT, port.id)
        if not port.has_coordinates:
            self._skip("ports", port.id, "missing coordinates; no chokepoint access edges")

        code = self._country_code("ports", port.id, port.country)
        if code is not None:
            importance = policy.port_importance(port.type, port.rank)
            graph.add_edge(
                DependencyEdge(
                    source=port_id,
                    target=self._ensure_country(graph, code, fallback=port.country),
                    type=EdgeType.SERVES,
                    strength=importance,
                    redundancy=policy.port_redundancy(port.rank),
                    metadata={
                        "port_type": port.type,
                        "estimated_impact": (
                            "Critical port for country"
                            if importance > policy.CRITICAL_PORT_THRESHOLD
                            else "Regional port"
                        ),
                    },
                )
            )

        for spill in policy.trade_routes_for_port(port.id):
            graph.add_edge(
                DependencyEdge(
                    source=port_id,
                    target=self._ensure_country(graph, spill.country),
                    type=EdgeType.TRADE_ROUTE,
                    strength=spill.strength,
                    redundancy=spill.redundancy,
                    metadata={"relationship": spill.reason},
                )
            )

    def _chokepoint_edges(self, graph: DependencyGraph, chokepoint: Chokepoint) -> None:
        chokepoint_id = node_id(NodeType.CHOKEPOINT, chokepoint.id)

        if chokepoint.lat is None or chokepoint.lon is None:
            self._skip("chokepoints", chokepoint.id, "missing coordinates; no port access edges")
        else:
            for port in self._catalog.ports:
                if port.lat is None or port.lon is None:
                    continue
                distance = haversine_km(chokepoint.lat, chokepoint.lon, port.lat, port.lon)
                if distance >= self._radius_km:
                    continue
                graph.add_edge(
                    DependencyEdge(
                        source=chokepoint_id,
                        target=node_id(NodeType.PORT, port.id),
                        type=EdgeType.CONTROLS_ACCESS,
                        strength=policy.CONTROLS_ACCESS_STRENGTH,
                        redundancy=policy.CONTROLS_ACCESS_REDUNDANCY,
                        metadata={
                            "relationship": "Access controlled by chokepoint",
                            "distance_km": round(distance, 1),
                        },
                    )
                )

        for dep in policy.dependencies_for_chokepoint(chokepoint.id):
            graph.add_edge(
                DependencyEdge(
                    source=chokepoint_id,
                    target=self._ensure_country(graph, dep.country),
                    type=EdgeType.TRADE_DEPENDENCY,
                    strength=dep.strength,
                    redundancy=dep.redundancy,
                    metadata={"relationship": dep.reason},
                )
            )
