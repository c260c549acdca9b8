"""CascadeEngine: the in-process query surface.

Ties the cached graph to the traversal, aggregation and redundancy steps.
Queries are read-only against the shared graph and safe to run
concurrently once it is built.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from infracascade.cascade.impact import aggregate_countries
from infracascade.cascade.propagator import DEFAULT_MAX_DEPTH, DEFAULT_MIN_IMPACT, propagate
from infracascade.cascade.redundancy import DEFAULT_MAX_ALTERNATIVES, find_redundancies
from infracascade.domain.models import CascadeResult, GraphStats
from infracascade.infrastructure.graph.engine import GraphEngine

if TYPE_CHECKING:
    from infracascade.config.models import CascadeConfig
    from infracascade.domain.catalogs import Cable, Chokepoint, Pipeline, Port, ReferenceCatalog
    from infracascade.infrastructure.graph.model import DependencyGraph

logger = structlog.get_logger(__name__)


def validate_disruption_level(disruption_level: float) -> float:
    """Return *disruption_level* if it lies in (0, 1], else raise ValueError."""
    if not (isinstance(disruption_level, int | float) and math.isfinite(disruption_level)):
        msg = f"disruption_level must be a finite number, got {disruption_level!r}"
        raise ValueError(msg)
    if not 0.0 < disruption_level <= 1.0:
        msg = f"disruption_level must be in (0, 1], got {disruption_level}"
        raise ValueError(msg)
    return float(disruption_level)


class CascadeEngine:
    """Answers cascade, statistics and lookup queries over one graph cache."""

    def __init__(
        self,
        graphs: GraphEngine | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        min_impact: float = DEFAULT_MIN_IMPACT,
        max_redundancies: int = DEFAULT_MAX_ALTERNATIVES,
    ) -> None:
        self.graphs = graphs or GraphEngine()
        self.max_depth = max_depth
        self.min_impact = min_impact
        self.max_redundancies = max_redundancies

    @classmethod
    def from_config(cls, config: CascadeConfig, graphs: GraphEngine | None = None) -> CascadeEngine:
        return cls(
            graphs,
            max_depth=config.max_depth,
            min_impact=config.min_impact,
            max_redundancies=config.max_redundancies,
        )

    @property
    def graph(self) -> DependencyGraph:
        return self.graphs.graph

    @property
    def catalog(self) -> ReferenceCatalog:
        return self.graphs.catalog

    def calculate_cascade(
        self, source_id: str, disruption_level: float = 1.0
    ) -> CascadeResult | None:
        """Propagate a disruption of *source_id* through the graph.

        Returns None when *source_id* is not a node of the graph.

        Raises:
            ValueError: If *disruption_level* is outside (0, 1].
        """
        level = validate_disruption_level(disruption_level)
        graph = self.graph
        source = graph.node(source_id)
        if source is None:
            logger.debug("cascade.unknown_source", source_id=source_id)
            return None

        propagation = propagate(
            graph,
            source_id,
            level,
            max_depth=self.max_depth,
            min_impact=self.min_impact,
        )
        assert propagation is not None
        affected = propagation.affected_nodes
        countries = aggregate_countries(graph, self.catalog, source_id, affected)
        redundancies = find_redundancies(self.catalog, source_id, limit=self.max_redundancies)

        logger.debug(
            "cascade.computed",
            source_id=source_id,
            disruption_level=level,
            affected=len(affected),
            countries=len(countries),
            pruned=propagation.pruned,
        )
        return CascadeResult(
            source=source,
            disruption_level=level,
            affected_nodes=affected,
            countries_affected=countries,
            redundancies=redundancies,
        )

    def graph_stats(self) -> GraphStats:
        return self.graph.stats()

    def clear_graph_cache(self) -> None:
        self.graphs.invalidate()

    # --- Asset lookup -----------------------------------------------------

    def get_cable(self, cable_id: str) -> Cable | None:
        return self.catalog.cable(cable_id)

    def get_pipeline(self, pipeline_id: str) -> Pipeline | None:
        return self.catalog.pipeline(pipeline_id)

    def get_port(self, port_id: str) -> Port | None:
        return self.catalog.port(port_id)

    def get_chokepoint(self, chokepoint_id: str) -> Chokepoint | None:
        return self.catalog.chokepoint(chokepoint_id)
