"""Graph elements and cascade result models.

All models are frozen.  ``CascadeResult`` is computed fresh per query and
never persisted; nodes and edges live as long as the graph that owns them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from infracascade.domain.types import AlertPriority, EdgeType, ImpactLevel, NodeType

# --- Graph elements -------------------------------------------------------


class InfrastructureNode(BaseModel):
    """A cable, pipeline, port, chokepoint or country.

    Attributes:
        id: Type-prefixed unique id (``cable:marea``, ``country:US``).
        coordinates: ``(lon, lat)`` when known.
    """

    model_config = {"frozen": True}

    id: str
    type: NodeType
    name: str
    coordinates: tuple[float, float] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class DependencyEdge(BaseModel):
    """Directed dependency from an asset to something that relies on it.

    Attributes:
        source: Id of the asset whose disruption propagates.
        target: Id of the dependent node.
        strength: How much the target depends on the source (0-1).
        redundancy: Fraction of the impact alternatives can absorb (0-1).
    """

    model_config = {"frozen": True}

    source: str
    target: str
    type: EdgeType
    strength: float = Field(ge=0.0, le=1.0)
    redundancy: float = Field(default=0.0, ge=0.0, le=1.0)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def effective_strength(self) -> float:
        """``strength * (1 - redundancy)``: impact left after rerouting."""
        return self.strength * (1 - self.redundancy)


# --- Cascade results ------------------------------------------------------


class CascadeAffectedNode(BaseModel):
    """A node reached by the cascade, with the chain that explains it."""

    model_config = {"frozen": True}

    node: InfrastructureNode
    impact_level: ImpactLevel
    impact_strength: float
    path_length: int
    dependency_chain: list[str]
    redundancy_available: bool
    estimated_recovery: str | None = None


class CascadeCountryImpact(BaseModel):
    """Per-country summary of a cascade."""

    model_config = {"frozen": True}

    country: str
    country_name: str
    impact_level: ImpactLevel
    affected_capacity: float


class RedundantRoute(BaseModel):
    """An alternative cable serving countries the disrupted cable served."""

    model_config = {"frozen": True}

    id: str
    name: str
    capacity_share: float


class CascadeResult(BaseModel):
    """Everything one disruption query produces."""

    model_config = {"frozen": True}

    source: InfrastructureNode
    disruption_level: float
    affected_nodes: list[CascadeAffectedNode] = Field(default_factory=list)
    countries_affected: list[CascadeCountryImpact] = Field(default_factory=list)
    redundancies: list[RedundantRoute] = Field(default_factory=list)


class GraphStats(BaseModel):
    """Node and edge counts for the current graph."""

    model_config = {"frozen": True}

    nodes: int
    edges: int
    cables: int
    pipelines: int
    ports: int
    chokepoints: int
    countries: int


class CascadeAlert(BaseModel):
    """Condensed, prioritised view of a cascade for alert feeds."""

    model_config = {"frozen": True}

    source_id: str
    source_name: str
    source_type: NodeType
    countries_affected: int
    highest_impact: ImpactLevel
    priority: AlertPriority
    countries: list[str] = Field(default_factory=list)
    location: dict[str, float] | None = None
